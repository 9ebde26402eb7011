"""
Single-assignment signal used to wake coroutines waiting for a context key.

Unlike ``asyncio.Future`` a ``Deferred`` can be created and resolved from
synchronous code with no running event loop. Loop futures are only created
for waiters, at the moment they start waiting.
"""

import asyncio
from enum import Enum, auto
from typing import Any, Generator, Generic, List, Optional, TypeVar

T = TypeVar('T')


class DeferredState(Enum):
    """Settlement state of a deferred signal."""
    PENDING = auto()
    FULFILLED = auto()
    FAILED = auto()


class Deferred(Generic[T]):
    """
    A signal that is settled at most once.

    ``resolve`` and ``reject`` are no-ops once the signal is settled, so the
    first settlement is final. Awaiting a fulfilled deferred returns its value
    without suspending; awaiting a failed one raises its exception.
    """

    def __init__(self) -> None:
        self._state = DeferredState.PENDING
        self._value: Optional[T] = None
        self._exception: Optional[BaseException] = None
        self._waiters: List['asyncio.Future[Any]'] = []

    @property
    def state(self) -> DeferredState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state is not DeferredState.PENDING

    @property
    def fulfilled(self) -> bool:
        return self._state is DeferredState.FULFILLED

    @property
    def failed(self) -> bool:
        return self._state is DeferredState.FAILED

    def resolve(self, value: T) -> None:
        """Fulfil the signal with ``value`` and wake every waiter."""
        if self.done:
            return

        self._state = DeferredState.FULFILLED
        self._value = value

        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_result(value)
        self._waiters.clear()

    def reject(self, exception: BaseException) -> None:
        """Mark the signal as failed and raise ``exception`` in every waiter."""
        if self.done:
            return

        self._state = DeferredState.FAILED
        self._exception = exception

        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_exception(exception)
        self._waiters.clear()

    def result(self) -> T:
        """
        Return the fulfilled value.

        Raises:
            asyncio.InvalidStateError: If the signal is still pending
            BaseException: The rejection reason if the signal failed
        """
        if self._state is DeferredState.PENDING:
            raise asyncio.InvalidStateError("Deferred is still pending")
        if self._exception is not None:
            raise self._exception
        return self._value  # type: ignore[return-value]

    async def wait(self) -> T:
        """Suspend until the signal is settled and return its value."""
        if self.done:
            return self.result()

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            return await waiter  # type: ignore[no-any-return]
        finally:
            if waiter in self._waiters:
                self._waiters.remove(waiter)

    def __await__(self) -> Generator[Any, None, T]:
        return self.wait().__await__()

    def __repr__(self) -> str:
        return f"<Deferred {self._state.name.lower()}>"
