"""
Application context used as dependency container during boot.

The context is passed down through the whole initialization procedure. Boot
code installs singletons (configuration, connections, services) into it with
a set-once rule: the first assignment of a key is permanent, later ``set`` and
``provide`` calls for the same key are silently ignored. This is what lets a
test pre-seed a dependency and skip its real bootstrap.

Values live in a store kept apart from the operations, so a key named ``set``
or ``get`` can never shadow a method.
"""

import asyncio
import inspect
import logging
from pathlib import Path
from typing import (
    Any, Awaitable, Callable, Dict, FrozenSet, Iterator, List, Mapping, Optional,
    Sequence, Set, Union
)

from ..core.deferred import Deferred
from ..core.paths import sort_paths_by_depth
from ..infrastructure.wiring.discovery import caller_file, resolve_patterns
from ..infrastructure.wiring.loader import WiringLoader

logger = logging.getLogger(__name__)

WiringFunction = Callable[..., Any]

_MISSING = object()


def call_with_context(fn: Callable[..., Any], context: 'Context') -> Any:
    """
    Call ``fn`` with the context.

    The context is passed positionally when ``fn`` accepts a positional
    argument. Otherwise it is passed by name to a single required
    keyword-only parameter, and ``fn`` is called with no argument when it
    has none.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return fn(context)

    parameters = list(signature.parameters.values())
    accepts_positional = any(
        param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        )
        for param in parameters
    )
    if accepts_positional:
        return fn(context)

    required_keywords = [
        param.name for param in parameters
        if param.kind is inspect.Parameter.KEYWORD_ONLY
        and param.default is inspect.Parameter.empty
    ]
    if len(required_keywords) == 1:
        return fn(**{required_keywords[0]: context})

    return fn()


class Context(Mapping[str, Any]):
    """
    Set-once key/value container with wiring helpers.

    Reading is done through the mapping interface (``ctx["config"]``,
    ``"config" in ctx``) or with ``get`` for dotted paths. Writing is done
    with ``set`` and ``provide``. ``ctx[key] = value`` is a raw write that
    bypasses the set-once rule; it is meant for seeding initial values.
    """

    def __init__(self, loader: Optional[WiringLoader] = None) -> None:
        self._values: Dict[str, Any] = {}
        self._signals: Dict[str, Deferred[Any]] = {}
        self._loaded_files: Set[Path] = set()
        self._loader = loader or WiringLoader()

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._values[key] = value

        signal = self._signals.get(key)
        if signal is not None:
            signal.resolve(value)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"<Context keys={sorted(self._values)}>"

    @property
    def context(self) -> 'Context':
        """
        The context itself.

        Handy in wiring functions that receive the context and want to hand
        it on unchanged::

            def wire(ctx):
                ctx.set('routes', build_routes(ctx.context))
        """
        return self

    @property
    def loaded_files(self) -> FrozenSet[Path]:
        """Resolved paths of the wiring files already run on this context."""
        return frozenset(self._loaded_files)

    @property
    def loader(self) -> WiringLoader:
        return self._loader

    def set(self, key_or_mapping: Union[str, Mapping[str, Any]], value: Any = _MISSING) -> None:
        """
        Set one or more keys that are not already present.

        ::

            ctx.set('logger', logger)
            ctx.set({'config': config, 'logger': logger})

        Keys that are already present are skipped without error.

        Args:
            key_or_mapping: A key for single assignment or a mapping of keys
                to values for multiple assignment
            value: The value to assign when a single key is given
        """
        if isinstance(key_or_mapping, str):
            if value is _MISSING:
                raise TypeError(
                    f"set() needs a value for key '{key_or_mapping}'")
            items: Mapping[str, Any] = {key_or_mapping: value}
        else:
            items = key_or_mapping

        for key, item in items.items():
            signal = self._signal(key)
            if key in self._values:
                logger.debug(f"Context key '{key}' already set, ignoring new value")
                continue

            self._values[key] = item
            signal.resolve(item)
            logger.debug(f"Context key '{key}' set")

    async def provide(self, key: str, factory: Callable[..., Any]) -> None:
        """
        Assign to ``key`` the result of ``factory`` called with the context.

        If the key is already present the factory is not called at all. The
        factory may be synchronous or return an awaitable; in both cases the
        assignment has happened once this coroutine completes.

        An exception raised by the factory propagates to the caller and the
        key stays unset. Coroutines waiting on the key keep waiting.
        """
        self._signal(key)
        if key in self._values:
            return

        value = call_with_context(factory, self)
        if inspect.isawaitable(value):
            value = await value

        self.set(key, value)

    async def run(self, *fns: WiringFunction) -> None:
        """
        Invoke each function with the context, one after the other.

        Awaitable results are awaited before the next function starts. The
        first failure aborts the sequence and propagates.
        """
        for fn in fns:
            result = call_with_context(fn, self)
            if inspect.isawaitable(result):
                await result

    wire = run

    def discover(self, *patterns: str,
                 relative_to: Union[str, Path, None] = None) -> Awaitable[None]:
        """
        Run every wiring file matching ``patterns``.

        Patterns are resolved relative to the directory of the calling file,
        or of ``relative_to`` when given (a file or a directory). Matches run
        by increasing directory depth, each file at most once for the whole
        lifetime of this context. The calling file is never run by its own
        discovery.

        ::

            async def wire(ctx):
                await ctx.discover('**/*.wire.py')

        Returns:
            An awaitable completing once every matched file, and everything
            it triggered, has completed
        """
        if relative_to is not None:
            target = Path(relative_to).resolve()
            if target.is_dir():
                base_dir, origin = target, None
            else:
                base_dir, origin = target.parent, target
        else:
            frame = inspect.currentframe()
            try:
                origin = caller_file(frame.f_back if frame else None)
            finally:
                del frame
            base_dir = origin.parent if origin is not None else Path.cwd()

        return self._discover(base_dir, origin, patterns)

    wire_glob = discover

    async def wait_for(self, *keys: str) -> 'Context':
        """
        Wait until every key in ``keys`` is present.

        ::

            ctx = await ctx.wait_for('config', 'db')
            repository = TodosRepository(ctx['db'])

        There is no timeout: waiting for a key that is never set never
        completes.

        Returns:
            The context itself
        """
        signals: List[Deferred[Any]] = []
        for key in keys:
            signal = self._signal(key)
            if key in self._values:
                signal.resolve(self._values[key])
            signals.append(signal)

        for signal in signals:
            await signal

        return self

    def get(self, key_path: Union[str, Sequence[Any]], default: Any = None) -> Any:
        """
        Get a value by key or by path.

        ::

            port = ctx.get('config.port', 8080)

        Args:
            key_path: A key, a dotted path ``'key1.key2'`` or a sequence of
                path segments
            default: Returned when any segment is missing

        Returns:
            The value if found, ``default`` otherwise
        """
        if isinstance(key_path, str):
            if key_path in self._values:
                return self._values[key_path]
            segments: Sequence[Any] = key_path.split('.')
        else:
            segments = key_path

        current: Any = self._values
        for segment in segments:
            if isinstance(current, Mapping):
                if segment not in current:
                    return default
                current = current[segment]
            elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
                try:
                    current = current[int(segment)]
                except (ValueError, TypeError, IndexError):
                    return default
            else:
                try:
                    current = getattr(current, str(segment))
                except AttributeError:
                    return default

        return current

    def _signal(self, key: str) -> Deferred[Any]:
        signal = self._signals.get(key)
        if signal is None:
            signal = self._signals[key] = Deferred()
        return signal

    async def _discover(self, base_dir: Path, origin: Optional[Path],
                        patterns: Sequence[str]) -> None:
        if origin is not None:
            self._loaded_files.add(origin)

        matches = sort_paths_by_depth(resolve_patterns(base_dir, patterns))

        pending = []
        for path in matches:
            identity = path.resolve()
            if identity in self._loaded_files:
                logger.debug(f"Skipping already wired file {identity}")
                continue

            self._loaded_files.add(identity)
            pending.append(self._wire_file(identity))

        if not pending:
            return

        logger.debug(f"Wiring {len(pending)} file(s) from {base_dir}")
        await asyncio.gather(*pending)

    async def _wire_file(self, path: Path) -> None:
        logger.debug(f"Wiring {path}")
        try:
            fn = self._loader.load(path)
            await self.run(fn)
        except Exception as e:
            logger.error(f"Failed to wire {path}: {e}")
            raise
