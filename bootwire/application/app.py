"""
Bootable application wrapper.

An ``App`` holds a boot function and runs it against a fresh ``Context``
each time it is booted, after seeding the context with initial values::

    app = bootwire(boot)

    if __name__ == '__main__':
        asyncio.run(app.boot())

Tests boot the same app with overrides, which are seen as already-set keys
so the matching bootstrap is skipped::

    ctx = await app.boot({'config': {'port': port}})
"""

import logging
import time
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional

from .context import Context
from ..infrastructure.config.models import WiringConfig
from ..infrastructure.wiring.loader import WiringLoader

logger = logging.getLogger(__name__)

BootFunction = Callable[..., Any]

RESERVED_KEYS: FrozenSet[str] = frozenset((
    'set', 'provide', 'run', 'wire', 'get', 'context',
    'discover', 'wire_glob', 'wait_for',
))


def strip_reserved(overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``overrides`` without the context operation names."""
    stripped = {}
    for key, value in overrides.items():
        if key in RESERVED_KEYS:
            logger.warning(f"Ignoring initial context key '{key}': reserved name")
            continue
        stripped[key] = value
    return stripped


def _copy_value(value: Any) -> Any:
    """Copy mappings and lists recursively, keep other objects by reference."""
    if isinstance(value, Mapping):
        return {key: _copy_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_copy_value(item) for item in value]
    return value


def merge_overrides(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two mappings, values from ``override`` win.

    Mappings and lists are copied into the result, so mutating the merged
    values never changes ``base`` or ``override``.
    """
    result = {key: _copy_value(value) for key, value in base.items()}

    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = merge_overrides(result[key], value)
        else:
            result[key] = _copy_value(value)

    return result


class App:
    """A bootable application."""

    def __init__(self, boot_fn: BootFunction, config: Optional[WiringConfig] = None) -> None:
        self._boot_fn = boot_fn
        self._config = config or WiringConfig()

    @property
    def boot_fn(self) -> BootFunction:
        return self._boot_fn

    @property
    def config(self) -> WiringConfig:
        return self._config

    def create_context(self) -> Context:
        """Create an empty context using the configured wiring entrypoint."""
        return Context(loader=WiringLoader(self._config.entrypoint))

    async def boot(self, *initial_contexts: Mapping[str, Any]) -> Context:
        """
        Boot the application.

        Args:
            *initial_contexts: Mappings merged left to right into the context
                before the boot function runs. Names of context operations
                (``set``, ``provide``, ``run`` ...) are dropped.

        Returns:
            The context, once the boot function has completed
        """
        context = self.create_context()

        initial: Dict[str, Any] = {}
        for overrides in initial_contexts:
            initial = merge_overrides(initial, strip_reserved(overrides))

        for key, value in initial.items():
            context[key] = value

        name = getattr(self._boot_fn, '__qualname__', repr(self._boot_fn))
        logger.info(f"Booting {name} with {len(initial)} initial key(s)")
        started = time.perf_counter()

        try:
            await context.run(self._boot_fn)
        except Exception as e:
            logger.error(f"Boot of {name} failed: {e}")
            raise

        logger.info(
            f"Boot of {name} completed in {time.perf_counter() - started:.3f}s "
            f"with {len(context)} key(s)")
        return context


def bootwire(boot_fn: BootFunction, config: Optional[WiringConfig] = None) -> App:
    """
    Build an ``App`` that runs ``boot_fn`` on boot.

    Args:
        boot_fn: Function receiving the context, sync or async
        config: Wiring settings (entrypoint name of wiring files)

    Returns:
        A bootable ``App``
    """
    return App(boot_fn, config)
