"""
Loading of wiring files by path.

A wiring file is a Python module defining an entrypoint callable (``wire`` by
default) that receives the context. Modules are executed once per process and
cached by resolved path; the entrypoint itself is invoked once per context.
"""

import hashlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Dict, Union

from ...core.exceptions import WiringFileError

logger = logging.getLogger(__name__)

DEFAULT_ENTRYPOINT = "wire"

_module_cache: Dict[Path, ModuleType] = {}


class WiringLoader:
    """Loads wiring modules from files and returns their entrypoint."""

    def __init__(self, entrypoint: str = DEFAULT_ENTRYPOINT) -> None:
        self._entrypoint = entrypoint

    @property
    def entrypoint(self) -> str:
        return self._entrypoint

    def load(self, path: Union[str, Path]) -> Callable[..., Any]:
        """
        Load the wiring file at ``path`` and return its entrypoint.

        Args:
            path: Path of the wiring file

        Returns:
            The callable exported under the configured entrypoint name

        Raises:
            WiringFileError: If the file is missing, cannot be imported as a
                module or does not define a callable entrypoint
        """
        module = self.load_module(path)

        fn = getattr(module, self._entrypoint, None)
        if fn is None:
            raise WiringFileError(
                str(path), f"module does not define '{self._entrypoint}'")
        if not callable(fn):
            raise WiringFileError(
                str(path), f"'{self._entrypoint}' is not callable")

        return fn  # type: ignore[no-any-return]

    def load_module(self, path: Union[str, Path]) -> ModuleType:
        """Execute the module at ``path``, or return it from the cache."""
        resolved = Path(path).resolve()

        cached = _module_cache.get(resolved)
        if cached is not None:
            return cached

        if not resolved.is_file():
            raise WiringFileError(str(path), "file not found")

        module_name = self._module_name(resolved)
        spec = importlib.util.spec_from_file_location(module_name, resolved)
        if not spec or not spec.loader:
            raise WiringFileError(str(path), "not a loadable Python module")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise

        _module_cache[resolved] = module
        logger.debug(f"Loaded wiring module {module_name} from {resolved}")
        return module

    @staticmethod
    def _module_name(path: Path) -> str:
        digest = hashlib.sha1(str(path).encode('utf-8')).hexdigest()[:16]
        return f"_bootwire_wiring_{digest}"
