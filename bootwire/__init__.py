"""
bootwire - Set-once application contexts wired by convention.

Boot code installs configuration, connections and services into a shared
``Context`` where the first assignment of a key wins. Wiring files are found
by glob pattern relative to the caller and run once each, shallow directories
first.
"""

__version__ = "0.1.0"

from .application.app import App, bootwire
from .application.context import Context
from .core.deferred import Deferred
from .core.exceptions import BootTimeoutError, BootwireError, ConfigurationError, WiringFileError
from .core.paths import compare_paths_by_depth

__all__ = [
    "App",
    "Context",
    "Deferred",
    "bootwire",
    "compare_paths_by_depth",
    "BootwireError",
    "BootTimeoutError",
    "ConfigurationError",
    "WiringFileError",
]
