"""
Core building blocks shared by the context and the boot wrapper.

These modules have no knowledge of files, modules or configuration.
"""

from .deferred import Deferred
from .exceptions import BootwireError, BootTimeoutError, ConfigurationError, WiringFileError
from .paths import compare_paths_by_depth, path_depth, sort_paths_by_depth

__all__ = [
    "Deferred",
    "BootwireError",
    "BootTimeoutError",
    "ConfigurationError",
    "WiringFileError",
    "compare_paths_by_depth",
    "path_depth",
    "sort_paths_by_depth",
]
