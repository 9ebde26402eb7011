"""
File system and module collaborators used by ``Context.discover``.
"""

from .discovery import caller_file, resolve_patterns
from .loader import DEFAULT_ENTRYPOINT, WiringLoader

__all__ = [
    "caller_file",
    "resolve_patterns",
    "DEFAULT_ENTRYPOINT",
    "WiringLoader",
]
