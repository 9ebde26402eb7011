"""
Application layer: the boot context and the bootable application wrapper.
"""

from .app import App, bootwire
from .context import Context

__all__ = [
    "App",
    "Context",
    "bootwire",
]
