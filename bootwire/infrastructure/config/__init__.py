"""
Configuration models and loading.
"""

from .loader import ConfigLoader
from .models import BootwireConfig, LoggingConfig, WiringConfig

__all__ = [
    "ConfigLoader",
    "BootwireConfig",
    "LoggingConfig",
    "WiringConfig",
]
