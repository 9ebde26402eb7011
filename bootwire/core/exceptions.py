"""
Exception hierarchy for bootwire.

Failures raised by user factories and wiring functions are never wrapped;
they propagate with their original type. The classes below only cover
failures that originate in bootwire itself.
"""


class BootwireError(Exception):
    """Base class for all bootwire errors."""
    pass


class WiringFileError(BootwireError):
    """Raised when a wiring file cannot be loaded or has no callable entrypoint."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot wire {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigurationError(BootwireError, ValueError):
    """Raised when configuration content or an environment override is invalid."""
    pass


class BootTimeoutError(BootwireError):
    """Raised when a boot procedure does not complete within its deadline."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Boot did not complete within {timeout} seconds")
        self.timeout = timeout
