"""
Configuration models.

Every section has usable defaults, so an empty configuration file (or none at
all) yields a valid ``BootwireConfig``.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ...core.exceptions import ConfigurationError

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_directory: str = "logs"
    max_file_size: str = "10 MB"
    backup_count: int = 5
    console_enabled: bool = True
    file_enabled: bool = False


@dataclass
class WiringConfig:
    """Wiring file discovery settings."""
    patterns: List[str] = field(default_factory=lambda: ["**/*.wire.py"])
    entrypoint: str = "wire"
    boot_timeout: Optional[float] = None


@dataclass
class BootwireConfig:
    """Main configuration."""

    name: str = "bootwire"
    debug: bool = False
    environment: str = "production"

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    wiring: WiringConfig = field(default_factory=WiringConfig)

    # Initial values seeded into the context before boot
    context: Dict[str, Any] = field(default_factory=dict)

    config_file_path: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.logging.level = self.logging.level.upper()
        if self.logging.level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Log level must be one of {', '.join(LOG_LEVELS)}, got {self.logging.level}")

        if self.logging.backup_count < 0:
            raise ConfigurationError(
                f"Log backup count must not be negative, got {self.logging.backup_count}")

        if not self.wiring.entrypoint.isidentifier():
            raise ConfigurationError(
                f"Wiring entrypoint must be a valid identifier, got {self.wiring.entrypoint!r}")

        timeout = self.wiring.boot_timeout
        if timeout is not None and timeout <= 0:
            raise ConfigurationError(f"Boot timeout must be positive, got {timeout}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BootwireConfig':
        """Create configuration from dictionary."""
        try:
            logging_config = LoggingConfig(**(data.get('logging') or {}))
            wiring_config = WiringConfig(**(data.get('wiring') or {}))
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration section: {e}") from e

        context = data.get('context') or {}
        if not isinstance(context, dict):
            raise ConfigurationError(
                f"'context' must be a mapping, got {type(context).__name__}")

        return cls(
            name=data.get('name', 'bootwire'),
            debug=data.get('debug', False),
            environment=data.get('environment', 'production'),
            logging=logging_config,
            wiring=wiring_config,
            context=context,
            config_file_path=data.get('config_file_path'),
        )
