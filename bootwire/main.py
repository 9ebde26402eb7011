"""
Command-line interface for bootwire.

Boots an application from a boot file, lists wiring files a discovery would
run, and generates a default configuration file.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml

from .application.app import bootwire
from .application.context import Context
from .core.exceptions import BootTimeoutError, BootwireError
from .core.paths import sort_paths_by_depth
from .infrastructure.config.loader import ConfigLoader
from .infrastructure.config.models import BootwireConfig
from .infrastructure.logging.setup import setup_logging
from .infrastructure.wiring.discovery import resolve_patterns
from .infrastructure.wiring.loader import WiringLoader

cli = typer.Typer(
    name="bootwire",
    help="Boot applications from set-once contexts wired by convention"
)

logger = logging.getLogger(__name__)


def parse_assignments(assignments: List[str]) -> Dict[str, Any]:
    """
    Parse ``key=value`` pairs, values read as YAML scalars.

    Raises:
        typer.BadParameter: If a pair has no ``=``
    """
    values: Dict[str, Any] = {}
    for assignment in assignments:
        key, sep, raw = assignment.partition('=')
        if not sep or not key:
            raise typer.BadParameter(
                f"Expected key=value, got {assignment!r}", param_hint="--set")
        values[key.strip()] = yaml.safe_load(raw) if raw else None
    return values


@cli.command()
def boot(
    boot_file: Path = typer.Argument(..., help="File defining the boot function"),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
    assignments: List[str] = typer.Option(
        [], "--set", "-s", help="Initial context value as key=value"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Boot timeout in seconds"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level"
    ),
) -> None:
    """Boot the application defined in BOOT_FILE."""

    config_loader = ConfigLoader()
    try:
        config = config_loader.load_config(config_file)
    except (BootwireError, FileNotFoundError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    if log_level:
        config.logging.level = log_level.upper()
    if timeout is not None:
        config.wiring.boot_timeout = timeout

    setup_logging(config.logging)

    overrides = parse_assignments(assignments)

    try:
        context = asyncio.run(run_boot(boot_file, config, overrides))
    except KeyboardInterrupt:
        logger.info("Boot interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Boot failed: {e}")
        typer.echo(f"Boot failed: {e}", err=True)
        sys.exit(1)

    for key in sorted(context):
        typer.echo(key)


@cli.command()
def discover(
    directory: Path = typer.Argument(
        Path("."), help="Directory the patterns are relative to"
    ),
    patterns: Optional[List[str]] = typer.Argument(
        None, help="Glob patterns (defaults to the configured wiring patterns)"
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
) -> None:
    """List the wiring files a discovery would run, in run order."""

    config = ConfigLoader().load_config(config_file)

    if not directory.is_dir():
        typer.echo(f"Not a directory: {directory}", err=True)
        sys.exit(1)

    base = directory.resolve()
    matches = sort_paths_by_depth(
        resolve_patterns(base, patterns or config.wiring.patterns))

    for path in matches:
        typer.echo(path.relative_to(base).as_posix())


@cli.command()
def init_config(
    output: str = typer.Option(
        "bootwire.yaml", "--output", "-o", help="Output configuration file"
    ),
    format: str = typer.Option(
        "yaml", "--format", "-f", help="Configuration format (yaml/json)"
    )
) -> None:
    """Generate a default configuration file."""

    config = BootwireConfig()
    config_loader = ConfigLoader()

    try:
        config_loader.save_config(config, output, format)
        typer.echo(f"Default configuration saved to {output}")
    except (BootwireError, OSError) as e:
        typer.echo(f"Error saving configuration: {e}", err=True)
        sys.exit(1)


async def run_boot(boot_file: Path, config: BootwireConfig,
                   overrides: Dict[str, Any]) -> Context:
    """
    Load ``boot_file`` and boot it.

    Args:
        boot_file: File defining the boot function under the configured
            entrypoint name
        config: Configuration; its ``context`` mapping seeds the context
            before ``overrides``
        overrides: Initial context values from the command line

    Returns:
        The booted context

    Raises:
        BootTimeoutError: If ``config.wiring.boot_timeout`` elapses first
    """
    boot_fn = WiringLoader(config.wiring.entrypoint).load(boot_file)
    app = bootwire(boot_fn, config.wiring)

    timeout = config.wiring.boot_timeout
    try:
        return await asyncio.wait_for(app.boot(config.context, overrides), timeout)
    except asyncio.TimeoutError:
        raise BootTimeoutError(timeout or 0.0) from None


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
