"""Main CLI entry point."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import click

from ledbridge import __version__

from .commands import effect, index, status, test_pattern

logger = logging.getLogger(__name__)


def get_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Resolve where log records go for the given flags."""
    if log_file:
        return log_file
    if debug:
        # Debug mode: log to current directory
        return Path.cwd() / "ledbridge-debug.log"
    return Path.home() / ".ledbridge" / "logs" / "ledbridge.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
    """
    # Determine log level based on flags
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Override with explicit log level if provided
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = get_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Create rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")


def fail(error: Exception, log_path: Path) -> None:
    """Print a clean error report and exit with status 1."""
    from ledbridge.exceptions import format_error_for_display

    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    click.echo(f"\nFor details, check the log file: {log_path}", err=True)
    sys.exit(1)


@click.group()
@click.pass_context
@click.version_option(version=__version__, prog_name="ledbridge")
@click.option(
    '--url',
    type=str,
    default=None,
    help='LED board WebSocket URL (overrides config file and LED_BOARD_URL)'
)
@click.option(
    '--config', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.ledbridge/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./ledbridge-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    url: Optional[str],
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    LED board bridge - mirror a grid game onto a 16x11 WebSocket LED matrix.

    \b
    Examples:
      # Show resolved settings
      ledbridge status

      # Light the diagnostic pattern for 5 seconds
      ledbridge --url ws://10.0.0.7:8080 test-pattern --duration 5

      # Fire a gameplay effect at cell (3, 2)
      ledbridge effect memory_spark --x 3 --y 2

      # Where is pixel (15, 1) on the strip?
      ledbridge index 15 1
    """
    from ledbridge.exceptions import ConfigurationError, wrap_pydantic_error
    from ledbridge.models import BridgeConfig
    from pydantic import ValidationError

    setup_logging(verbose, debug, log_file, log_level)
    log_path = get_log_path(debug, log_file)

    ctx.ensure_object(dict)
    ctx.obj["log_path"] = log_path

    try:
        config = BridgeConfig.load_or_default(config_path)
        if url:
            try:
                config = BridgeConfig.model_validate({**config.model_dump(), "led_board_url": url})
            except ValidationError as e:
                raise wrap_pydantic_error(e, "--url") from e
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e.technical_message}")
        fail(e, log_path)

    ctx.obj["config"] = config


# Register commands
cli.add_command(status)
cli.add_command(test_pattern)
cli.add_command(effect)
cli.add_command(index)

if __name__ == "__main__":
    cli()
