"""hostscope CLI - Main entry point."""

import json
import logging
import logging.handlers
from pathlib import Path

import click
from rich.console import Console

from hostscope import __version__
from hostscope.collectors.system_info import CollectionError, SystemInfoCollector
from hostscope.config import ConfigError, LoggingConfig, load_config
from hostscope.utils.commands import terminate_running

from .render import print_plain

logger = logging.getLogger(__name__)

console = Console()

LOG_DIR = Path.home() / ".hostscope" / "logs"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def _setup_logging(config: LoggingConfig, verbose: bool, to_console: bool) -> None:
    """Configure the rotating log file and, on request, stderr output."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else config.level)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            LOG_DIR / "hostscope.log",
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(file_handler)
    except OSError as e:
        console.print(f"[yellow]Logging to file disabled:[/yellow] {e}")

    # Console output would corrupt the full-screen view
    if verbose and to_console:
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(stream)


@click.command()
@click.version_option(version=__version__, prog_name="hostscope")
@click.option("--plain", is_flag=True, help="Print once instead of opening the full-screen view")
@click.option("--json", "as_json", is_flag=True, help="Print the snapshot as JSON")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file",
)
@click.option("--timeout", type=click.FloatRange(min=0.1), help="Seconds allowed per external command")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def cli(plain, as_json, config_path, timeout, verbose):
    """hostscope - a one-shot "about this machine" view."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    _setup_logging(config.logging, verbose, to_console=plain or as_json)
    command_timeout = timeout or config.probes.command_timeout

    try:
        info = SystemInfoCollector(command_timeout=command_timeout).collect()
    except KeyboardInterrupt:
        terminate_running()
        raise
    except CollectionError as e:
        logger.error(f"System information collection failed: {e}")
        console.print(f"[red]Could not collect system information:[/red] {e}")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(info.to_dict(), indent=2))
    elif plain:
        print_plain(info, console)
    else:
        from hostscope.tui.app import launch_tui

        launch_tui(info)


if __name__ == "__main__":
    cli()
