"""
pocketrocket command line entry point.
"""

import logging
import sys
from typing import Optional

import click

from . import __version__
from .config import Settings
from .core import BootstrapOrchestrator, LifecycleState
from .errors import OperationCancelled, PocketRocketError
from .security import SecurityError
from .utils import install_interrupt_watcher, setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _make_prompter(gui: bool):
    if gui:
        from .ui import QtPrompter
        return QtPrompter()
    from .prompts import ConsolePrompter
    return ConsolePrompter()


def _print_error(message: str):
    click.echo("❌ ========= ERROR =========", err=True)
    click.echo(err=True)
    click.secho(message, fg=(255, 82, 82), err=True)
    click.echo("❌ ========= ERROR =========", err=True)


@click.command()
@click.option("--config", "-c", "config_path", default=None,
              type=click.Path(dir_okay=False), help="Settings file to use")
@click.option("--gui", is_flag=True, help="Ask questions in dialogs instead of the terminal")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Console log level")
@click.option("--no-log-file", is_flag=True, help="Do not write a log file")
@click.version_option(__version__, prog_name="pocketrocket")
def main(config_path: Optional[str], gui: bool, log_level: Optional[str], no_log_file: bool):
    """
    Bootstrap the state backend and launch or nuke the operator stack.
    """
    settings = Settings(config_file=config_path)
    setup_logging(
        log_level=log_level or settings.get("logging.level", "INFO"),
        log_file=settings.get("logging.log_file", True) and not no_log_file,
    )
    install_interrupt_watcher()
    logger.info(f"pocketrocket v{__version__} starting")

    try:
        state = BootstrapOrchestrator(settings, _make_prompter(gui)).run()
    except OperationCancelled as e:
        logger.info(f"Cancelled: {e}")
        _print_error(str(e))
        sys.exit(EXIT_FAILURE)
    except (PocketRocketError, SecurityError) as e:
        logger.error(f"Bootstrap failed: {e}")
        _print_error(str(e))
        sys.exit(EXIT_FAILURE)

    sys.exit(EXIT_OK if state is LifecycleState.DONE else EXIT_FAILURE)


if __name__ == "__main__":
    main()
