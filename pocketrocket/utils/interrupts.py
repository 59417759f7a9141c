"""
Process-wide interrupt handling.

An interrupt terminates the process immediately. In-flight engine and
provider calls are abandoned; a stack interrupted mid-update is left in
the engine's in-progress state for the next run to reconcile.
"""

import logging
import os
import signal
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130

_DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _terminate(exit_code: int):
    os._exit(exit_code)


def install_interrupt_watcher(
    signals: Optional[Iterable[int]] = None,
    exit_func: Callable[[int], None] = _terminate,
) -> Callable[[int, object], None]:
    """
    Install a handler that aborts the process on SIGINT/SIGTERM.

    Only synchronous local cleanup runs: logging handlers are flushed
    and closed so the log file is complete. Nothing is unwound.

    Args:
        signals: Signals to watch (defaults to SIGINT and SIGTERM)
        exit_func: Called with the exit code; defaults to os._exit

    Returns:
        The installed handler
    """
    def handler(signum, frame):
        logger.warning(f"Received signal {signum}, aborting immediately")
        logging.shutdown()
        exit_func(EXIT_INTERRUPTED)

    for sig in (signals if signals is not None else _DEFAULT_SIGNALS):
        signal.signal(sig, handler)

    return handler
