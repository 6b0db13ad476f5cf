# src/address_book/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (store + model), runs the console REPL
and saves the model on the way out.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, save_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    # Mutating commands save right away; only a failed save leaves the state dirty.
    if state.dirty:
        save_state(state)
    else:
        logger.debug("No unsaved changes on exit.")
    logger.info("Bye.")


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (reminder window: %d days)...", settings.app_name, settings.reminder_days)

    state = create_initial_state(settings=settings)

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.warning("Console disabled; nothing to do.")
    finally:
        _shutdown(state)


if __name__ == "__main__":
    main()
