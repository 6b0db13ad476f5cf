# src/address_book/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- opens the store and loads the Model with the configured reminder window,
- saves the Model back on shutdown.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.store import AddressBookStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = AddressBookStore(settings.db_path)
    model = store.load_model(reminder_days=settings.reminder_days)
    return AppState(settings=settings, model=model, store=store)


def save_state(state: AppState) -> bool:
    """Persist the model. Returns False (and logs) if saving failed."""
    try:
        state.store.save_model(state.model)
    except Exception:
        logger.exception("Failed to save address book to %s", state.store.db_path)
        return False
    state.dirty = False
    return True
