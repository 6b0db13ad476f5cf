# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from address_book.core.state import AppState
from address_book.model.model import Model
from address_book.storage.store import AddressBookStore

from .fakes import FakeClock

NOW = datetime(2024, 6, 1, 12, 0)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="address-book-test",
        log_level="WARNING",
        console_enabled=True,
        reminder_days=3,
        data_dir=tmp_path,
        db_path=tmp_path / "address_book.sqlite3",
    )


@pytest.fixture()
def model(clock: FakeClock) -> Model:
    """Empty Model whose notion of "now" is the fake clock."""
    return Model(reminder_days=3, clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, model: Model) -> AppState:
    """
    AppState wired with the fake-clock model.

    NOTE: We keep the real SQLite store here because saving after mutating
    commands is part of what the console tests check.
    """
    return AppState(settings=settings, model=model, store=AddressBookStore(settings.db_path))
