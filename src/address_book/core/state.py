# src/address_book/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..model.model import Model
from ..storage.store import AddressBookStore


@dataclass
class AppState:
    # Settings object (config.Settings, or a SimpleNamespace in tests).
    settings: object

    model: Model
    store: AddressBookStore

    # Set by the console when the model changed since the last save.
    dirty: bool = False
