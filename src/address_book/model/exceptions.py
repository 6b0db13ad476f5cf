# src/address_book/model/exceptions.py

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when a domain value (task name, date, phone, ...) is invalid."""


class DuplicateEntryError(ValueError):
    """Raised when adding a person or task that is already in the model."""


class EntryNotFoundError(LookupError):
    """Raised when removing or updating a person or task that is not in the model."""
