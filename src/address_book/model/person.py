# src/address_book/model/person.py

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .exceptions import ValidationError

PHONE_REGEX = re.compile(r"^\d{3,}$")
EMAIL_REGEX = re.compile(r"^[\w.+\-]+@[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?(?:\.[A-Za-z0-9\-]+)*$")
TAG_REGEX = re.compile(r"^[A-Za-z0-9]+$")


@dataclass(frozen=True, slots=True)
class Person:
    """
    A contact in the address book.

    Only the name is required. Two persons are duplicates when their names
    match case-insensitively (see is_same_person); full equality compares
    every field.
    """

    name: str
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Names should not be blank.")
        object.__setattr__(self, "name", " ".join(self.name.split()))

        if self.phone is not None and not PHONE_REGEX.match(self.phone):
            raise ValidationError("Phone numbers should only contain digits, and be at least 3 digits long.")
        if self.email is not None and not EMAIL_REGEX.match(self.email):
            raise ValidationError("Emails should be of the format local-part@domain.")
        if self.address is not None and not self.address.strip():
            raise ValidationError("Addresses can take any value, but should not be blank.")

        tags = tuple(dict.fromkeys(self.tags))
        for tag in tags:
            if not TAG_REGEX.match(tag):
                raise ValidationError(f"Tag names should be alphanumeric: {tag!r}")
        object.__setattr__(self, "tags", tags)

    def is_same_person(self, other: Person | None) -> bool:
        return other is not None and other.name.casefold() == self.name.casefold()

    def __str__(self) -> str:
        parts = [self.name]
        if self.phone:
            parts.append(f"Phone: {self.phone}")
        if self.email:
            parts.append(f"Email: {self.email}")
        if self.address:
            parts.append(f"Address: {self.address}")
        if self.tags:
            parts.append("Tags: " + ", ".join(self.tags))
        return "; ".join(parts)
