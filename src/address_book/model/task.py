# src/address_book/model/task.py

"""
Task entity.

A task has a required name and an optional date, time and venue. Besides the
user-controlled `done` flag it carries two derived flags:

- overdue:  not done and the due instant has passed,
- due_soon: not done and the due instant lies in [now, now + reminder_days).

The derived flags are never stored. They are recomputed by
`recompute_due_state(now, reminder_days)`, which the model calls after every
mutation and before every display.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, ClassVar

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_DAYS = 3

# An undated task is due "at the end of time"; an untimed task is due at midnight.
_FAR_FUTURE = date.max
_MIDNIGHT = time.min

DueStateListener = Callable[["Task"], None]


@dataclass(frozen=True, slots=True)
class TaskName:
    value: str

    MESSAGE_CONSTRAINTS: ClassVar[str] = "Task should contain at least the task name."

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", self.value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class TaskDate:
    value: date

    MESSAGE_CONSTRAINTS: ClassVar[str] = "Task dates should be in the format YYYY-MM-DD, e.g. 2024-01-31."

    def __post_init__(self) -> None:
        if not isinstance(self.value, date) or isinstance(self.value, datetime):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)

    @classmethod
    def parse(cls, raw: str) -> TaskDate:
        try:
            return cls(datetime.strptime(raw.strip(), "%Y-%m-%d").date())
        except (AttributeError, ValueError):
            raise ValidationError(cls.MESSAGE_CONSTRAINTS) from None

    def __str__(self) -> str:
        return self.value.isoformat()


@dataclass(frozen=True, slots=True)
class TaskTime:
    value: time

    MESSAGE_CONSTRAINTS: ClassVar[str] = "Task times should be in the 24-hour format HH:MM, e.g. 09:30."

    def __post_init__(self) -> None:
        if not isinstance(self.value, time):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)

    @classmethod
    def parse(cls, raw: str) -> TaskTime:
        try:
            return cls(datetime.strptime(raw.strip(), "%H:%M").time())
        except (AttributeError, ValueError):
            raise ValidationError(cls.MESSAGE_CONSTRAINTS) from None

    def __str__(self) -> str:
        return self.value.strftime("%H:%M")


@dataclass(frozen=True, slots=True)
class Venue:
    value: str

    MESSAGE_CONSTRAINTS: ClassVar[str] = "Venues can take any value, but should not be blank."

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", self.value.strip())

    def __str__(self) -> str:
        return self.value


def _coerce(raw: Any, kind: type, parse: Callable[[str], Any] | None = None) -> Any:
    if raw is None or isinstance(raw, kind):
        return raw
    if isinstance(raw, str):
        return parse(raw) if parse is not None else kind(raw)
    return kind(raw)


def _absent_last(value: Any) -> tuple[bool, Any]:
    """Sort key part: present values first (by value), absent ones after."""
    if value is None:
        return (True, None)
    return (False, value.value)


def _plus_days(now: datetime, days: int) -> datetime:
    try:
        return now + timedelta(days=days)
    except OverflowError:
        return datetime.max


@functools.total_ordering
@dataclass(slots=True, eq=False)
class Task:
    name: TaskName
    date: TaskDate | None = None
    time: TaskTime | None = None
    venue: Venue | None = None
    done: bool = False

    overdue: bool = field(default=False, init=False)
    due_soon: bool = field(default=False, init=False)
    _listeners: list[DueStateListener] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, TaskName):
            raise ValidationError(TaskName.MESSAGE_CONSTRAINTS)
        self.recompute_due_state()

    @classmethod
    def create(
        cls,
        name: TaskName | str | None,
        date: TaskDate | str | None = None,
        time: TaskTime | str | None = None,
        venue: Venue | str | None = None,
        *,
        done: bool = False,
        now: datetime | None = None,
        reminder_days: int = DEFAULT_REMINDER_DAYS,
    ) -> Task:
        """
        Build a task from raw strings or value objects.

        Raises ValidationError when the name is missing or blank, or when a
        date/time/venue string is malformed.
        """
        if name is None:
            raise ValidationError(TaskName.MESSAGE_CONSTRAINTS)
        task = cls(
            name=_coerce(name, TaskName),
            date=_coerce(date, TaskDate, TaskDate.parse),
            time=_coerce(time, TaskTime, TaskTime.parse),
            venue=_coerce(venue, Venue),
            done=bool(done),
        )
        task.recompute_due_state(now, reminder_days)
        return task

    # ---- observation ----

    def add_listener(self, listener: DueStateListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: DueStateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ---- state ----

    def mark_done(self) -> None:
        self.done = True

    def mark_not_done(self) -> None:
        self.done = False

    def due_at(self) -> datetime:
        d = self.date.value if self.date is not None else _FAR_FUTURE
        t = self.time.value if self.time is not None else _MIDNIGHT
        return datetime.combine(d, t)

    def recompute_due_state(
        self,
        now: datetime | None = None,
        reminder_days: int = DEFAULT_REMINDER_DAYS,
    ) -> None:
        """Recompute `overdue` / `due_soon` and notify listeners if either changed."""
        if now is None:
            now = datetime.now()

        if self.done:
            overdue, due_soon = False, False
        else:
            due = self.due_at()
            if due < now:
                overdue, due_soon = True, False
            elif due < _plus_days(now, reminder_days):
                overdue, due_soon = False, True
            else:
                overdue, due_soon = False, False

        changed = (overdue, due_soon) != (self.overdue, self.due_soon)
        self.overdue = overdue
        self.due_soon = due_soon

        if changed:
            for listener in list(self._listeners):
                try:
                    listener(self)
                except Exception:
                    logger.exception("Due-state listener failed for task %r", self.name.value)

    # ---- ordering / equality ----

    def priority_level(self) -> int:
        """1 = overdue, 2 = due soon, 3 = not done, 4 = done."""
        if self.overdue:
            return 1
        if self.due_soon:
            return 2
        if not self.done:
            return 3
        return 4

    def sort_key(self) -> tuple[Any, ...]:
        return (
            self.priority_level(),
            _absent_last(self.date),
            _absent_last(self.time),
            _absent_last(self.venue),
            # Only reached by tasks that differ in name or done flag alone.
            self.name.value,
            self.done,
        )

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, Task):
            return NotImplemented
        return (
            self.name == other.name
            and self.done == other.done
            and self.date == other.date
            and self.time == other.time
            and self.venue == other.venue
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return compare_tasks(self, other) < 0

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return (
            f"{self.name}"
            f"; Date: {self.date if self.date is not None else ''}"
            f"; Time: {self.time if self.time is not None else ''}"
            f"; Venue: {self.venue if self.venue is not None else ''}"
        )


def compare_tasks(a: Task, b: Task) -> int:
    """
    Three-way task comparison.

    Overdue < due soon < not done < done. Within a class: date, then time,
    then venue, absent values last.
    """
    if a == b:
        return 0
    ka = a.sort_key()
    kb = b.sort_key()
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


@dataclass(frozen=True, slots=True)
class PlaceholderTask:
    """
    Unscheduled header row for task listings (e.g. "All tasks").

    Never stored in the model and never overdue, due soon or done.
    """

    name: str

    date: ClassVar[None] = None
    time: ClassVar[None] = None
    venue: ClassVar[None] = None
    done: ClassVar[bool] = False
    overdue: ClassVar[bool] = False
    due_soon: ClassVar[bool] = False

    def __str__(self) -> str:
        return self.name
