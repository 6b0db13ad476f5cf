# src/address_book/model/model.py

"""
In-memory model.

Owns the persons and tasks plus the filtered views the front end displays.
Task due-states are refreshed here (with the configured reminder window)
after every task mutation, so callers never see stale flags.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from .exceptions import DuplicateEntryError, EntryNotFoundError, ValidationError
from .person import Person
from .task import DEFAULT_REMINDER_DAYS, DueStateListener, Task

logger = logging.getLogger(__name__)

PersonPredicate = Callable[[Person], bool]
TaskPredicate = Callable[[Task], bool]


def PREDICATE_SHOW_ALL_PERSONS(person: Person) -> bool:  # noqa: N802
    return True


def PREDICATE_SHOW_ALL_TASKS(task: Task) -> bool:  # noqa: N802
    return True


class Model:
    def __init__(
        self,
        persons: Iterable[Person] = (),
        tasks: Iterable[Task] = (),
        *,
        reminder_days: int = DEFAULT_REMINDER_DAYS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._persons: list[Person] = []
        self._tasks: list[Task] = []
        self._listeners: list[DueStateListener] = []
        self._person_predicate: PersonPredicate = PREDICATE_SHOW_ALL_PERSONS
        self._task_predicate: TaskPredicate = PREDICATE_SHOW_ALL_TASKS
        self._clock = clock
        self._reminder_days = DEFAULT_REMINDER_DAYS
        self.reminder_days = reminder_days

        for p in persons:
            self.add_person(p)
        for t in tasks:
            self.add_task(t)

    # ---- settings ----

    @property
    def reminder_days(self) -> int:
        return self._reminder_days

    @reminder_days.setter
    def reminder_days(self, days: int) -> None:
        days = int(days)
        if days < 0:
            raise ValidationError("Reminder days should be a non-negative integer.")
        self._reminder_days = days
        self.refresh_due_states()

    # ---- persons ----

    @property
    def persons(self) -> list[Person]:
        return list(self._persons)

    @property
    def filtered_person_list(self) -> list[Person]:
        return [p for p in self._persons if self._person_predicate(p)]

    def update_filtered_person_list(self, predicate: PersonPredicate) -> None:
        if predicate is None:
            raise TypeError("predicate must not be None")
        self._person_predicate = predicate

    def has_person(self, person: Person) -> bool:
        return any(p.is_same_person(person) for p in self._persons)

    def add_person(self, person: Person) -> None:
        if self.has_person(person):
            raise DuplicateEntryError(f"This person already exists in the address book: {person.name}")
        self._persons.append(person)
        self.update_filtered_person_list(PREDICATE_SHOW_ALL_PERSONS)
        logger.debug("Person added: %s", person.name)

    def delete_person(self, person: Person) -> None:
        try:
            self._persons.remove(person)
        except ValueError:
            raise EntryNotFoundError(f"No such person: {person.name}") from None
        logger.debug("Person deleted: %s", person.name)

    # ---- tasks ----

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def filtered_task_list(self) -> list[Task]:
        return sorted(t for t in self._tasks if self._task_predicate(t))

    def update_filtered_task_list(self, predicate: TaskPredicate) -> None:
        if predicate is None:
            raise TypeError("predicate must not be None")
        self._task_predicate = predicate

    def has_task(self, task: Task) -> bool:
        return any(t == task for t in self._tasks)

    def add_task(self, task: Task) -> None:
        if self.has_task(task):
            raise DuplicateEntryError(f"This task already exists in the task list: {task.name}")
        self._tasks.append(task)
        # Listeners only hear about changes after the task joined the model.
        self._refresh(task)
        for listener in self._listeners:
            task.add_listener(listener)
        self.update_filtered_task_list(PREDICATE_SHOW_ALL_TASKS)
        logger.debug("Task added: %s", task)

    def delete_task(self, task: Task) -> None:
        for i, t in enumerate(self._tasks):
            if t is task or t == task:
                del self._tasks[i]
                for listener in self._listeners:
                    t.remove_listener(listener)
                logger.debug("Task deleted: %s", t)
                return
        raise EntryNotFoundError(f"No such task: {task.name}")

    def mark_task_done(self, task: Task) -> None:
        self._require_task(task)
        self._require_unique_with_done(task, True)
        task.mark_done()
        self._refresh(task)

    def mark_task_not_done(self, task: Task) -> None:
        self._require_task(task)
        self._require_unique_with_done(task, False)
        task.mark_not_done()
        self._refresh(task)

    def refresh_due_states(self, now: datetime | None = None) -> None:
        """Recompute overdue / due-soon flags of every task."""
        if now is None:
            now = self._clock()
        for t in self._tasks:
            t.recompute_due_state(now, self._reminder_days)

    def add_listener(self, listener: DueStateListener) -> None:
        """Subscribe to due-state changes of every current and future task."""
        if listener in self._listeners:
            return
        self._listeners.append(listener)
        for t in self._tasks:
            t.add_listener(listener)

    def _refresh(self, task: Task) -> None:
        task.recompute_due_state(self._clock(), self._reminder_days)

    def _require_task(self, task: Task) -> None:
        if not any(t is task for t in self._tasks):
            raise EntryNotFoundError(f"No such task: {task.name}")

    def _require_unique_with_done(self, task: Task, done: bool) -> None:
        for t in self._tasks:
            if (
                t is not task
                and t.done == done
                and (t.name, t.date, t.time, t.venue) == (task.name, task.date, task.time, task.venue)
            ):
                raise DuplicateEntryError(f"This task already exists in the task list: {task.name}")
