# src/address_book/logic/commands.py

"""
Text commands.

Every command is a small object built by the parser and executed against the
Model. Commands never print: they return a CommandResult whose feedback the
connector shows to the user. User errors (bad index, duplicates) are raised as
CommandError with a user-facing message.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

from ..model.exceptions import DuplicateEntryError, EntryNotFoundError
from ..model.model import PREDICATE_SHOW_ALL_PERSONS, PREDICATE_SHOW_ALL_TASKS, Model
from ..model.person import Person
from ..model.task import Task

logger = logging.getLogger(__name__)

MESSAGE_INVALID_PERSON_INDEX = "The person index provided is invalid."
MESSAGE_INVALID_TASK_INDEX = "The task index provided is invalid."

SHOW_PERSONS = "persons"
SHOW_TASKS = "tasks"


class CommandError(Exception):
    """A command could not be executed; the message is shown to the user."""


@dataclass(frozen=True, slots=True)
class CommandResult:
    feedback: str
    show_help: bool = False
    exit: bool = False
    # Which list the front end should redisplay: SHOW_PERSONS, SHOW_TASKS or None.
    show: str | None = None
    # True when persons or tasks were modified and should be saved.
    changed: bool = False


def _require_model(model: Model | None) -> Model:
    if model is None:
        raise TypeError("model must not be None")
    return model


def _pick(items: Sequence, index: int, message: str):
    # Indexes are 1-based, as displayed.
    if index < 1 or index > len(items):
        raise CommandError(message)
    return items[index - 1]


class Command(ABC):
    COMMAND_WORD: ClassVar[str]
    DESCRIPTION: ClassVar[str]
    MESSAGE_USAGE: ClassVar[str]

    @abstractmethod
    def execute(self, model: Model) -> CommandResult: ...

    @property
    def command(self) -> str:
        return self.COMMAND_WORD

    @property
    def description(self) -> str:
        return self.DESCRIPTION

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return type(self) is type(other) and vars(self) == vars(other)

    __hash__ = None  # type: ignore[assignment]


# ---- persons ----


class ListCommand(Command):
    """Lists all persons in the address book to the user."""

    COMMAND_WORD = "ls"
    DESCRIPTION = "Lists all current persons in the address book."
    MESSAGE_SUCCESS = "Listed all persons"
    MESSAGE_USAGE = f"{COMMAND_WORD}: {DESCRIPTION}\nExample: {COMMAND_WORD}"

    def execute(self, model: Model) -> CommandResult:
        model = _require_model(model)
        model.update_filtered_person_list(PREDICATE_SHOW_ALL_PERSONS)
        return CommandResult(self.MESSAGE_SUCCESS, show=SHOW_PERSONS)


class AddCommand(Command):
    COMMAND_WORD = "add"
    DESCRIPTION = "Adds a person to the address book."
    MESSAGE_SUCCESS = "New person added: {}"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: {DESCRIPTION}\n"
        "Parameters: n/NAME [p/PHONE] [e/EMAIL] [a/ADDRESS] [t/TAG]...\n"
        f"Example: {COMMAND_WORD} n/John Doe p/98765432 e/johnd@example.com t/friends"
    )

    def __init__(self, person: Person) -> None:
        self.person = person

    def execute(self, model: Model) -> CommandResult:
        model = _require_model(model)
        try:
            model.add_person(self.person)
        except DuplicateEntryError as e:
            raise CommandError(str(e)) from e
        return CommandResult(self.MESSAGE_SUCCESS.format(self.person), show=SHOW_PERSONS, changed=True)


class DeleteCommand(Command):
    COMMAND_WORD = "delete"
    DESCRIPTION = "Deletes the person identified by the index number used in the displayed person list."
    MESSAGE_SUCCESS = "Deleted person: {}"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: {DESCRIPTION}\n"
        "Parameters: INDEX (must be a positive integer)\n"
        f"Example: {COMMAND_WORD} 1"
    )

    def __init__(self, index: int) -> None:
        self.index = index

    def execute(self, model: Model) -> CommandResult:
        model = _require_model(model)
        person = _pick(model.filtered_person_list, self.index, MESSAGE_INVALID_PERSON_INDEX)
        model.delete_person(person)
        return CommandResult(self.MESSAGE_SUCCESS.format(person), show=SHOW_PERSONS, changed=True)


class FindCommand(Command):
    COMMAND_WORD = "find"
    DESCRIPTION = "Finds all persons whose names contain any of the given keywords (case-insensitive)."
    MESSAGE_SUCCESS = "{} persons listed!"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: {DESCRIPTION}\n"
        "Parameters: KEYWORD [MORE_KEYWORDS]...\n"
        f"Example: {COMMAND_WORD} alice bob"
    )

    def __init__(self, keywords: Sequence[str]) -> None:
        self.keywords = tuple(k.casefold() for k in keywords)

    def _matches(self, person: Person) -> bool:
        words = person.name.casefold().split()
        return any(k in words for k in self.keywords)

    def execute(self, model: Model) -> CommandResult:
        model = _require_model(model)
        model.update_filtered_person_list(self._matches)
        return CommandResult(self.MESSAGE_SUCCESS.format(len(model.filtered_person_list)), show=SHOW_PERSONS)


# ---- tasks ----


class AddTaskCommand(Command):
    COMMAND_WORD = "todo"
    DESCRIPTION = "Adds a task to the task list."
    MESSAGE_SUCCESS = "New task added: {}"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: {DESCRIPTION}\n"
        "Parameters: n/NAME [d/DATE] [t/TIME] [v/VENUE]\n"
        f"Example: {COMMAND_WORD} n/Project meeting d/2024-10-21 t/14:00 v/COM1"
    )

    def __init__(self, task: Task) -> None:
        self.task = task

    def execute(self, model: Model) -> CommandResult:
        model = _require_model(model)
        try:
            model.add_task(self.task)
        except DuplicateEntryError as e:
            raise CommandError(str(e)) from e
        return CommandResult(self.MESSAGE_SUCCESS.format(self.task), show=SHOW_TASKS, changed=True)


class _TaskIndexCommand(Command):
    def __init__(self, index: int) -> None:
        self.index = index

    def _target(self, model: Model) -> Task:
        return _pick(model.filtered_task_list, self.index, MESSAGE_INVALID_TASK_INDEX)


class DoneTaskCommand(_TaskIndexCommand):
    COMMAND_WORD = "done"
    DESCRIPTION = "Marks the task identified by its index in the displayed task list as done."
    MESSAGE_SUCCESS = "Completed task: {}"
    MESSAGE_ALREADY = "This task is already marked as done."
    MESSAGE_USAGE = f"{COMMAND_WORD}: {DESCRIPTION}\nParameters: INDEX\nExample: {COMMAND_WORD} 2"

    def execute(self, model: Model) -> CommandResult:
        model = _require_model(model)
        task = self._target(model)
        if task.done:
            raise CommandError(self.MESSAGE_ALREADY)
        try:
            model.mark_task_done(task)
        except DuplicateEntryError as e:
            raise CommandError(str(e)) from e
        return CommandResult(self.MESSAGE_SUCCESS.format(task), show=SHOW_TASKS, changed=True)


class UndoneTaskCommand(_TaskIndexCommand):
    COMMAND_WORD = "undone"
    DESCRIPTION = "Marks the task identified by its index in the displayed task list as not done."
    MESSAGE_SUCCESS = "Task marked as not done: {}"
    MESSAGE_ALREADY = "This task is not marked as done."
    MESSAGE_USAGE = f"{COMMAND_WORD}: {DESCRIPTION}\nParameters: INDEX\nExample: {COMMAND_WORD} 2"

    def execute(self, model: Model) -> CommandResult:
        model = _require_model(model)
        task = self._target(model)
        if not task.done:
            raise CommandError(self.MESSAGE_ALREADY)
        try:
            model.mark_task_not_done(task)
        except DuplicateEntryError as e:
            raise CommandError(str(e)) from e
        return CommandResult(self.MESSAGE_SUCCESS.format(task), show=SHOW_TASKS, changed=True)


class DeleteTaskCommand(_TaskIndexCommand):
    COMMAND_WORD = "deltask"
    DESCRIPTION = "Deletes the task identified by its index in the displayed task list."
    MESSAGE_SUCCESS = "Deleted task: {}"
    MESSAGE_USAGE = f"{COMMAND_WORD}: {DESCRIPTION}\nParameters: INDEX\nExample: {COMMAND_WORD} 1"

    def execute(self, model: Model) -> CommandResult:
        model = _require_model(model)
        task = self._target(model)
        try:
            model.delete_task(task)
        except EntryNotFoundError as e:
            raise CommandError(str(e)) from e
        return CommandResult(self.MESSAGE_SUCCESS.format(task), show=SHOW_TASKS, changed=True)


class ListTasksCommand(Command):
    COMMAND_WORD = "tasks"
    DESCRIPTION = "Lists all tasks, overdue and due-soon ones first."
    MESSAGE_SUCCESS = "Listed all tasks"
    MESSAGE_USAGE = f"{COMMAND_WORD}: {DESCRIPTION}\nExample: {COMMAND_WORD}"

    def execute(self, model: Model) -> CommandResult:
        model = _require_model(model)
        model.update_filtered_task_list(PREDICATE_SHOW_ALL_TASKS)
        model.refresh_due_states()
        return CommandResult(self.MESSAGE_SUCCESS, show=SHOW_TASKS)


class ReminderCommand(Command):
    """
    remind        -> show the current reminder window
    remind DAYS   -> tasks due within DAYS days are flagged as due soon
    """

    COMMAND_WORD = "remind"
    DESCRIPTION = "Shows or sets how many days ahead a task counts as due soon."
    MESSAGE_SHOW = "Tasks due within {} day(s) are shown as due soon."
    MESSAGE_SUCCESS = "Reminder window set to {} day(s)."
    MESSAGE_USAGE = f"{COMMAND_WORD}: {DESCRIPTION}\nParameters: [DAYS]\nExample: {COMMAND_WORD} 5"

    def __init__(self, days: int | None = None) -> None:
        self.days = days

    def execute(self, model: Model) -> CommandResult:
        model = _require_model(model)
        if self.days is None:
            return CommandResult(self.MESSAGE_SHOW.format(model.reminder_days), show=SHOW_TASKS)
        model.reminder_days = self.days
        logger.info("Reminder window changed to %d day(s)", self.days)
        return CommandResult(self.MESSAGE_SUCCESS.format(self.days), show=SHOW_TASKS)


# ---- misc ----


class HelpCommand(Command):
    COMMAND_WORD = "help"
    DESCRIPTION = "Shows available commands."
    MESSAGE_USAGE = f"{COMMAND_WORD}: {DESCRIPTION}\nExample: {COMMAND_WORD}"

    def __init__(self, help_text: str) -> None:
        self.help_text = help_text

    def execute(self, model: Model) -> CommandResult:
        return CommandResult(self.help_text, show_help=True)


class ExitCommand(Command):
    COMMAND_WORD = "exit"
    DESCRIPTION = "Exits the program."
    MESSAGE_SUCCESS = "Exiting address book as requested ..."
    MESSAGE_USAGE = f"{COMMAND_WORD}: {DESCRIPTION}\nExample: {COMMAND_WORD}"

    def execute(self, model: Model) -> CommandResult:
        return CommandResult(self.MESSAGE_SUCCESS, exit=True)
