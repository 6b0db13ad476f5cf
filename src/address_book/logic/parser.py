# src/address_book/logic/parser.py

"""
Command parser.

Input lines look like `COMMAND_WORD ARGS`, where ARGS is either a plain
argument list (`delete 2`, `find alice bob`) or a prefixed argument string
(`todo n/Buy milk d/2024-05-01 t/09:00 v/Market`).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from ..model.exceptions import ValidationError
from ..model.model import Model
from ..model.person import Person
from ..model.task import Task
from .commands import (
    AddCommand,
    AddTaskCommand,
    Command,
    CommandError,
    CommandResult,
    DeleteCommand,
    DeleteTaskCommand,
    DoneTaskCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    ListTasksCommand,
    ReminderCommand,
    UndoneTaskCommand,
)

logger = logging.getLogger(__name__)

CommandParser = Callable[[str], Command]

MESSAGE_INVALID_FORMAT = "Invalid command format!\n{}"
MESSAGE_UNKNOWN_COMMAND = "Unknown command: {}. Use help to list available commands."

PREFIX_NAME = "n/"
PREFIX_DATE = "d/"
PREFIX_TIME = "t/"
PREFIX_VENUE = "v/"
PREFIX_PHONE = "p/"
PREFIX_EMAIL = "e/"
PREFIX_ADDRESS = "a/"
PREFIX_TAG = "t/"


class ParseError(CommandError):
    """The input line could not be turned into a command."""


@dataclass(slots=True)
class ArgumentMultimap:
    preamble: str
    values: dict[str, list[str]]

    def get(self, prefix: str) -> str | None:
        vals = self.values.get(prefix)
        return vals[-1] if vals else None

    def get_all(self, prefix: str) -> list[str]:
        return list(self.values.get(prefix, []))


def tokenize(args: str, *prefixes: str) -> ArgumentMultimap:
    """
    Split `args` on the given prefixes. A prefix only counts at the start of
    the string or after whitespace, so `e/a@b.com` inside a value is kept.
    """
    if not prefixes:
        return ArgumentMultimap(preamble=args.strip(), values={})

    pattern = re.compile(r"(?:^|\s)(" + "|".join(re.escape(p) for p in prefixes) + ")")
    matches = list(pattern.finditer(args))

    preamble_end = matches[0].start(1) if matches else len(args)
    values: dict[str, list[str]] = {}
    for i, m in enumerate(matches):
        end = matches[i + 1].start(1) if i + 1 < len(matches) else len(args)
        values.setdefault(m.group(1), []).append(args[m.end(1):end].strip())

    return ArgumentMultimap(preamble=args[:preamble_end].strip(), values=values)


def parse_index(raw: str, usage: str) -> int:
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()) or int(raw) < 1:
        raise ParseError(MESSAGE_INVALID_FORMAT.format(usage))
    return int(raw)


# ---- per-command parsers ----


def _no_args(command_cls: type[Command]) -> CommandParser:
    def parse(args: str) -> Command:
        return command_cls()

    return parse


def parse_add(args: str) -> Command:
    amap = tokenize(args, PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS, PREFIX_TAG)
    name = amap.get(PREFIX_NAME)
    if amap.preamble or not name:
        raise ParseError(MESSAGE_INVALID_FORMAT.format(AddCommand.MESSAGE_USAGE))
    try:
        person = Person(
            name=name,
            phone=amap.get(PREFIX_PHONE),
            email=amap.get(PREFIX_EMAIL),
            address=amap.get(PREFIX_ADDRESS),
            tags=tuple(amap.get_all(PREFIX_TAG)),
        )
    except ValidationError as e:
        raise ParseError(str(e)) from e
    return AddCommand(person)


def parse_delete(args: str) -> Command:
    return DeleteCommand(parse_index(args, DeleteCommand.MESSAGE_USAGE))


def parse_find(args: str) -> Command:
    keywords = args.split()
    if not keywords:
        raise ParseError(MESSAGE_INVALID_FORMAT.format(FindCommand.MESSAGE_USAGE))
    return FindCommand(keywords)


def parse_add_task(args: str) -> Command:
    amap = tokenize(args, PREFIX_NAME, PREFIX_DATE, PREFIX_TIME, PREFIX_VENUE)
    if amap.preamble or amap.get(PREFIX_NAME) is None:
        raise ParseError(MESSAGE_INVALID_FORMAT.format(AddTaskCommand.MESSAGE_USAGE))
    try:
        task = Task.create(
            amap.get(PREFIX_NAME),
            date=amap.get(PREFIX_DATE),
            time=amap.get(PREFIX_TIME),
            venue=amap.get(PREFIX_VENUE),
        )
    except ValidationError as e:
        raise ParseError(str(e)) from e
    return AddTaskCommand(task)


def _task_index(command_cls: type[DoneTaskCommand | UndoneTaskCommand | DeleteTaskCommand]) -> CommandParser:
    def parse(args: str) -> Command:
        return command_cls(parse_index(args, command_cls.MESSAGE_USAGE))

    return parse


def parse_reminder(args: str) -> Command:
    raw = args.strip()
    if not raw:
        return ReminderCommand()
    if not (raw.isascii() and raw.isdigit()):
        raise ParseError(MESSAGE_INVALID_FORMAT.format(ReminderCommand.MESSAGE_USAGE))
    return ReminderCommand(int(raw))


# ---- registry ----


class CommandRegistry:
    """Maps command words (and aliases) to parsers; builds the help text."""

    def __init__(self) -> None:
        self._parsers: dict[str, CommandParser] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        parser: CommandParser,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._parsers[key] = parser
        self._help[key] = help_text
        for alias in aliases:
            self._parsers[alias.lower()] = parser

    def parse(self, line: str) -> Command:
        parts = line.strip().split(maxsplit=1)
        if not parts:
            raise ParseError(MESSAGE_UNKNOWN_COMMAND.format("(empty)"))

        name = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        parser = self._parsers.get(name)
        if parser is None:
            raise ParseError(MESSAGE_UNKNOWN_COMMAND.format(name))
        return parser(args)

    def handle(self, model: Model, line: str) -> CommandResult:
        """Parse and execute one input line. CommandError propagates to the caller."""
        command = self.parse(line)
        logger.debug("Executing %s", type(command).__name__)
        return command.execute(model)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        return "\n".join(lines)


def build_default_registry() -> CommandRegistry:
    reg = CommandRegistry()
    reg.register(
        HelpCommand.COMMAND_WORD,
        lambda args: HelpCommand(reg.build_help()),
        HelpCommand.DESCRIPTION,
        aliases=["h", "?"],
    )
    reg.register(ListCommand.COMMAND_WORD, _no_args(ListCommand), ListCommand.DESCRIPTION, aliases=["list"])
    reg.register(AddCommand.COMMAND_WORD, parse_add, AddCommand.DESCRIPTION)
    reg.register(DeleteCommand.COMMAND_WORD, parse_delete, DeleteCommand.DESCRIPTION)
    reg.register(FindCommand.COMMAND_WORD, parse_find, FindCommand.DESCRIPTION)
    reg.register(AddTaskCommand.COMMAND_WORD, parse_add_task, AddTaskCommand.DESCRIPTION)
    reg.register(ListTasksCommand.COMMAND_WORD, _no_args(ListTasksCommand), ListTasksCommand.DESCRIPTION)
    reg.register(DoneTaskCommand.COMMAND_WORD, _task_index(DoneTaskCommand), DoneTaskCommand.DESCRIPTION)
    reg.register(UndoneTaskCommand.COMMAND_WORD, _task_index(UndoneTaskCommand), UndoneTaskCommand.DESCRIPTION)
    reg.register(DeleteTaskCommand.COMMAND_WORD, _task_index(DeleteTaskCommand), DeleteTaskCommand.DESCRIPTION)
    reg.register(ReminderCommand.COMMAND_WORD, parse_reminder, ReminderCommand.DESCRIPTION)
    reg.register(ExitCommand.COMMAND_WORD, _no_args(ExitCommand), ExitCommand.DESCRIPTION, aliases=["quit"])
    return reg


registry = build_default_registry()
