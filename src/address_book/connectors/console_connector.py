# src/address_book/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from ..cli.bootstrap import save_state
from ..core.state import AppState
from ..logic.commands import SHOW_PERSONS, SHOW_TASKS, CommandError
from ..logic.parser import CommandRegistry
from ..logic.parser import registry as default_registry
from ..model.person import Person
from ..model.task import PlaceholderTask, Task

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

ALL_TASKS_HEADER = PlaceholderTask("All tasks")


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def task_marker(task: Task | PlaceholderTask) -> str:
    if task.overdue:
        return "[OVERDUE] "
    if task.due_soon:
        return "[DUE SOON] "
    if task.done:
        return "[DONE] "
    return ""


def format_person_list(persons: Iterable[Person]) -> str:
    lines = [f"{i}. {p}" for i, p in enumerate(persons, start=1)]
    return "\n".join(lines) if lines else "(no persons to show)"


def format_task_list(tasks: Iterable[Task], header: PlaceholderTask = ALL_TASKS_HEADER) -> str:
    lines = [f"== {header} =="]
    rows = [f"{i}. {task_marker(t)}{t}" for i, t in enumerate(tasks, start=1)]
    lines.extend(rows or ["(no tasks)"])
    return "\n".join(lines)


def run_console_loop(
    state: AppState,
    *,
    registry: CommandRegistry | None = None,
    input_fn: InputFn = input,
    output: OutputFn = print,
) -> None:
    """
    Read-eval-print loop over the command registry.

    After each command the matching list (persons or tasks) is shown, and
    mutating commands save the model right away.
    """
    registry = registry or default_registry
    logger.info("Console connector started.")

    notices: list[str] = []

    def on_due_state_change(task: Task) -> None:
        if task.overdue:
            notices.append(f"[REMINDER] Task is now overdue: {task.name}")
        elif task.due_soon:
            notices.append(f"[REMINDER] Task is due soon: {task.name}")

    state.model.add_listener(on_due_state_change)
    state.model.refresh_due_states()

    output(f"[{_ts_local()}] Type a command. Use help for the list of commands, exit to quit.")
    output(format_task_list(state.model.filtered_task_list))

    while True:
        try:
            line = input_fn("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            output("")
            break

        if not line:
            continue

        try:
            result = registry.handle(state.model, line)
        except CommandError as e:
            output(str(e))
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            output("Internal error while handling a command.")
            continue

        output(result.feedback)
        if result.exit:
            break

        if result.changed:
            state.dirty = True
            if not save_state(state):
                output("Warning: changes could not be saved (see log file).")

        state.model.refresh_due_states()

        if result.show == SHOW_PERSONS:
            output(format_person_list(state.model.filtered_person_list))
        elif result.show == SHOW_TASKS:
            output(format_task_list(state.model.filtered_task_list))

        while notices:
            output(notices.pop(0))

    logger.info("Console connector finished.")
