"""
Domain model.

Components:
- task.py: Task entity, its value objects and the task ordering
- person.py: Person entity
- model.py: Model (persons, tasks, filtered views, due-state refresh)
- exceptions.py: ValidationError and friends
"""

from .exceptions import DuplicateEntryError, EntryNotFoundError, ValidationError
from .model import PREDICATE_SHOW_ALL_PERSONS, PREDICATE_SHOW_ALL_TASKS, Model
from .person import Person
from .task import (
    DEFAULT_REMINDER_DAYS,
    PlaceholderTask,
    Task,
    TaskDate,
    TaskName,
    TaskTime,
    Venue,
    compare_tasks,
)

__all__ = [
    "DEFAULT_REMINDER_DAYS",
    "DuplicateEntryError",
    "EntryNotFoundError",
    "Model",
    "PREDICATE_SHOW_ALL_PERSONS",
    "PREDICATE_SHOW_ALL_TASKS",
    "Person",
    "PlaceholderTask",
    "Task",
    "TaskDate",
    "TaskName",
    "TaskTime",
    "ValidationError",
    "Venue",
    "compare_tasks",
]
