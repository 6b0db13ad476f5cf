# src/address_book/storage/store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from ..model.exceptions import DuplicateEntryError, ValidationError
from ..model.model import Model
from ..model.person import Person
from ..model.task import DEFAULT_REMINDER_DAYS, Task

logger = logging.getLogger(__name__)


class AddressBookStore:
    """
    SQLite store for persons and tasks.

    The schema is simple and migration-safe:
    - create tables if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Only authoritative task fields are stored (name, date, time, venue, done).
    Overdue / due-soon flags are recomputed by the Model on load.

    Saving replaces the whole snapshot in one transaction; each method opens
    its own SQLite connection.

    Rows that fail validation (or duplicate an earlier row) are skipped on load
    with a warning. They are not part of the Model, so the next save_model()
    drops them from the database.
    """

    def __init__(self, db_path: str | Path = "address_book.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("AddressBookStore ready db=%s", self._db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS persons (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    phone TEXT,
                    email TEXT,
                    address TEXT,
                    tags TEXT NOT NULL DEFAULT '[]'
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    date TEXT,
                    time TEXT,
                    venue TEXT,
                    done INTEGER NOT NULL DEFAULT 0
                )
                """
            )

            def add_missing(table: str, columns: dict[str, str]) -> None:
                cur.execute(f"PRAGMA table_info({table})")
                existing = {row["name"] for row in cur.fetchall()}
                for name, decl in columns.items():
                    if name in existing:
                        continue
                    cur.execute(f"ALTER TABLE {table} ADD COLUMN {name} {decl}")
                    logger.info("Store migration: added column %s.%s", table, name)

            add_missing(
                "persons",
                {"phone": "TEXT", "email": "TEXT", "address": "TEXT", "tags": "TEXT NOT NULL DEFAULT '[]'"},
            )
            add_missing(
                "tasks",
                {"date": "TEXT", "time": "TEXT", "venue": "TEXT", "done": "INTEGER NOT NULL DEFAULT 0"},
            )
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _tags_to_str(tags: Iterable[str]) -> str:
        return json.dumps(list(tags), ensure_ascii=False)

    @staticmethod
    def _str_to_tags(s: str | None) -> tuple[str, ...]:
        if not s:
            return ()
        try:
            val = json.loads(s)
        except ValueError:
            logger.warning("Invalid tags JSON in store: %r", s)
            return ()
        return tuple(str(t) for t in val) if isinstance(val, list) else ()

    @staticmethod
    def _row_to_person(row: sqlite3.Row) -> Person:
        return Person(
            name=row["name"],
            phone=row["phone"],
            email=row["email"],
            address=row["address"],
            tags=AddressBookStore._str_to_tags(row["tags"]),
        )

    @staticmethod
    def _row_to_task(row: sqlite3.Row, now: datetime | None, reminder_days: int) -> Task:
        return Task.create(
            row["name"],
            date=row["date"],
            time=row["time"],
            venue=row["venue"],
            done=bool(row["done"]),
            now=now,
            reminder_days=reminder_days,
        )

    # ---- public API ----

    def count(self) -> dict[str, int]:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            out: dict[str, int] = {}
            for table in ("persons", "tasks"):
                cur.execute(f"SELECT COUNT(*) FROM {table}")
                (n,) = cur.fetchone()
                out[table] = int(n)
            return out
        finally:
            conn.close()

    def load_persons(self) -> list[Person]:
        conn = self._get_conn()
        try:
            rows = conn.execute("SELECT * FROM persons ORDER BY id ASC").fetchall()
        finally:
            conn.close()

        out: list[Person] = []
        for row in rows:
            try:
                out.append(self._row_to_person(row))
            except ValidationError as e:
                logger.warning("Skipping invalid person row id=%s (dropped on next save): %s", row["id"], e)
        return out

    def load_tasks(
        self,
        *,
        now: datetime | None = None,
        reminder_days: int = DEFAULT_REMINDER_DAYS,
    ) -> list[Task]:
        conn = self._get_conn()
        try:
            rows = conn.execute("SELECT * FROM tasks ORDER BY id ASC").fetchall()
        finally:
            conn.close()

        out: list[Task] = []
        for row in rows:
            try:
                out.append(self._row_to_task(row, now, reminder_days))
            except ValidationError as e:
                logger.warning("Skipping invalid task row id=%s (dropped on next save): %s", row["id"], e)
        return out

    def load_model(self, *, reminder_days: int = DEFAULT_REMINDER_DAYS) -> Model:
        model = Model(reminder_days=reminder_days)
        for person in self.load_persons():
            try:
                model.add_person(person)
            except DuplicateEntryError:
                logger.warning("Skipping duplicate person in store: %s", person.name)
        for task in self.load_tasks(reminder_days=reminder_days):
            try:
                model.add_task(task)
            except DuplicateEntryError:
                logger.warning("Skipping duplicate task in store: %s", task.name)
        logger.info("Loaded %d persons and %d tasks from %s", len(model.persons), len(model.tasks), self._db_path)
        return model

    def save_model(self, model: Model) -> None:
        """Replace the stored snapshot with the model's persons and tasks."""
        person_rows: list[tuple[Any, ...]] = [
            (p.name, p.phone, p.email, p.address, self._tags_to_str(p.tags)) for p in model.persons
        ]
        task_rows: list[tuple[Any, ...]] = [
            (
                t.name.value,
                str(t.date) if t.date is not None else None,
                str(t.time) if t.time is not None else None,
                t.venue.value if t.venue is not None else None,
                int(t.done),
            )
            for t in model.tasks
        ]

        conn = self._get_conn()
        try:
            with conn:
                conn.execute("DELETE FROM persons")
                conn.execute("DELETE FROM tasks")
                conn.executemany(
                    "INSERT INTO persons(name, phone, email, address, tags) VALUES (?, ?, ?, ?, ?)",
                    person_rows,
                )
                conn.executemany(
                    "INSERT INTO tasks(name, date, time, venue, done) VALUES (?, ?, ?, ?, ?)",
                    task_rows,
                )
        finally:
            conn.close()
        logger.debug("Saved %d persons and %d tasks to %s", len(person_rows), len(task_rows), self._db_path)
