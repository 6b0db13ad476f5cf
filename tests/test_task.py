# tests/test_task.py

from __future__ import annotations

import itertools
from datetime import date, datetime, time, timedelta

import pytest

from address_book.model.exceptions import ValidationError
from address_book.model.task import (
    PlaceholderTask,
    Task,
    TaskDate,
    TaskName,
    TaskTime,
    Venue,
    compare_tasks,
)

NOW = datetime(2024, 6, 1, 12, 0)


def make(name="Task", d=None, t=None, v=None, *, done=False, now=NOW, reminder_days=3) -> Task:
    return Task.create(name, d, t, v, done=done, now=now, reminder_days=reminder_days)


# ---- construction ----


@pytest.mark.parametrize("name", [None, "", "   ", "\t"])
def test_create_rejects_missing_or_blank_name(name) -> None:
    with pytest.raises(ValidationError) as exc:
        make(name)
    assert str(exc.value) == TaskName.MESSAGE_CONSTRAINTS


def test_create_keeps_absent_fields_as_none() -> None:
    task = make("Read book")
    assert task.name == TaskName("Read book")
    assert task.date is None
    assert task.time is None
    assert task.venue is None
    assert task.done is False


def test_create_parses_strings_into_value_objects() -> None:
    task = make("Meeting", "2024-06-20", "14:30", "COM1")
    assert task.date == TaskDate(date(2024, 6, 20))
    assert task.time == TaskTime(time(14, 30))
    assert task.venue == Venue("COM1")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"d": "2024-13-01"},
        {"d": "01/06/2024"},
        {"t": "25:00"},
        {"t": "9am"},
        {"v": "  "},
    ],
)
def test_create_rejects_malformed_fields(kwargs) -> None:
    with pytest.raises(ValidationError):
        make("Task", **kwargs)


def test_constructor_requires_task_name_value_object() -> None:
    with pytest.raises(ValidationError):
        Task(name="plain string")  # type: ignore[arg-type]


# ---- due state ----


def test_past_task_is_overdue() -> None:
    task = make("Submit report", "2024-01-01", "09:00")
    assert task.overdue is True
    assert task.due_soon is False


def test_task_due_tomorrow_is_due_soon() -> None:
    tomorrow = (NOW + timedelta(days=1)).date().isoformat()
    task = make("Call bank", tomorrow)
    assert task.overdue is False
    assert task.due_soon is True


def test_task_outside_reminder_window_is_neither() -> None:
    task = make("Dentist", "2024-06-10", "10:00")
    assert task.overdue is False
    assert task.due_soon is False


def test_undated_task_is_never_overdue_or_due_soon() -> None:
    task = make("Someday")
    assert (task.overdue, task.due_soon) == (False, False)


def test_untimed_task_is_due_at_midnight() -> None:
    # 2024-06-01 00:00 is before NOW (12:00) on the same day.
    task = make("Today", "2024-06-01")
    assert task.overdue is True


def test_due_window_boundaries() -> None:
    exactly_now = make("a", NOW.date().isoformat(), NOW.strftime("%H:%M"))
    assert (exactly_now.overdue, exactly_now.due_soon) == (False, True)

    edge = NOW + timedelta(days=3)
    at_window_end = make("b", edge.date().isoformat(), edge.strftime("%H:%M"))
    assert (at_window_end.overdue, at_window_end.due_soon) == (False, False)

    just_inside = edge - timedelta(minutes=1)
    inside = make("c", just_inside.date().isoformat(), just_inside.strftime("%H:%M"))
    assert (inside.overdue, inside.due_soon) == (False, True)


def test_zero_day_reminder_window_disables_due_soon() -> None:
    task = make("a", "2024-06-01", "13:00", reminder_days=0)
    assert (task.overdue, task.due_soon) == (False, False)


@pytest.mark.parametrize("d", ["2024-01-01", "2024-06-02", "2030-01-01", None])
def test_done_task_is_neither_overdue_nor_due_soon(d) -> None:
    task = make("Done thing", d, done=True)
    assert (task.overdue, task.due_soon) == (False, False)


def test_mark_done_requires_recompute() -> None:
    task = make("Old", "2024-01-01")
    assert task.overdue is True

    task.mark_done()
    task.recompute_due_state(NOW, 3)
    assert task.done is True
    assert (task.overdue, task.due_soon) == (False, False)

    task.mark_not_done()
    task.recompute_due_state(NOW, 3)
    assert task.overdue is True


@pytest.mark.parametrize("hours", [-1000, -1, 0, 1, 47, 71, 72, 73, 1000])
@pytest.mark.parametrize("done", [False, True])
def test_at_most_one_flag_and_done_clears_both(hours, done) -> None:
    due = NOW + timedelta(hours=hours)
    task = make("x", due.date().isoformat(), due.strftime("%H:%M"), done=done)
    assert not (task.overdue and task.due_soon)
    if done:
        assert (task.overdue, task.due_soon) == (False, False)
    elif hours < 0:
        assert task.overdue
    elif hours < 72:
        assert task.due_soon


def test_recompute_is_a_function_of_now() -> None:
    task = make("Trip", "2024-06-10", "08:00")
    assert (task.overdue, task.due_soon) == (False, False)

    task.recompute_due_state(datetime(2024, 6, 8, 9, 0), 3)
    assert (task.overdue, task.due_soon) == (False, True)

    task.recompute_due_state(datetime(2024, 6, 11), 3)
    assert (task.overdue, task.due_soon) == (True, False)

    task.recompute_due_state(NOW, 3)
    assert (task.overdue, task.due_soon) == (False, False)


def test_listeners_are_notified_only_on_change() -> None:
    task = make("Trip", "2024-06-10", "08:00")
    seen: list[tuple[bool, bool]] = []
    task.add_listener(lambda t: seen.append((t.overdue, t.due_soon)))

    task.recompute_due_state(NOW, 3)
    assert seen == []

    task.recompute_due_state(datetime(2024, 6, 8), 3)
    task.recompute_due_state(datetime(2024, 6, 8, 1), 3)
    assert seen == [(False, True)]

    task.recompute_due_state(datetime(2024, 6, 12), 3)
    assert seen == [(False, True), (True, False)]


def test_failing_listener_does_not_break_recompute() -> None:
    task = make("Trip", "2024-06-10")

    def boom(_task: Task) -> None:
        raise RuntimeError("listener bug")

    task.add_listener(boom)
    task.recompute_due_state(datetime(2024, 6, 12), 3)
    assert task.overdue is True


# ---- equality ----


def test_equality_ignores_derived_flags() -> None:
    a = make("x", "2024-06-10")
    b = make("x", "2024-06-10")
    b.recompute_due_state(datetime(2024, 7, 1), 3)
    assert a.overdue != b.overdue
    assert a == b


@pytest.mark.parametrize(
    "other",
    [
        {"name": "y"},
        {"d": "2024-06-11"},
        {"d": None},
        {"t": "10:00"},
        {"v": "Hall"},
        {"done": True},
    ],
)
def test_equality_compares_every_field(other) -> None:
    base = {"name": "x", "d": "2024-06-10", "t": None, "v": None, "done": False}
    a = make(**base)
    b = make(**{**base, **other})
    assert a != b
    assert b != a


def test_tasks_are_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(make("x"))


# ---- ordering ----


def test_priority_classes_order() -> None:
    overdue = make("overdue", "2024-05-01")
    due_soon = make("soon", "2024-06-02")
    pending = make("pending", "2024-07-01")
    done = make("done", "2024-01-01", done=True)

    assert [t.priority_level() for t in (overdue, due_soon, pending, done)] == [1, 2, 3, 4]
    assert sorted([done, pending, due_soon, overdue]) == [overdue, due_soon, pending, done]


def test_ties_broken_by_date_then_time_then_venue() -> None:
    later_date = make("a", "2024-08-02", "08:00", "A")
    early_late_time = make("b", "2024-08-01", "18:00", "A")
    early_early_time_venue_b = make("c", "2024-08-01", "08:00", "B")
    early_early_time_venue_a = make("d", "2024-08-01", "08:00", "A")

    ordered = sorted([later_date, early_late_time, early_early_time_venue_b, early_early_time_venue_a])
    assert ordered == [early_early_time_venue_a, early_early_time_venue_b, early_late_time, later_date]


def test_identical_except_venue_ordered_by_venue() -> None:
    a = make("Meet", "2024-08-01", "09:00", "Alpha")
    b = make("Meet", "2024-08-01", "09:00", "Beta")
    assert compare_tasks(a, b) < 0
    assert compare_tasks(b, a) > 0


def test_absent_fields_sort_after_present_ones() -> None:
    dated = make("a", "2024-08-01")
    undated = make("b")
    assert compare_tasks(dated, undated) < 0

    timed = make("c", "2024-08-01", "09:00")
    assert compare_tasks(timed, dated) < 0

    with_venue = make("d", "2024-08-01", "09:00", "Hall")
    assert compare_tasks(with_venue, timed) < 0


def test_equal_tasks_compare_as_zero() -> None:
    a = make("Same", "2024-08-01", "09:00", "Hall")
    b = make("Same", "2024-08-01", "09:00", "Hall")
    assert compare_tasks(a, b) == 0
    assert not a < b
    assert not b < a


def _sample() -> list[Task]:
    out = []
    for name, d, t, v, done in itertools.product(
        ["a", "b"],
        [None, "2024-05-01", "2024-06-02", "2024-07-01"],
        [None, "09:00"],
        [None, "Hall"],
        [False, True],
    ):
        out.append(make(name, d, t, v, done=done))
    return out


def test_comparator_is_a_total_order_consistent_with_equality() -> None:
    tasks = _sample()
    for a, b in itertools.product(tasks, repeat=2):
        ab = compare_tasks(a, b)
        ba = compare_tasks(b, a)
        assert (ab == 0) == (a == b)
        assert (ab > 0) == (ba < 0)

    ordered = sorted(tasks)
    for a, b in zip(ordered, ordered[1:]):
        assert compare_tasks(a, b) <= 0


def test_equality_is_an_equivalence() -> None:
    tasks = _sample() + _sample()
    for a in tasks:
        assert a == a
    for a, b in itertools.product(tasks, repeat=2):
        assert (a == b) == (b == a)
    for a, b, c in itertools.product(tasks[:16], repeat=3):
        if a == b and b == c:
            assert a == c


# ---- text ----


def test_str_shows_empty_text_for_absent_fields() -> None:
    assert str(make("Read")) == "Read; Date: ; Time: ; Venue: "
    assert str(make("Meet", "2024-08-01", "09:05", "Hall")) == "Meet; Date: 2024-08-01; Time: 09:05; Venue: Hall"


def test_placeholder_task_has_no_schedule_or_flags() -> None:
    header = PlaceholderTask("All tasks")
    assert str(header) == "All tasks"
    assert header.date is None and header.time is None and header.venue is None
    assert (header.done, header.overdue, header.due_soon) == (False, False, False)
