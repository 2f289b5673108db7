from todocli import store as task_store
from todocli.models import Priority
from todocli.render import format_local, parse_timestamp, render_listing
from todocli.store import TaskStore


def _store(monkeypatch) -> TaskStore:
    monkeypatch.setattr(task_store, "_iso_now", lambda: "2026-10-19T09:30:00+00:00")
    s = TaskStore()
    s.add("buy milk", Priority.LOW)
    s.add("walk dog", Priority.HIGH)
    s.add("call mom", Priority.MEDIUM)
    s.complete(1)
    return s


def test_empty_store_message():
    assert render_listing(TaskStore()) == "No tasks found!"


def test_listing_lines_and_footer(monkeypatch):
    s = _store(monkeypatch)
    lines = render_listing(s).splitlines()

    assert lines[0] == "TODO List:"
    assert lines[1] == "-" * 40
    assert lines[2] == "✓ #1: buy milk [Low]"
    assert lines[3] == f"   Completed on: {format_local('2026-10-19T09:30:00+00:00')}"
    assert lines[4] == "x #2: walk dog [High]"
    assert lines[5] == "x #3: call mom [Medium]"
    assert lines[-3:] == ["", "-" * 40, "Total: 3 | Completed: 1 | Pending: 2"]


def test_filter_keeps_full_footer(monkeypatch):
    s = _store(monkeypatch)
    out = render_listing(s, show="pending")
    assert "#1" not in out
    assert "#2" in out and "#3" in out
    assert out.endswith("Total: 3 | Completed: 1 | Pending: 2")

    done_only = render_listing(s, show="done")
    assert "#1" in done_only and "#2" not in done_only


def test_filter_with_no_matches(monkeypatch):
    s = _store(monkeypatch)
    s.delete(1)
    assert "No matching tasks." in render_listing(s, show="done")


def test_completed_falls_back_to_created_at():
    s = TaskStore.from_dict(
        {
            "tasks": [
                {
                    "id": 1,
                    "description": "legacy",
                    "completed": True,
                    "priority": "Low",
                    "created_at": "2025-03-01T08:00:00.123456789+01:00",
                }
            ],
            "next_id": 2,
        }
    )
    expected = format_local("2025-03-01T08:00:00+01:00")
    assert f"Completed on: {expected}" in render_listing(s)


def test_unparseable_timestamp_skips_completed_line():
    s = TaskStore()
    s.add("odd", Priority.LOW)
    s.tasks[0].completed = True
    s.tasks[0].completed_at = "yesterday"
    assert "Completed on" not in render_listing(s)


def test_parse_timestamp_variants():
    assert parse_timestamp("2026-10-19T09:30:00Z") is not None
    assert parse_timestamp("2026-10-19T09:30:00.123456789+02:00").microsecond == 123456
    assert parse_timestamp("garbage") is None


def test_color_only_when_requested(monkeypatch):
    s = _store(monkeypatch)
    assert "\033[" not in render_listing(s)
    assert "\033[" in render_listing(s, use_color=True)
