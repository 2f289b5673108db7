"""Text rendering for the `list` command.

Colors are plain ANSI escapes and are only emitted when the caller asks
for them (see cli.color_enabled).
"""
from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from .models import Task
from .store import TaskStore

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
CYAN = "\033[36m"

RULE = "-" * 40
DONE_MARK = "✓"
PENDING_MARK = "x"

# chrono-style timestamps can carry nanoseconds; datetime only takes micro.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def _style(text: str, use_color: bool, *styles: str) -> str:
    if not use_color:
        return text
    return "".join(styles) + text + RESET


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse a stored ISO-8601 timestamp; None if it cannot be read."""
    text = _FRACTION_RE.sub(r"\1", value.strip()).replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_local(value: str) -> Optional[str]:
    dt = parse_timestamp(value)
    if dt is None:
        return None
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")


def _task_lines(task: Task, use_color: bool) -> list[str]:
    if task.completed:
        status = _style(DONE_MARK, use_color, GREEN, BOLD)
        desc = _style(task.description, use_color, DIM)
    else:
        status = _style(PENDING_MARK, use_color, RED, BOLD)
        desc = task.description
    id_display = _style(f"#{task.id}", use_color, CYAN)
    lines = [f"{status} {id_display}: {desc} [{task.priority.value}]"]

    if task.completed:
        # Files from older versions have no completed_at; created_at stands in.
        when = format_local(task.completed_at or task.created_at)
        if when is not None:
            lines.append(f"   {_style('Completed on:', use_color, DIM)} {when}")
    return lines


def render_listing(store: TaskStore, show: Optional[str] = None, use_color: bool = False) -> str:
    """
    show: None for every task, "pending" or "done" to filter the task lines.
    The footer always counts the whole store.
    """
    if not store.tasks:
        return _style("No tasks found!", use_color, YELLOW)

    if show == "pending":
        tasks = [t for t in store.tasks if not t.completed]
    elif show == "done":
        tasks = [t for t in store.tasks if t.completed]
    else:
        tasks = list(store.tasks)

    out = [_style("TODO List:", use_color, GREEN, BOLD), _style(RULE, use_color, BLUE)]
    if not tasks:
        out.append("No matching tasks.")
    for t in tasks:
        out.extend(_task_lines(t, use_color))

    total, done, pending = store.counts()
    out.append("")
    out.append(_style(RULE, use_color, BLUE))
    out.append(
        f"{_style('Total', use_color, BOLD)}: {total} | "
        f"{_style('Completed', use_color, GREEN, BOLD)}: {done} | "
        f"{_style('Pending', use_color, RED, BOLD)}: {pending}"
    )
    return "\n".join(out)
