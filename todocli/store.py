from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .errors import MalformedDocumentError, StorageError, TaskNotFoundError
from .models import Priority, Task

logger = logging.getLogger(__name__)


def _iso_now() -> str:
    return datetime.now().astimezone().isoformat()


@dataclass
class TaskStore:
    """
    In-memory task list plus the id counter.

    next_id only grows (delete never gives an id back); clear() is the one
    place it goes back to 1.
    """

    tasks: list[Task] = field(default_factory=list)
    next_id: int = 1

    def add(self, description: str, priority: Priority) -> Task:
        task = Task(
            id=self.next_id,
            description=description,
            priority=priority,
            created_at=_iso_now(),
        )
        self.tasks.append(task)
        self.next_id += 1
        logger.debug("Added task id=%s priority=%s", task.id, priority.value)
        return task

    def get(self, task_id: int) -> Optional[Task]:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def complete(self, task_id: int) -> Task:
        task = self.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        if not task.completed:
            task.completed = True
            task.completed_at = _iso_now()
            logger.debug("Completed task id=%s", task_id)
        return task

    def delete(self, task_id: int) -> Task:
        for idx, t in enumerate(self.tasks):
            if t.id == task_id:
                logger.debug("Deleted task id=%s", task_id)
                return self.tasks.pop(idx)
        raise TaskNotFoundError(task_id)

    def clear(self) -> None:
        # Ids restart at 1, so ids from before the clear get handed out again.
        self.tasks.clear()
        self.next_id = 1
        logger.debug("Cleared all tasks")

    def counts(self) -> tuple[int, int, int]:
        """(total, completed, pending)"""
        total = len(self.tasks)
        done = sum(1 for t in self.tasks if t.completed)
        return total, done, total - done

    def to_dict(self) -> dict[str, Any]:
        return {"tasks": [t.to_dict() for t in self.tasks], "next_id": self.next_id}

    @classmethod
    def from_dict(cls, data: Any) -> "TaskStore":
        if not isinstance(data, dict):
            raise MalformedDocumentError("expected an object at top level")
        raw_tasks = data.get("tasks")
        if not isinstance(raw_tasks, list):
            raise MalformedDocumentError("missing or invalid field `tasks`")
        next_id = data.get("next_id")
        if not _is_int(next_id):
            raise MalformedDocumentError("missing or invalid field `next_id`")
        return cls(tasks=[_parse_task(i, t) for i, t in enumerate(raw_tasks)], next_id=next_id)


def _is_int(v: Any) -> bool:
    """Non-negative integer (bool excluded)."""
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


_PRIORITY_VALUES = {p.value for p in Priority}

_TASK_FIELDS = {
    "id": _is_int,
    "description": lambda v: isinstance(v, str),
    "completed": lambda v: isinstance(v, bool),
    "priority": lambda v: isinstance(v, str) and v in _PRIORITY_VALUES,
    "created_at": lambda v: isinstance(v, str),
}


def _parse_task(index: int, raw: Any) -> Task:
    if not isinstance(raw, dict):
        raise MalformedDocumentError(f"tasks[{index}] is not an object")
    for name, ok in _TASK_FIELDS.items():
        if name not in raw:
            raise MalformedDocumentError(f"tasks[{index}] is missing field `{name}`")
        if not ok(raw[name]):
            raise MalformedDocumentError(f"tasks[{index}] has invalid `{name}`: {raw[name]!r}")
    completed_at = raw.get("completed_at")
    if completed_at is not None and not isinstance(completed_at, str):
        raise MalformedDocumentError(f"tasks[{index}] has invalid `completed_at`: {completed_at!r}")
    return Task.from_dict(raw)


def load(path: Path) -> TaskStore:
    """
    Missing file -> empty store. Anything else must parse cleanly.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("No task file at %s; starting empty", path)
        return TaskStore()
    except OSError as e:
        raise StorageError(e) from e
    except UnicodeDecodeError as e:
        raise MalformedDocumentError(f"file is not valid UTF-8: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(str(e)) from e
    store = TaskStore.from_dict(data)
    logger.info("Loaded %d tasks from %s (next_id=%d)", len(store.tasks), path, store.next_id)
    return store


def save(store: TaskStore, path: Path) -> None:
    """Overwrite path with the whole store. Not atomic."""
    text = json.dumps(store.to_dict(), indent=2, ensure_ascii=False) + "\n"
    # Encode before opening: opening truncates the existing file.
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise StorageError(e) from e
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise StorageError(e) from e
    logger.info("Saved %d tasks to %s", len(store.tasks), path)
