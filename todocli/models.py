from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_cli(cls, token: str) -> "Priority":
        """
        Map a command-line token (low|medium|high, case-sensitive) to a Priority.
        """
        for p in cls:
            if p.value.lower() == token:
                return p
        raise ValueError(f"Unknown priority '{token}'.")


CLI_PRIORITIES = [p.value.lower() for p in Priority]


@dataclass
class Task:
    id: int
    description: str
    priority: Priority
    created_at: str  # ISO-8601 with offset
    completed: bool = False
    completed_at: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority.value,
            "created_at": self.created_at,
        }
        if self.completed_at is not None:
            d["completed_at"] = self.completed_at
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        # Callers validate the shape; see store._parse_task.
        return cls(
            id=int(data["id"]),
            description=str(data["description"]),
            priority=Priority(data["priority"]),
            created_at=str(data["created_at"]),
            completed=bool(data["completed"]),
            completed_at=data.get("completed_at"),
        )
