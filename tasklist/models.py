"""
Database models for the Tasklist service.

This module defines the SQLAlchemy model for the single persisted
entity, the to-do ``Task``, together with its JSON representation.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from tasklist import db


class Task(db.Model):
    """
    Task model representing a to-do item.

    Attributes:
        id: Unique identifier, assigned by the database on first save.
        title: Short title describing the task (may be null).
        description: Free-text description of the task.
        completed: Whether the task is done. Defaults to False.
        due_date: Optional calendar date; the default sort key.
    """

    __tablename__ = "tasks"

    id: int | None = db.Column(db.Integer, primary_key=True)
    title: str | None = db.Column(db.String(255), nullable=True)
    description: str | None = db.Column(db.Text, nullable=True)
    completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    due_date: date | None = db.Column(db.Date, nullable=True)

    def __init__(self, **kwargs: Any) -> None:
        # Column defaults only apply at INSERT; unsaved tasks read False too.
        kwargs.setdefault("completed", False)
        super().__init__(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to its JSON representation.

        Returns:
            Dictionary with ``id``, ``title``, ``description``,
            ``completed`` and ``dueDate`` (``YYYY-MM-DD`` or None).
        """
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": bool(self.completed),
            "dueDate": self.due_date.isoformat() if self.due_date else None,
        }

    def __repr__(self) -> str:
        """Return string representation of the task."""
        return f"<Task {self.id}: {self.title}>"
