"""
Persistence layer for tasks.

``TaskStore`` wraps a SQLAlchemy session and exposes the handful of
queries the API needs. Each method issues a single statement (plus a
commit for writes); callers that read and then write perform two
separate round trips.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, scoped_session

from tasklist.models import Task

logger = logging.getLogger(__name__)

# Range of a signed 64-bit INTEGER primary key
MIN_TASK_ID = -(2**63)
MAX_TASK_ID = 2**63 - 1


def _id_in_range(task_id: int) -> bool:
    return MIN_TASK_ID <= task_id <= MAX_TASK_ID


class TaskStore:
    """
    Store for ``Task`` rows backed by a SQLAlchemy session.

    Args:
        session: A ``Session`` or a ``scoped_session`` such as
            Flask-SQLAlchemy's ``db.session``.
    """

    def __init__(self, session: Session | scoped_session) -> None:
        self._session = session

    def list_all_ordered_by_due_date(self) -> Sequence[Task]:
        """
        Return every task sorted by due date, earliest first.

        Tasks without a due date sort after all dated tasks. Equal due
        dates keep insertion order (ascending id).
        """
        stmt = select(Task).order_by(
            Task.due_date.is_(None),
            Task.due_date.asc(),
            Task.id.asc(),
        )
        return self._session.scalars(stmt).all()

    def list_by_completed(self, completed: bool) -> Sequence[Task]:
        """Return all tasks whose completion flag equals ``completed``."""
        stmt = select(Task).where(Task.completed == completed).order_by(Task.id.asc())
        return self._session.scalars(stmt).all()

    def find_by_id(self, task_id: int) -> Task | None:
        """Return the task with ``task_id``, or None (also for ids no row can have)."""
        if not _id_in_range(task_id):
            return None
        return self._session.get(Task, task_id)

    def exists_by_id(self, task_id: int) -> bool:
        if not _id_in_range(task_id):
            return False
        stmt = select(Task.id).where(Task.id == task_id).limit(1)
        return self._session.scalar(stmt) is not None

    def save(self, task: Task) -> Task:
        """
        Insert or overwrite a task and commit.

        A task without an id is inserted and receives a new id. A task
        with an id overwrites the row with that id.

        Returns:
            The persisted instance, reflecting the committed row.
        """
        if task.id is None:
            self._session.add(task)
            persisted = task
        else:
            persisted = self._session.merge(task)
        self._session.commit()
        logger.debug("Saved task %s", persisted.id)
        return persisted

    def delete_by_id(self, task_id: int) -> None:
        """Delete the task with ``task_id``. Missing ids are ignored."""
        if not _id_in_range(task_id):
            return
        result = self._session.execute(delete(Task).where(Task.id == task_id))
        self._session.commit()
        logger.debug("Deleted %s row(s) for task %s", result.rowcount, task_id)
