# app/services/stores.py
"""
Read-only query access to tasks and users for the dashboard
"""

from collections import Counter
from datetime import timedelta
from typing import Any, List, Optional, Sequence, Tuple, Union

from sqlalchemy import case, extract, func
from sqlalchemy.orm import Session, aliased

from app.config.settings import DashboardConfig
from app.models.task import Task, TaskStatus
from app.models.user import User
from app.utils.task_filter import TaskFilter, is_on_time

# Month keys group by (year, month) of a date expression
MONTH_KEYS = {
    "completedMonth": lambda: Task.completed_at,
    "relevantMonth": lambda: func.coalesce(Task.next_due_date, Task.due_date),
}

COLUMN_KEYS = {
    "status": Task.status,
    "taskType": Task.task_type,
    "priority": Task.priority,
    "assignedTo": Task.assigned_to,
}


class TaskStore:
    """Counting and grouping over active tasks"""

    def __init__(self, db: Session, grace_hours: Optional[int] = None):
        self.db = db
        if grace_hours is None:
            grace_hours = DashboardConfig.ANALYTICS['on_time_grace_hours']
        self.grace = timedelta(hours=grace_hours)

    def count_tasks(self, task_filter: TaskFilter) -> int:
        if task_filter.on_time:
            return len(self._on_time_rows(task_filter, []))
        return self.db.query(func.count(Task.id)).filter(*task_filter.clauses()).scalar() or 0

    def group_tasks(
        self,
        task_filter: TaskFilter,
        group_key: Union[str, Sequence[str]]
    ) -> List[Tuple[Any, int]]:
        """Count tasks per key; a sequence of keys groups by their combination"""
        keys = (group_key,) if isinstance(group_key, str) else tuple(group_key)
        columns = []
        for key in keys:
            columns.extend(self._group_columns(key))

        if task_filter.on_time:
            rows = self._on_time_rows(task_filter, columns)
            counter = Counter(self._row_key(keys, row[:len(columns)]) for row in rows)
            return list(counter.items())

        rows = (
            self.db.query(*columns, func.count(Task.id))
            .filter(*task_filter.clauses())
            .group_by(*columns)
            .all()
        )
        return [(self._row_key(keys, row[:-1]), row[-1]) for row in rows]

    def completion_durations(self, task_filter: TaskFilter) -> List[timedelta]:
        """Time from creation to completion for each matching completed task"""
        rows = (
            self.db.query(Task.created_at, Task.completed_at)
            .filter(*task_filter.clauses(), Task.completed_at.isnot(None))
            .all()
        )
        return [completed_at - created_at for created_at, completed_at in rows]

    def recent_activity(self, task_filter: TaskFilter, limit: int) -> List[Any]:
        """Latest task events with assignee and assigner usernames"""
        assignee = aliased(User)
        assigner = aliased(User)
        activity_date = case(
            (Task.status == TaskStatus.COMPLETED.value, Task.completed_at),
            else_=Task.created_at
        ).label("activity_date")

        return (
            self.db.query(
                Task.id,
                Task.title,
                Task.task_type,
                Task.status,
                assignee.username.label("username"),
                assigner.username.label("assigned_by"),
                activity_date
            )
            .outerjoin(assignee, Task.assigned_to == assignee.id)
            .outerjoin(assigner, Task.assigned_by == assigner.id)
            .filter(*task_filter.clauses())
            .order_by(activity_date.desc().nulls_last(), Task.id.desc())
            .limit(limit)
            .all()
        )

    def _on_time_rows(self, task_filter: TaskFilter, columns: List) -> List[Any]:
        rows = (
            self.db.query(*columns, Task.completed_at, Task.due_date)
            .filter(*task_filter.clauses())
            .all()
        )
        return [row for row in rows if is_on_time(row[-2], row[-1], self.grace)]

    @staticmethod
    def _group_columns(key: str) -> List:
        if key in MONTH_KEYS:
            expression = MONTH_KEYS[key]()
            return [extract("year", expression), extract("month", expression)]
        if key in COLUMN_KEYS:
            return [COLUMN_KEYS[key]]
        raise ValueError(f"Unsupported group key: {key}")

    @staticmethod
    def _row_key(keys: Tuple[str, ...], values: Sequence[Any]):
        parts = []
        position = 0
        for key in keys:
            if key in MONTH_KEYS:
                year, month = values[position], values[position + 1]
                position += 2
                if year is None or month is None:
                    parts.append(None)
                else:
                    parts.append((int(year), int(month)))
            else:
                parts.append(values[position])
                position += 1
        return parts[0] if len(parts) == 1 else tuple(parts)


class UserStore:
    """User lookups for team analytics"""

    def __init__(self, db: Session):
        self.db = db

    def list_active_users(self) -> List[User]:
        return self.db.query(User).filter(User.is_active == True).order_by(User.id).all()

    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()
