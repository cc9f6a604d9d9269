# app/utils/task_filter.py
"""
Composable task predicates for dashboard queries.

A request builds one base ``TaskFilter`` from its scope and derives every
other query from it (by status, by type, by date), so the scope and the
soft-delete rule are applied identically everywhere.
"""

import enum
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import and_, func, or_

from app.models.task import Task, TaskStatus


def _value(item) -> str:
    return item.value if isinstance(item, enum.Enum) else item


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC already"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    @classmethod
    def from_bounds(cls, start: Optional[datetime], end: Optional[datetime]) -> Optional["DateRange"]:
        """Build a range only when both bounds are given"""
        if start is None or end is None:
            return None
        return cls(to_naive_utc(start), to_naive_utc(end))

    def contains(self, value: Optional[datetime]) -> bool:
        return value is not None and self.start <= value <= self.end

    def between(self, column):
        return and_(column >= self.start, column <= self.end)


def is_on_time(completed_at: Optional[datetime], due_date: Optional[datetime], grace: timedelta) -> bool:
    """A task is on time when completed no later than its due date plus the grace period"""
    if completed_at is None or due_date is None:
        return False
    return completed_at <= due_date + grace


@dataclass(frozen=True)
class TaskFilter:
    assigned_to: Optional[int] = None
    statuses: Tuple[str, ...] = ()
    task_types: Tuple[str, ...] = ()
    # due_date OR next_due_date inside the range
    relevant_date_range: Optional[DateRange] = None
    # coalesce(next_due_date, due_date) inside the range
    scheduled_range: Optional[DateRange] = None
    completed_range: Optional[DateRange] = None
    # created in range, completed in range, or went overdue in range
    activity_range: Optional[DateRange] = None
    require_completed_at: bool = False
    # evaluated by the store against completed_at and due_date
    on_time: bool = False

    @classmethod
    def for_scope(cls, subject_user_id: Optional[int], is_admin: bool) -> "TaskFilter":
        """Base filter for a request: all active tasks for admins, own tasks otherwise"""
        if is_admin:
            return cls()
        if subject_user_id is None:
            raise ValueError("A subject user is required for a non-admin scope")
        return cls(assigned_to=subject_user_id)

    def for_user(self, user_id: int) -> "TaskFilter":
        return replace(self, assigned_to=user_id)

    def with_status(self, *statuses) -> "TaskFilter":
        return replace(self, statuses=tuple(_value(s) for s in statuses))

    def with_types(self, *task_types) -> "TaskFilter":
        return replace(self, task_types=tuple(_value(t) for t in task_types))

    def within_relevant_dates(self, date_range: Optional[DateRange]) -> "TaskFilter":
        return replace(self, relevant_date_range=date_range)

    def scheduled_within(self, date_range: DateRange) -> "TaskFilter":
        return replace(self, scheduled_range=date_range)

    def completed_within(self, date_range: Optional[DateRange]) -> "TaskFilter":
        return replace(self, require_completed_at=True, completed_range=date_range)

    def completed_for_rate(self, date_range: Optional[DateRange]) -> "TaskFilter":
        """Completed tasks eligible for an on-time rate; numerator and denominator share this"""
        return self.with_status(TaskStatus.COMPLETED).completed_within(date_range)

    def with_activity_in(self, date_range: Optional[DateRange]) -> "TaskFilter":
        return replace(self, activity_range=date_range)

    def only_on_time(self) -> "TaskFilter":
        return replace(self, on_time=True, require_completed_at=True)

    def clauses(self) -> List:
        """SQLAlchemy criteria for every condition except the on-time comparison"""
        criteria = [Task.is_active == True]

        if self.assigned_to is not None:
            criteria.append(Task.assigned_to == self.assigned_to)
        if self.statuses:
            criteria.append(Task.status.in_(self.statuses))
        if self.task_types:
            criteria.append(Task.task_type.in_(self.task_types))

        if self.relevant_date_range is not None:
            criteria.append(or_(
                self.relevant_date_range.between(Task.due_date),
                self.relevant_date_range.between(Task.next_due_date)
            ))
        if self.scheduled_range is not None:
            criteria.append(self.scheduled_range.between(
                func.coalesce(Task.next_due_date, Task.due_date)
            ))

        if self.require_completed_at:
            criteria.append(Task.completed_at.isnot(None))
        if self.completed_range is not None:
            criteria.append(self.completed_range.between(Task.completed_at))

        if self.activity_range is not None:
            criteria.append(or_(
                self.activity_range.between(Task.created_at),
                and_(
                    self.activity_range.between(Task.completed_at),
                    Task.status == TaskStatus.COMPLETED.value
                ),
                and_(
                    self.activity_range.between(Task.due_date),
                    Task.status == TaskStatus.OVERDUE.value
                )
            ))

        if self.on_time:
            # tasks without a due date can never be on time
            criteria.append(Task.due_date.isnot(None))

        return criteria


def types_in(grouped: Iterable[Tuple[str, int]], task_types) -> int:
    """Sum grouped counts whose key is one of the given task types"""
    wanted = {_value(t) for t in task_types}
    return sum(count for key, count in grouped if key in wanted)
