# app/services/analytics.py
"""
Dashboard analytics aggregation.

Every figure is recomputed per request from the task and user stores:
status/type/priority breakdowns, six-month completion and planned trends,
per-member performance for admins, recent activity and overall timeliness.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.settings import DashboardConfig
from app.models.task import TaskStatus, TaskType, RECURRING_TYPES
from app.models.user import User
from app.schemas.dashboard import (
    ActivityItem,
    AnalyticsReport,
    CountReport,
    DistributionItem,
    GroupCount,
    MemberPerformance,
    MemberTrendReport,
    PerformanceMetrics,
    TrendBucket,
)
from app.services.stores import TaskStore, UserStore
from app.utils.task_filter import DateRange, TaskFilter, types_in

logger = logging.getLogger(__name__)

# Field prefix used by the dashboard for each broken-down task type
TYPE_PREFIXES = {
    TaskType.ONE_TIME.value: "oneTime",
    TaskType.DAILY.value: "daily",
    TaskType.WEEKLY.value: "weekly",
    TaskType.MONTHLY.value: "monthly",
    TaskType.YEARLY.value: "yearly",
}

RECURRING_VALUES = tuple(task_type.value for task_type in RECURRING_TYPES)


class AnalyticsError(Exception):
    """Raised when the analytics for a request cannot be computed"""


class MemberNotFoundError(AnalyticsError):
    def __init__(self, username: str):
        super().__init__(f"User '{username}' not found")
        self.username = username


@dataclass(frozen=True)
class AnalyticsScope:
    subject_user_id: Optional[int] = None
    is_admin: bool = False
    date_range: Optional[DateRange] = None

    def base_filter(self) -> TaskFilter:
        return TaskFilter.for_scope(self.subject_user_id, self.is_admin)


@dataclass(frozen=True)
class Timeliness:
    """On-time counts over completed tasks, split by one-time and recurring"""
    completed: int = 0
    on_time: int = 0
    one_time_completed: int = 0
    one_time_on_time: int = 0
    recurring_completed: int = 0
    recurring_on_time: int = 0


def round_half_up(value: float, digits: int = 0) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def rate(numerator: int, denominator: int, digits: int = 1) -> float:
    """Percentage of numerator over denominator, 0 when the denominator is empty"""
    if denominator <= 0:
        return 0.0
    return round_half_up(numerator / denominator * 100, digits)


def trend_months(now: datetime, count: int) -> List[Tuple[int, int]]:
    """(year, month) pairs for the trailing months ending at now's month, oldest first"""
    months = []
    year, month = now.year, now.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            month = 12
            year -= 1
    months.reverse()
    return months


def trend_window(months: List[Tuple[int, int]]) -> DateRange:
    first_year, first_month = months[0]
    last_year, last_month = months[-1]
    if last_month == 12:
        following = datetime(last_year + 1, 1, 1)
    else:
        following = datetime(last_year, last_month + 1, 1)
    return DateRange(datetime(first_year, first_month, 1), following - timedelta(microseconds=1))


def fill_trend(months: List[Tuple[int, int]], grouped: Iterable[Tuple[Any, int]]) -> List[TrendBucket]:
    counts = {key: count for key, count in grouped if key is not None}
    return [
        TrendBucket(month=month, year=year, count=counts.get((year, month), 0))
        for year, month in months
    ]


def sorted_group_counts(grouped: Iterable[Tuple[Any, int]]) -> List[GroupCount]:
    ordered = sorted(grouped, key=lambda item: (-item[1], item[0] or ""))
    return [GroupCount(key=key, count=count) for key, count in ordered]


def type_breakdown(grouped: Iterable[Tuple[Tuple[str, str], int]]) -> Dict[str, int]:
    """Reshape (taskType, status) counts into the dashboard's count fields"""
    fields = {"totalTasks": 0, "pendingTasks": 0, "completedTasks": 0, "overdueTasks": 0}
    for prefix in TYPE_PREFIXES.values():
        for suffix in ("Tasks", "Pending", "Completed"):
            fields[f"{prefix}{suffix}"] = 0

    for (task_type, status), count in grouped:
        fields["totalTasks"] += count
        if status == TaskStatus.PENDING.value:
            fields["pendingTasks"] += count
        elif status == TaskStatus.COMPLETED.value:
            fields["completedTasks"] += count
        elif status == TaskStatus.OVERDUE.value:
            fields["overdueTasks"] += count

        prefix = TYPE_PREFIXES.get(task_type)
        if prefix is None:
            continue
        fields[f"{prefix}Tasks"] += count
        if status == TaskStatus.PENDING.value:
            fields[f"{prefix}Pending"] += count
        elif status == TaskStatus.COMPLETED.value:
            fields[f"{prefix}Completed"] += count

    for suffix in ("Tasks", "Pending", "Completed"):
        fields[f"recurring{suffix}"] = sum(
            fields[f"{TYPE_PREFIXES[task_type]}{suffix}"] for task_type in RECURRING_VALUES
        )
    return fields


def activity_type(status: str) -> str:
    if status == TaskStatus.COMPLETED.value:
        return "completed"
    if status == TaskStatus.OVERDUE.value:
        return "overdue"
    return "assigned"


class AnalyticsAggregator:
    """Computes dashboard analytics and counts against the task and user stores"""

    def __init__(self, db: Session, now: Optional[datetime] = None):
        self.tasks = TaskStore(db)
        self.users = UserStore(db)
        self.now = now
        self.trend_length = DashboardConfig.ANALYTICS['trend_months']
        self.activity_limit = DashboardConfig.ANALYTICS['recent_activity_limit']

    def compute_analytics(self, scope: AnalyticsScope) -> AnalyticsReport:
        return self._run("analytics", scope, self._build_analytics, scope)

    def compute_counts(self, scope: AnalyticsScope) -> CountReport:
        return self._run("counts", scope, self._build_counts, scope)

    def compute_member_trend(self, username: str, date_range: Optional[DateRange] = None) -> MemberTrendReport:
        scope = AnalyticsScope(is_admin=True, date_range=date_range)
        return self._run("member trend", scope, self._build_member_trend, username, date_range)

    def _run(self, label: str, scope: AnalyticsScope, build: Callable, *args):
        logger.debug(f"Computing {label} for user={scope.subject_user_id} admin={scope.is_admin} range={scope.date_range}")
        started = time.perf_counter()
        try:
            result = build(*args)
        except SQLAlchemyError as e:
            logger.exception(f"Dashboard {label} query failed")
            raise AnalyticsError(str(e)) from e
        elapsed = (time.perf_counter() - started) * 1000
        logger.info(f"Computed dashboard {label} (admin={scope.is_admin}) in {elapsed:.1f} ms")
        return result

    def _current_time(self) -> datetime:
        return self.now or datetime.utcnow()

    def _build_analytics(self, scope: AnalyticsScope) -> AnalyticsReport:
        base = scope.base_filter()
        stats = base.within_relevant_dates(scope.date_range)

        status_stats = sorted_group_counts(self.tasks.group_tasks(stats, "status"))
        type_stats = sorted_group_counts(self.tasks.group_tasks(stats, "taskType"))
        priority_stats = sorted_group_counts(self.tasks.group_tasks(stats, "priority"))

        # Trends always cover the trailing months, whatever the requested range
        months = trend_months(self._current_time(), self.trend_length)
        completion_trend, planned_trend = self._trends(base, months)

        team_performance = []
        user_performance = None
        if scope.is_admin:
            team_performance = self._team_performance(scope.date_range)
        elif scope.subject_user_id is not None:
            user = self.users.get(scope.subject_user_id)
            if user is not None:
                user_performance = self._member_performance(user, scope.date_range)

        recent_activity = self._recent_activity(base.with_activity_in(scope.date_range))
        metrics = self._performance_metrics(base, stats, type_stats, scope.date_range)

        return AnalyticsReport(
            statusStats=status_stats,
            typeStats=type_stats,
            priorityStats=priority_stats,
            completionTrend=completion_trend,
            plannedTrend=planned_trend,
            teamPerformance=team_performance,
            userPerformance=user_performance,
            recentActivity=recent_activity,
            performanceMetrics=metrics
        )

    def _build_counts(self, scope: AnalyticsScope) -> CountReport:
        stats = scope.base_filter().within_relevant_dates(scope.date_range)
        grouped = self.tasks.group_tasks(stats, ("taskType", "status"))
        return CountReport(**type_breakdown(grouped))

    def _build_member_trend(self, username: str, date_range: Optional[DateRange]) -> MemberTrendReport:
        user = self.users.get_by_username(username)
        if user is None:
            raise MemberNotFoundError(username)

        months = trend_months(self._current_time(), self.trend_length)
        completion_trend, planned_trend = self._trends(TaskFilter().for_user(user.id), months)

        return MemberTrendReport(
            username=user.username,
            completionTrend=completion_trend,
            plannedTrend=planned_trend,
            performance=self._member_performance(user, date_range)
        )

    def _trends(self, base: TaskFilter, months: List[Tuple[int, int]]) -> Tuple[List[TrendBucket], List[TrendBucket]]:
        window = trend_window(months)
        completed = self.tasks.group_tasks(
            base.with_status(TaskStatus.COMPLETED).completed_within(window),
            "completedMonth"
        )
        planned = self.tasks.group_tasks(base.scheduled_within(window), "relevantMonth")
        return fill_trend(months, completed), fill_trend(months, planned)

    def _timeliness(self, rate_filter: TaskFilter) -> Timeliness:
        completed = self.tasks.group_tasks(rate_filter, "taskType")
        on_time = self.tasks.group_tasks(rate_filter.only_on_time(), "taskType")
        return Timeliness(
            completed=sum(count for _, count in completed),
            on_time=sum(count for _, count in on_time),
            one_time_completed=types_in(completed, [TaskType.ONE_TIME]),
            one_time_on_time=types_in(on_time, [TaskType.ONE_TIME]),
            recurring_completed=types_in(completed, RECURRING_TYPES),
            recurring_on_time=types_in(on_time, RECURRING_TYPES)
        )

    def _member_performance(self, user: User, date_range: Optional[DateRange]) -> Optional[MemberPerformance]:
        member = TaskFilter().for_user(user.id)
        fields = type_breakdown(
            self.tasks.group_tasks(member.within_relevant_dates(date_range), ("taskType", "status"))
        )
        fields.pop("overdueTasks")

        if not (fields["totalTasks"] > 0 or fields["completedTasks"] > 0 or fields["pendingTasks"] > 0):
            return None

        timeliness = self._timeliness(member.completed_for_rate(date_range))
        return MemberPerformance(
            userId=user.id,
            username=user.username,
            completionRate=rate(fields["completedTasks"], fields["totalTasks"]),
            onTimeRate=rate(timeliness.on_time, timeliness.completed),
            oneTimeOnTimeRate=rate(timeliness.one_time_on_time, timeliness.one_time_completed),
            recurringOnTimeRate=rate(timeliness.recurring_on_time, timeliness.recurring_completed),
            onTimeCompletedTasks=timeliness.on_time,
            onTimeRecurringCompleted=timeliness.recurring_on_time,
            **fields
        )

    def _team_performance(self, date_range: Optional[DateRange]) -> List[MemberPerformance]:
        team = []
        for user in self.users.list_active_users():
            performance = self._member_performance(user, date_range)
            if performance is not None:
                team.append(performance)
        team.sort(key=lambda member: member.completionRate, reverse=True)
        return team

    def _recent_activity(self, activity_filter: TaskFilter) -> List[ActivityItem]:
        rows = self.tasks.recent_activity(activity_filter, self.activity_limit)
        return [
            ActivityItem(
                taskId=row.id,
                title=row.title,
                taskType=row.task_type,
                type=activity_type(row.status),
                username=row.username,
                assignedBy=row.assigned_by,
                date=row.activity_date
            )
            for row in rows
        ]

    def _performance_metrics(
        self,
        base: TaskFilter,
        stats: TaskFilter,
        type_stats: List[GroupCount],
        date_range: Optional[DateRange]
    ) -> PerformanceMetrics:
        total_active = self.tasks.count_tasks(stats)
        timeliness = self._timeliness(base.completed_for_rate(date_range))

        durations = self.tasks.completion_durations(
            stats.with_status(TaskStatus.COMPLETED).completed_within(None)
        )
        average_days = 0
        if durations:
            mean_seconds = sum(d.total_seconds() for d in durations) / len(durations)
            average_days = int(round_half_up(mean_seconds / 86400))

        distribution = [
            DistributionItem(
                type=item.key,
                count=item.count,
                percentage=int(rate(item.count, total_active, 0))
            )
            for item in type_stats
        ]

        return PerformanceMetrics(
            onTimeCompletion=int(rate(timeliness.on_time, timeliness.completed, 0)),
            averageCompletionTime=average_days,
            taskDistribution=distribution,
            oneTimeOnTimeRate=rate(timeliness.one_time_on_time, timeliness.one_time_completed),
            recurringOnTimeRate=rate(timeliness.recurring_on_time, timeliness.recurring_completed)
        )
