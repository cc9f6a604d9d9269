from pydantic import BaseModel
from datetime import datetime
from typing import List, Literal, Optional

class GroupCount(BaseModel):
    key: Optional[str] = None
    count: int

class TrendBucket(BaseModel):
    month: int
    year: int
    count: int

class MemberPerformance(BaseModel):
    userId: int
    username: str
    totalTasks: int
    completedTasks: int
    pendingTasks: int
    oneTimeTasks: int
    oneTimePending: int
    oneTimeCompleted: int
    oneTimeOnTimeRate: float
    dailyTasks: int
    dailyPending: int
    dailyCompleted: int
    weeklyTasks: int
    weeklyPending: int
    weeklyCompleted: int
    monthlyTasks: int
    monthlyPending: int
    monthlyCompleted: int
    yearlyTasks: int
    yearlyPending: int
    yearlyCompleted: int
    recurringTasks: int
    recurringPending: int
    recurringCompleted: int
    recurringOnTimeRate: float
    completionRate: float
    onTimeRate: float
    onTimeCompletedTasks: int
    onTimeRecurringCompleted: int

class ActivityItem(BaseModel):
    taskId: int
    title: str
    taskType: str
    type: Literal["assigned", "completed", "overdue"]
    username: Optional[str] = None
    assignedBy: Optional[str] = None
    date: Optional[datetime] = None

class DistributionItem(BaseModel):
    type: str
    count: int
    percentage: int

class PerformanceMetrics(BaseModel):
    onTimeCompletion: int
    averageCompletionTime: int
    taskDistribution: List[DistributionItem]
    oneTimeOnTimeRate: float
    recurringOnTimeRate: float

class AnalyticsReport(BaseModel):
    statusStats: List[GroupCount]
    typeStats: List[GroupCount]
    priorityStats: List[GroupCount]
    completionTrend: List[TrendBucket]
    plannedTrend: List[TrendBucket]
    teamPerformance: List[MemberPerformance] = []
    userPerformance: Optional[MemberPerformance] = None
    recentActivity: List[ActivityItem]
    performanceMetrics: PerformanceMetrics

class CountReport(BaseModel):
    totalTasks: int
    pendingTasks: int
    completedTasks: int
    overdueTasks: int
    oneTimeTasks: int
    oneTimePending: int
    oneTimeCompleted: int
    recurringTasks: int
    recurringPending: int
    recurringCompleted: int
    dailyTasks: int
    dailyPending: int
    dailyCompleted: int
    weeklyTasks: int
    weeklyPending: int
    weeklyCompleted: int
    monthlyTasks: int
    monthlyPending: int
    monthlyCompleted: int
    yearlyTasks: int
    yearlyPending: int
    yearlyCompleted: int

class MemberTrendReport(BaseModel):
    username: str
    completionTrend: List[TrendBucket]
    plannedTrend: List[TrendBucket]
    performance: Optional[MemberPerformance] = None
