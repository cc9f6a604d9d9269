from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean
from sqlalchemy.orm import relationship
from app.database import Base
import enum
from datetime import datetime

class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"

class TaskPriority(str, enum.Enum):
    NORMAL = "normal"
    HIGH = "high"

class TaskType(str, enum.Enum):
    ONE_TIME = "one-time"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

# Types that make up the recurring aggregate on the dashboard
RECURRING_TYPES = (TaskType.DAILY, TaskType.WEEKLY, TaskType.MONTHLY, TaskType.YEARLY)

class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)

    # Relationships
    assigned_to = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    assigned_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Task properties (stored as their string values)
    task_type = Column(String, default=TaskType.ONE_TIME.value, nullable=False, index=True)
    status = Column(String, default=TaskStatus.PENDING.value, nullable=False, index=True)
    priority = Column(String, default=TaskPriority.NORMAL.value, nullable=False)

    # Scheduling; next_due_date supersedes due_date for recurring tasks
    due_date = Column(DateTime, nullable=True)
    next_due_date = Column(DateTime, nullable=True)

    # System dates
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    completed_at = Column(DateTime, nullable=True)

    # Soft delete
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    assignee = relationship("User", foreign_keys=[assigned_to], back_populates="assigned_tasks")
    assigner = relationship("User", foreign_keys=[assigned_by], back_populates="created_tasks")
