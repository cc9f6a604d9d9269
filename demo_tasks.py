"""
Demo Tasks Data for the Task Dashboard
Spreads one-time and recurring tasks over the last few months so every
dashboard chart has something to show
"""

from datetime import datetime, timedelta
from app.models.task import TaskStatus, TaskPriority, TaskType

now = datetime.utcnow()

def days(offset: int) -> datetime:
    return now + timedelta(days=offset)

# Structure: Title, Description, Type, Status, Priority, Assigned To, Assigned By,
# Created, Due Date, Next Due Date, Completed At (all relative to now)
DEMO_TASKS = [
    {
        "title": "Prepare quarterly budget review",
        "description": "Collect departmental spend and prepare the review deck",
        "task_type": TaskType.ONE_TIME,
        "status": TaskStatus.COMPLETED,
        "priority": TaskPriority.HIGH,
        "assigned_to": "priya.sharma",
        "assigned_by": "rajesh.kumar",
        "created_at": days(-40),
        "due_date": days(-30),
        "completed_at": days(-31)
    },
    {
        "title": "Update vendor contracts",
        "description": "Renew the expiring vendor contracts with legal sign-off",
        "task_type": TaskType.ONE_TIME,
        "status": TaskStatus.COMPLETED,
        "priority": TaskPriority.NORMAL,
        "assigned_to": "amit.patel",
        "assigned_by": "rajesh.kumar",
        "created_at": days(-75),
        "due_date": days(-60),
        "completed_at": days(-55)
    },
    {
        "title": "Daily stand-up notes",
        "description": "Publish stand-up notes to the team channel",
        "task_type": TaskType.DAILY,
        "status": TaskStatus.PENDING,
        "priority": TaskPriority.NORMAL,
        "assigned_to": "priya.sharma",
        "assigned_by": "rajesh.kumar",
        "created_at": days(-90),
        "due_date": days(-90),
        "next_due_date": days(1)
    },
    {
        "title": "Weekly inventory check",
        "description": "Reconcile warehouse inventory against the ledger",
        "task_type": TaskType.WEEKLY,
        "status": TaskStatus.COMPLETED,
        "priority": TaskPriority.NORMAL,
        "assigned_to": "sneha.reddy",
        "assigned_by": "rajesh.kumar",
        "created_at": days(-20),
        "due_date": days(-6),
        "completed_at": days(-6)
    },
    {
        "title": "Monthly payroll reconciliation",
        "description": "Verify payroll exports against HR records",
        "task_type": TaskType.MONTHLY,
        "status": TaskStatus.OVERDUE,
        "priority": TaskPriority.HIGH,
        "assigned_to": "amit.patel",
        "assigned_by": "rajesh.kumar",
        "created_at": days(-35),
        "due_date": days(-3)
    },
    {
        "title": "Annual compliance filing",
        "description": "Submit the yearly statutory compliance filing",
        "task_type": TaskType.YEARLY,
        "status": TaskStatus.IN_PROGRESS,
        "priority": TaskPriority.HIGH,
        "assigned_to": "rajesh.kumar",
        "assigned_by": "Admin",
        "created_at": days(-120),
        "due_date": days(20)
    },
    {
        "title": "Customer onboarding checklist",
        "description": "Walk the new enterprise customer through onboarding",
        "task_type": TaskType.ONE_TIME,
        "status": TaskStatus.PENDING,
        "priority": TaskPriority.NORMAL,
        "assigned_to": "sneha.reddy",
        "assigned_by": "rajesh.kumar",
        "created_at": days(-2),
        "due_date": days(5)
    },
    {
        "title": "Archive old project files",
        "description": "Move closed project folders to cold storage",
        "task_type": TaskType.ONE_TIME,
        "status": TaskStatus.COMPLETED,
        "priority": TaskPriority.NORMAL,
        "assigned_to": "priya.sharma",
        "assigned_by": "rajesh.kumar",
        "created_at": days(-150),
        "due_date": days(-140),
        "completed_at": days(-138),
        "is_active": False
    },
]
