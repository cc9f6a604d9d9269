"""
Master Database Seeding Script
Creates database tables and populates them with demo users and tasks
"""

import sys

from app.database import SessionLocal
from app.models import Task, User
from create_tables import create_tables
from demo_users import DEMO_USERS
from demo_tasks import DEMO_TASKS

def _value(item):
    return getattr(item, "value", item)

def seed_demo_users(session) -> dict:
    """Create demo users, skipping any that already exist"""
    print(f"\n{'='*60}")
    print(f"🚀 Creating Demo Users")
    print(f"{'='*60}")

    created = 0
    for user_data in DEMO_USERS:
        existing = session.query(User).filter(User.username == user_data["username"]).first()
        if existing:
            print(f"[SKIP] User {user_data['username']} already exists, skipping...")
            continue

        session.add(User(
            username=user_data["username"],
            email=user_data["email"],
            role=_value(user_data["role"]),
            is_active=user_data["is_active"]
        ))
        created += 1
        print(f"[SUCCESS] Created user: {user_data['username']} ({_value(user_data['role'])})")

    session.commit()
    print(f"\n[SUCCESS] Successfully created {created} demo users!")
    return {user.username: user.id for user in session.query(User).all()}

def seed_demo_tasks(session, user_ids: dict) -> int:
    """Create demo tasks for the seeded users"""
    print(f"\n{'='*60}")
    print(f"🚀 Creating Demo Tasks")
    print(f"{'='*60}")

    created = 0
    for task_data in DEMO_TASKS:
        existing = session.query(Task).filter(Task.title == task_data["title"]).first()
        if existing:
            print(f"[SKIP] Task '{task_data['title']}' already exists, skipping...")
            continue

        assignee_id = user_ids.get(task_data["assigned_to"])
        if assignee_id is None:
            print(f"[ERROR] Unknown assignee {task_data['assigned_to']} for '{task_data['title']}'")
            continue

        session.add(Task(
            title=task_data["title"],
            description=task_data["description"],
            task_type=_value(task_data["task_type"]),
            status=_value(task_data["status"]),
            priority=_value(task_data["priority"]),
            assigned_to=assignee_id,
            assigned_by=user_ids.get(task_data.get("assigned_by")),
            created_at=task_data["created_at"],
            due_date=task_data.get("due_date"),
            next_due_date=task_data.get("next_due_date"),
            completed_at=task_data.get("completed_at"),
            is_active=task_data.get("is_active", True)
        ))
        created += 1
        print(f"[SUCCESS] Created task: {task_data['title']}")

    session.commit()
    print(f"\n[SUCCESS] Successfully created {created} demo tasks!")
    return created

def main() -> int:
    if not create_tables(reset="--reset" in sys.argv):
        return 1

    session = SessionLocal()
    try:
        user_ids = seed_demo_users(session)
        seed_demo_tasks(session, user_ids)
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Seeding failed: {e}")
        return 1
    finally:
        session.close()

    print(f"\n{'='*60}")
    print("🎉 Database seeding completed!")
    print(f"{'='*60}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
