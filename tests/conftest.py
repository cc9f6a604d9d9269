import os

# Tests always run against an in-memory database
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.models import Task, User, TaskStatus, TaskType, TaskPriority
from main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(username, role="employee", is_active=True):
        user = User(
            username=username,
            email=f"{username}@example.com",
            role=role,
            is_active=is_active
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_task(db):
    def _make_task(
        assignee,
        title="Task",
        task_type=TaskType.ONE_TIME,
        status=TaskStatus.PENDING,
        priority=TaskPriority.NORMAL,
        created_at=datetime(2024, 1, 1),
        due_date=None,
        next_due_date=None,
        completed_at=None,
        is_active=True,
        assigned_by=None
    ):
        task = Task(
            title=title,
            task_type=task_type.value,
            status=status.value,
            priority=priority.value,
            assigned_to=assignee.id,
            assigned_by=assigned_by.id if assigned_by else None,
            created_at=created_at,
            due_date=due_date,
            next_due_date=next_due_date,
            completed_at=completed_at,
            is_active=is_active
        )
        db.add(task)
        db.commit()
        db.refresh(task)
        return task
    return _make_task
