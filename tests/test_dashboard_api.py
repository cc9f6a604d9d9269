from datetime import datetime, timedelta
from sqlalchemy.exc import OperationalError

from app.models.task import TaskStatus, TaskType
from app.services.stores import TaskStore


def test_root_and_health(test_client):
    assert test_client.get("/").json() == {"message": "Task Dashboard API"}
    assert test_client.get("/health").json() == {"status": "ok"}


def test_admin_analytics(test_client, make_user, make_task):
    alice = make_user("alice")
    now = datetime.utcnow()
    make_task(
        alice,
        status=TaskStatus.COMPLETED,
        created_at=now - timedelta(days=3),
        due_date=now,
        completed_at=now
    )
    make_task(alice, created_at=now - timedelta(days=1), due_date=now + timedelta(days=2))

    response = test_client.get("/api/dashboard/analytics", params={"isAdmin": "true"})

    assert response.status_code == 200
    data = response.json()
    assert len(data["completionTrend"]) == 6
    assert len(data["plannedTrend"]) == 6
    assert data["completionTrend"][-1]["month"] == now.month
    assert data["completionTrend"][-1]["count"] == 1
    assert sum(item["count"] for item in data["statusStats"]) == 2
    assert data["teamPerformance"][0]["username"] == "alice"
    assert data["teamPerformance"][0]["completionRate"] == 50.0
    assert data["userPerformance"] is None
    assert data["performanceMetrics"]["onTimeCompletion"] == 100
    assert data["performanceMetrics"]["averageCompletionTime"] == 3
    assert len(data["recentActivity"]) == 2


def test_user_analytics(test_client, make_user, make_task):
    alice = make_user("alice")
    bob = make_user("bob")
    make_task(alice)
    make_task(bob)
    make_task(bob)

    response = test_client.get(
        "/api/dashboard/analytics",
        params={"userId": alice.id, "isAdmin": "false"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["teamPerformance"] == []
    assert data["userPerformance"]["username"] == "alice"
    assert data["statusStats"] == [{"key": "pending", "count": 1}]


def test_missing_user_id_for_user_scope(test_client):
    response = test_client.get("/api/dashboard/counts", params={"isAdmin": "false"})

    assert response.status_code == 400


def test_counts_with_date_range(test_client, make_user, make_task):
    alice = make_user("alice")
    make_task(alice, task_type=TaskType.DAILY, due_date=datetime(2024, 3, 10))
    make_task(alice, task_type=TaskType.WEEKLY, due_date=datetime(2024, 3, 11), status=TaskStatus.OVERDUE)
    make_task(alice, task_type=TaskType.DAILY, due_date=datetime(2024, 4, 10))

    response = test_client.get(
        "/api/dashboard/counts",
        params={
            "userId": alice.id,
            "startDate": "2024-03-01T00:00:00.000Z",
            "endDate": "2024-03-31T23:59:59.999Z"
        }
    )

    assert response.status_code == 200
    data = response.json()
    assert data["totalTasks"] == 2
    assert data["overdueTasks"] == 1
    assert data["dailyTasks"] == 1
    assert data["recurringTasks"] == 2
    assert data["recurringPending"] == 1


def test_counts_ignore_partial_date_range(test_client, make_user, make_task):
    alice = make_user("alice")
    make_task(alice, due_date=datetime(2024, 3, 10))
    make_task(alice, due_date=datetime(2024, 5, 10))

    response = test_client.get(
        "/api/dashboard/counts",
        params={"isAdmin": "true", "startDate": "2024-03-01T00:00:00"}
    )

    assert response.json()["totalTasks"] == 2


def test_invalid_date_is_rejected(test_client):
    response = test_client.get(
        "/api/dashboard/counts",
        params={"isAdmin": "true", "startDate": "not-a-date", "endDate": "2024-03-01"}
    )

    assert response.status_code == 422


def test_member_trend_requires_admin(test_client, make_user):
    make_user("alice")

    response = test_client.get(
        "/api/dashboard/member-trend",
        params={"memberUsername": "alice", "isAdmin": "false"}
    )

    assert response.status_code == 403


def test_member_trend_unknown_member(test_client):
    response = test_client.get(
        "/api/dashboard/member-trend",
        params={"memberUsername": "nobody", "isAdmin": "true"}
    )

    assert response.status_code == 404


def test_member_trend(test_client, make_user, make_task):
    alice = make_user("alice")
    make_task(alice, due_date=datetime.utcnow())

    response = test_client.get(
        "/api/dashboard/member-trend",
        params={"memberUsername": "alice", "isAdmin": "true"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "alice"
    assert data["plannedTrend"][-1]["count"] == 1
    assert data["performance"]["pendingTasks"] == 1


def test_store_failure_returns_server_error(test_client, make_user, monkeypatch):
    make_user("alice")

    def failing_group(self, task_filter, group_key):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(TaskStore, "group_tasks", failing_group)

    response = test_client.get("/api/dashboard/analytics", params={"isAdmin": "true"})

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["message"] == "Server error"
    assert "connection refused" in detail["error"]
