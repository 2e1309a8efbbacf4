from datetime import date
from decimal import Decimal

import pytest

from src.projects.models import Project, ProjectAssignment
from src.time_logs.models import TimeLog, TimeLogType
from src.time_logs.service import vacation_days
from src.users.models import User, UserRole


@pytest.fixture
def staffed(seed, make_user):
    """An employee with 10 vacation days assigned to one project."""
    user = seed(make_user(remaining_vacation_days=Decimal("10")))
    project = seed(Project(name="Website"))
    seed(ProjectAssignment(user_id=user.id, project_id=project.id, daily_hours=8))
    return user, project


def test_vacation_days():
    assert vacation_days(None) == 1
    assert vacation_days(Decimal("8")) == 1
    assert vacation_days(Decimal("4")) == Decimal("0.5")


def test_log_work(client, staffed):
    user, project = staffed
    response = client.post("/api/employee/time-logs", json={
        "userId": user.id, "projectId": project.id, "date": "2026-03-02", "hours": 6,
    })
    assert response.status_code == 201
    [log] = response.json()
    assert log["type"] == "WORK"
    assert log["hours"] == 6
    assert log["project"] == {"id": project.id, "name": "Website"}


def test_work_needs_project(client, staffed):
    user, _ = staffed
    response = client.post("/api/employee/time-logs", json={"userId": user.id, "date": "2026-03-02", "hours": 6})
    assert response.status_code == 400
    assert response.json()["error"] == "projectId is required for WORK logs"


def test_hours_out_of_range(client, staffed):
    user, project = staffed
    response = client.post("/api/employee/time-logs", json={
        "userId": user.id, "projectId": project.id, "date": "2026-03-02", "hours": 25,
    })
    assert response.status_code == 400


def test_unassigned_employee_cannot_log_work(client, seed, make_user):
    user = seed(make_user())
    project = seed(Project(name="Elsewhere"))
    response = client.post("/api/employee/time-logs", json={
        "userId": user.id, "projectId": project.id, "date": "2026-03-02", "hours": 8,
    })
    assert response.status_code == 403


def test_admin_may_log_on_any_project(client, seed, make_user):
    admin = seed(make_user(email="admin@example.com", role=UserRole.ADMIN))
    project = seed(Project(name="Elsewhere"))
    response = client.post("/api/employee/time-logs", json={
        "userId": admin.id, "projectId": project.id, "date": "2026-03-02", "hours": 8,
    })
    assert response.status_code == 201


def test_vacation_deducts_and_refunds(client, staffed, fetch):
    user, _ = staffed
    response = client.post("/api/employee/time-logs", json={
        "userId": user.id, "date": "2026-03-02", "type": "VACATION",
    })
    assert response.status_code == 201
    [log] = response.json()
    assert log["projectId"] is None
    assert log["hours"] == 8
    assert fetch(User, user.id).remaining_vacation_days == Decimal("9")

    response = client.delete(f"/api/employee/time-logs/{log['id']}")
    assert response.json() == {"success": True}
    assert fetch(User, user.id).remaining_vacation_days == Decimal("10")
    assert fetch(TimeLog, log["id"]) is None


def test_half_day_vacation(client, staffed, fetch):
    user, _ = staffed
    client.post("/api/employee/time-logs", json={
        "userId": user.id, "date": "2026-03-02", "type": "VACATION", "hours": 4,
    })
    assert fetch(User, user.id).remaining_vacation_days == Decimal("9.5")


def test_vacation_needs_balance(client, seed, make_user):
    user = seed(make_user(remaining_vacation_days=Decimal("0")))
    response = client.post("/api/employee/time-logs", json={
        "userId": user.id, "date": "2026-03-02", "type": "VACATION",
    })
    assert response.status_code == 400
    assert response.json()["error"] == "Not enough vacation days remaining"


def test_deleting_work_log_keeps_balance(client, seed, staffed, fetch):
    user, project = staffed
    log = seed(TimeLog(user_id=user.id, project_id=project.id, date=date(2026, 3, 2), hours=Decimal("8")))
    assert client.delete(f"/api/employee/time-logs/{log.id}").status_code == 200
    assert fetch(User, user.id).remaining_vacation_days == Decimal("10")


def test_delete_unknown_log(client):
    response = client.delete("/api/employee/time-logs/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Time log not found"}


def test_batch_is_all_or_nothing(client, staffed, fetch):
    user, project = staffed
    response = client.post("/api/employee/time-logs", json=[
        {"userId": user.id, "date": "2026-03-02", "type": "VACATION"},
        {"userId": user.id, "date": "2026-03-03", "hours": 8},  # missing projectId
    ])
    assert response.status_code == 400
    assert fetch(User, user.id).remaining_vacation_days == Decimal("10")
    assert client.get("/api/employee/time-logs", params={"userId": user.id}).json() == []


def test_batch_creates_every_entry(client, staffed, fetch):
    user, project = staffed
    response = client.post("/api/employee/time-logs", json=[
        {"userId": user.id, "projectId": project.id, "date": "2026-03-02", "hours": 8},
        {"userId": user.id, "projectId": project.id, "date": "2026-03-03", "hours": 7.5},
        {"userId": user.id, "date": "2026-03-04", "type": "VACATION"},
    ])
    assert response.status_code == 201
    assert [log["hours"] for log in response.json()] == [8, 7.5, 8]
    assert fetch(User, user.id).remaining_vacation_days == Decimal("9")


def test_list_time_logs_newest_first(client, seed, staffed):
    user, project = staffed
    seed(
        TimeLog(user_id=user.id, project_id=project.id, date=date(2026, 3, 2), hours=Decimal("8")),
        TimeLog(user_id=user.id, project_id=project.id, date=date(2026, 3, 5), hours=Decimal("4")),
        TimeLog(user_id=user.id, project_id=None, date=date(2026, 3, 4), hours=Decimal("8"), type=TimeLogType.VACATION),
    )

    logs = client.get("/api/employee/time-logs", params={"userId": user.id}).json()
    assert [log["date"] for log in logs] == ["2026-03-05", "2026-03-04", "2026-03-02"]
    assert logs[0]["project"]["name"] == "Website"
    assert logs[1]["project"] is None

    window = client.get("/api/employee/time-logs", params={
        "userId": user.id, "dateFrom": "2026-03-03", "dateTo": "2026-03-04",
    }).json()
    assert [log["date"] for log in window] == ["2026-03-04"]


def test_list_time_logs_bad_dates(client, staffed):
    user, _ = staffed
    response = client.get("/api/employee/time-logs", params={"userId": user.id, "dateFrom": "March"})
    assert response.status_code == 400
    response = client.get("/api/employee/time-logs", params={
        "userId": user.id, "dateFrom": "2026-03-05", "dateTo": "2026-03-01",
    })
    assert response.status_code == 400


def test_user_id_is_required(client):
    assert client.get("/api/employee/time-logs").status_code == 400
    assert client.get("/api/employee/projects").status_code == 400


def test_employee_projects(client, seed, staffed):
    user, project = staffed
    seed(Project(name="Not mine"))
    projects = client.get("/api/employee/projects", params={"userId": user.id}).json()
    assert [p["id"] for p in projects] == [project.id]
