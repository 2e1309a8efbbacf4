from datetime import date
from decimal import Decimal

from src.projects.models import FixedCostType, PaymentType, Project, ProjectAssignment, ProjectStatus
from src.time_logs.models import TimeLog


def new_project(**overrides):
    payload = {
        "name": "Website",
        "paymentType": "FIXED",
        "totalProjectPrice": 10000,
        "fixedCostType": "MONTHLY",
        "totalFixedCost": 100,
        "startDate": "2026-02-02",
        "endDate": "2026-02-27",
        "status": "ACTIVE",
    }
    payload.update(overrides)
    return payload


def test_projects_require_admin(client):
    assert client.get("/api/admin/projects").status_code == 403


def test_create_project(admin_client, seed, make_user):
    owner = seed(make_user(email="owner@example.com"))
    response = admin_client.post("/api/admin/projects", json=new_project(ownerId=owner.id))
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Website"
    assert body["paymentType"] == "FIXED"
    assert body["totalProjectPrice"] == 10000
    assert body["ownerId"] == owner.id
    assert body["assignments"] == []

    detail = admin_client.get(f"/api/admin/projects/{body['id']}").json()
    assert detail["owner"]["email"] == "owner@example.com"
    assert detail["timeLogs"] == []


def test_create_project_unknown_owner(admin_client):
    response = admin_client.post("/api/admin/projects", json=new_project(ownerId=999))
    assert response.status_code == 404


def test_create_project_defaults(admin_client):
    body = admin_client.post("/api/admin/projects", json={"name": "Bare"}).json()
    assert body["paymentType"] == "HOURLY"
    assert body["status"] == "PLANNED"
    assert body["startDate"] is None


def test_update_project(admin_client, seed, fetch):
    project = seed(Project(name="Old", status=ProjectStatus.PLANNED))
    response = admin_client.put(f"/api/admin/projects/{project.id}", json=new_project(name="New", status="ARCHIVED"))
    assert response.status_code == 200
    assert response.json()["name"] == "New"
    assert fetch(Project, project.id).status == ProjectStatus.ARCHIVED


def test_update_project_keeps_omitted_fields(admin_client, seed, fetch):
    project = seed(Project(
        name="Website",
        payment_type=PaymentType.FIXED,
        total_project_price=Decimal("6000"),
        fixed_cost_type=FixedCostType.MONTHLY,
        total_fixed_cost=Decimal("100"),
        start_date=date(2026, 1, 1),
        status=ProjectStatus.ACTIVE,
    ))
    response = admin_client.put(f"/api/admin/projects/{project.id}", json={"name": "Renamed"})
    assert response.status_code == 200

    stored = fetch(Project, project.id)
    assert stored.name == "Renamed"
    assert stored.status == ProjectStatus.ACTIVE
    assert stored.payment_type == PaymentType.FIXED
    assert stored.total_project_price == Decimal("6000")
    assert stored.fixed_cost_type == FixedCostType.MONTHLY
    assert stored.start_date == date(2026, 1, 1)


def test_update_project_clears_nullable_fields(admin_client, seed, fetch):
    project = seed(Project(name="Website", end_date=date(2026, 6, 30), total_fixed_cost=Decimal("100")))
    response = admin_client.put(f"/api/admin/projects/{project.id}", json={"endDate": None, "totalFixedCost": None})
    assert response.status_code == 200

    stored = fetch(Project, project.id)
    assert stored.end_date is None
    assert stored.total_fixed_cost is None
    assert stored.name == "Website"


def test_update_project_rejects_null_status(admin_client, seed, fetch):
    project = seed(Project(name="Website", status=ProjectStatus.ACTIVE))
    response = admin_client.put(f"/api/admin/projects/{project.id}", json={"status": None})
    assert response.status_code == 400
    assert fetch(Project, project.id).status == ProjectStatus.ACTIVE


def test_unknown_project_is_404(admin_client):
    assert admin_client.get("/api/admin/projects/42").status_code == 404
    assert admin_client.get("/api/admin/projects/42/costs").status_code == 404
    assert admin_client.delete("/api/admin/projects/42").status_code == 404


def test_delete_project_removes_members_and_logs(admin_client, seed, make_user, fetch):
    user = seed(make_user())
    project = seed(Project(name="Doomed"))
    assignment, log = seed(
        ProjectAssignment(user_id=user.id, project_id=project.id, daily_hours=8),
        TimeLog(user_id=user.id, project_id=project.id, date=date(2026, 2, 3), hours=Decimal("8")),
    )

    assert admin_client.delete(f"/api/admin/projects/{project.id}").status_code == 204
    assert fetch(Project, project.id) is None
    assert fetch(ProjectAssignment, assignment.id) is None
    assert fetch(TimeLog, log.id) is None


def test_add_member_defaults_daily_hours(admin_client, seed, make_user):
    user = seed(make_user(monthly_cost=Decimal("3200")))
    project = seed(Project(name="Team"))

    response = admin_client.post(f"/api/admin/projects/{project.id}/members", json={"userId": user.id})
    assert response.status_code == 201
    body = response.json()
    assert body["dailyHours"] == 8
    assert body["user"]["id"] == user.id
    assert body["user"]["monthlyCost"] == 3200

    zero = admin_client.post(f"/api/admin/projects/{project.id}/members", json={"userId": user.id, "dailyHours": 0})
    assert zero.status_code == 409
    assert zero.json()["error"] == "User already assigned"


def test_add_member_with_window(admin_client, seed, make_user):
    user = seed(make_user())
    project = seed(Project(name="Team"))
    response = admin_client.post(f"/api/admin/projects/{project.id}/members", json={
        "userId": user.id, "dailyHours": 4, "startDate": "2026-03-01", "endDate": "2026-03-31",
    })
    body = response.json()
    assert body["dailyHours"] == 4
    assert body["startDate"] == "2026-03-01"

    listed = admin_client.get("/api/admin/projects").json()
    assert [a["userId"] for a in listed[0]["assignments"]] == [user.id]


def test_add_unknown_member(admin_client, seed):
    project = seed(Project(name="Team"))
    response = admin_client.post(f"/api/admin/projects/{project.id}/members", json={"userId": 999})
    assert response.status_code == 404


def test_remove_member(admin_client, seed, make_user, fetch):
    user = seed(make_user())
    project = seed(Project(name="Team"))
    assignment = seed(ProjectAssignment(user_id=user.id, project_id=project.id, daily_hours=8))

    response = admin_client.delete(f"/api/admin/projects/{project.id}/members", params={"userId": user.id})
    assert response.status_code == 204
    assert fetch(ProjectAssignment, assignment.id) is None


def test_remove_member_from_unknown_project(admin_client, seed, make_user):
    user = seed(make_user())
    response = admin_client.delete("/api/admin/projects/42/members", params={"userId": user.id})
    assert response.status_code == 404
    assert response.json() == {"error": "Project not found"}


def test_project_costs(admin_client, seed, make_user):
    user = seed(make_user(monthly_cost=Decimal("3200")))
    project = seed(Project(
        name="Website",
        payment_type=PaymentType.FIXED,
        total_project_price=Decimal("10000"),
        fixed_cost_type=FixedCostType.MONTHLY,
        total_fixed_cost=Decimal("100"),
        start_date=date(2026, 2, 2),
        end_date=date(2026, 2, 27),
        status=ProjectStatus.ACTIVE,
    ))
    seed(
        ProjectAssignment(user_id=user.id, project_id=project.id, daily_hours=Decimal("8")),
        TimeLog(user_id=user.id, project_id=project.id, date=date(2026, 2, 3), hours=Decimal("8")),
        TimeLog(user_id=user.id, project_id=project.id, date=date(2026, 2, 4), hours=Decimal("4")),
    )

    response = admin_client.get(f"/api/admin/projects/{project.id}/costs")
    assert response.status_code == 200
    assert response.json() == {
        "revenue": 10000,
        "effectiveCost": 340,
        "estimatedCost": 3300,
        "effectiveMargin": 9660,
        "estimatedMargin": 6700,
        "effectiveRoi": "96.6",
        "estimatedRoi": "67.0",
        "duration": "25 days",
    }


def test_project_costs_without_dates(admin_client, seed):
    project = seed(Project(name="Open", payment_type=PaymentType.HOURLY, total_project_price=Decimal("50")))
    body = admin_client.get(f"/api/admin/projects/{project.id}/costs").json()
    assert body["revenue"] == 0
    assert body["effectiveRoi"] == "0.0"
    assert body["duration"] == "—"
