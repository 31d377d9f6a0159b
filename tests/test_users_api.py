from __future__ import annotations

from datetime import datetime

from kpi_tracker.extensions import db
from kpi_tracker.models import Goal, User


def test_only_admins_list_users(client, auth, admin, member) -> None:
    assert client.get("/api/users/", headers=auth(member)).status_code == 403

    resp = client.get("/api/users/", headers=auth(admin))
    assert resp.status_code == 200
    assert {u["email"] for u in resp.get_json()} == {admin.email, member.email}


def test_admin_creates_user_with_role(client, auth, admin) -> None:
    resp = client.post("/api/users/", headers=auth(admin), json={
        "name": "Boss", "email": "boss@acme.io", "password": "secret123", "role": "ADMIN",
    })
    assert resp.status_code == 201
    assert resp.get_json()["role"] == "ADMIN"

    again = client.post("/api/users/", headers=auth(admin), json={
        "name": "Boss", "email": "boss@acme.io", "password": "secret123", "role": "USER",
    })
    assert again.status_code == 409


def test_user_can_read_self_but_not_others(client, auth, admin, member) -> None:
    assert client.get(f"/api/users/{member.id}", headers=auth(member)).status_code == 200
    assert client.get(f"/api/users/{admin.id}", headers=auth(member)).status_code == 403
    assert client.get("/api/users/999", headers=auth(admin)).status_code == 404


def test_admin_updates_user(client, auth, admin, member, make_user) -> None:
    other = make_user(name="Other")
    resp = client.put(f"/api/users/{member.id}", headers=auth(admin), json={"name": "Malee S.", "role": "ADMIN"})

    assert resp.status_code == 200
    assert resp.get_json()["name"] == "Malee S."
    assert resp.get_json()["role"] == "ADMIN"

    clash = client.put(f"/api/users/{member.id}", headers=auth(admin), json={"email": other.email})
    assert clash.status_code == 409


def test_user_with_work_logs_cannot_be_deleted(client, auth, admin, member, make_goal, make_log) -> None:
    goal = make_goal(assignees=[(member, 10)])
    make_log(goal, member, 3, datetime(2025, 1, 1))

    resp = client.delete(f"/api/users/{member.id}", headers=auth(admin))
    assert resp.status_code == 400


def test_deleting_user_drops_assignments_and_resums_goal(client, auth, admin, member, make_user, make_goal) -> None:
    other = make_user(name="Other")
    goal = make_goal(assignees=[(member, 10), (other, 30)])
    goal_id, member_id = goal.id, member.id

    resp = client.delete(f"/api/users/{member_id}", headers=auth(admin))

    assert resp.status_code == 204
    db.session.expire_all()
    assert db.session.get(User, member_id) is None
    goal = db.session.get(Goal, goal_id)
    assert goal.target == 30
    assert [a.user_id for a in goal.assignments] == [other.id]
