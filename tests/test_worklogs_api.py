from __future__ import annotations

from datetime import datetime

from kpi_tracker.extensions import db
from kpi_tracker.models import WorkLog, WorkLogImage


def _body(goal_id, **overrides):
    body = {
        "description": "Replaced meters on street 4",
        "quantity": 3,
        "completedAt": "2025-03-02T10:00:00",
        "goalId": goal_id,
    }
    body.update(overrides)
    return body


def test_create_work_log_for_self(client, auth, member, make_goal) -> None:
    goal = make_goal(assignees=[(member, 10)])
    resp = client.post("/api/worklogs/", headers=auth(member), json=_body(
        goal.id, images=["https://img.acme.io/a.png", "https://img.acme.io/b.png"],
    ))

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["authorId"] == member.id
    assert body["author"]["name"] == "Malee"
    assert body["goal"]["title"] == "Install meters"
    assert body["completedAt"].startswith("2025-03-02T10:00:00")
    assert sorted(i["url"] for i in body["images"]) == ["https://img.acme.io/a.png", "https://img.acme.io/b.png"]


def test_admin_can_log_for_another_user(client, auth, admin, member, make_goal) -> None:
    goal = make_goal(assignees=[(member, 10)])
    resp = client.post("/api/worklogs/", headers=auth(admin), json=_body(goal.id, authorId=member.id))

    assert resp.status_code == 201
    assert resp.get_json()["authorId"] == member.id


def test_member_cannot_log_for_another_user(client, auth, admin, member, make_goal) -> None:
    goal = make_goal(assignees=[(member, 10)])
    resp = client.post("/api/worklogs/", headers=auth(member), json=_body(goal.id, authorId=admin.id))
    assert resp.status_code == 403


def test_create_work_log_for_unknown_goal(client, auth, member) -> None:
    resp = client.post("/api/worklogs/", headers=auth(member), json=_body(404))
    assert resp.status_code == 400


def test_create_work_log_rejects_non_positive_quantity(client, auth, member, make_goal) -> None:
    goal = make_goal(assignees=[(member, 10)])
    resp = client.post("/api/worklogs/", headers=auth(member), json=_body(goal.id, quantity=0))

    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "quantity"


def test_list_work_logs_filters_and_orders(client, auth, admin, member, make_goal, make_log) -> None:
    goal = make_goal(assignees=[(member, 10)])
    other = make_goal(title="Other")
    first = make_log(goal, member, 1, datetime(2025, 1, 1))
    second = make_log(goal, admin, 2, datetime(2025, 2, 1))
    make_log(other, member, 3, datetime(2025, 3, 1))

    resp = client.get(f"/api/worklogs/?goalId={goal.id}", headers=auth(member))
    assert [log["id"] for log in resp.get_json()] == [second.id, first.id]

    resp = client.get(f"/api/worklogs/?goalId={goal.id}&authorId={member.id}", headers=auth(member))
    assert [log["id"] for log in resp.get_json()] == [first.id]


def test_list_work_logs_rejects_malformed_filter(client, auth, member) -> None:
    resp = client.get("/api/worklogs/?goalId=abc", headers=auth(member))
    assert resp.status_code == 400


def test_update_work_log_images(client, auth, member, make_goal, make_log) -> None:
    goal = make_goal(assignees=[(member, 10)])
    log = make_log(goal, member, 1, datetime(2025, 1, 1), images=["https://img.acme.io/old.png", "https://img.acme.io/keep.png"])
    old_id = next(i.id for i in log.images if i.url.endswith("old.png"))

    resp = client.put(f"/api/worklogs/{log.id}", headers=auth(member), json=_body(
        goal.id, quantity=7, imagesToAdd=["https://img.acme.io/new.png"], imagesToDelete=[old_id],
    ))

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["quantity"] == 7
    assert sorted(i["url"] for i in body["images"]) == ["https://img.acme.io/keep.png", "https://img.acme.io/new.png"]


def test_update_ignores_images_of_other_logs(client, auth, member, make_goal, make_log) -> None:
    goal = make_goal(assignees=[(member, 10)])
    log = make_log(goal, member, 1, datetime(2025, 1, 1))
    other = make_log(goal, member, 1, datetime(2025, 1, 2), images=["https://img.acme.io/x.png"])

    resp = client.put(f"/api/worklogs/{log.id}", headers=auth(member), json=_body(
        goal.id, imagesToDelete=[other.images[0].id],
    ))

    assert resp.status_code == 200
    assert db.session.query(WorkLogImage).count() == 1


def test_only_author_or_admin_can_modify(client, auth, admin, member, make_user, make_goal, make_log) -> None:
    stranger = make_user(name="Stranger")
    goal = make_goal(assignees=[(member, 10)])
    log = make_log(goal, member, 1, datetime(2025, 1, 1))

    assert client.put(f"/api/worklogs/{log.id}", headers=auth(stranger), json=_body(goal.id)).status_code == 403
    assert client.delete(f"/api/worklogs/{log.id}", headers=auth(stranger)).status_code == 403
    assert client.put(f"/api/worklogs/{log.id}", headers=auth(admin), json=_body(goal.id)).status_code == 200


def test_delete_work_log_removes_images(client, auth, member, make_goal, make_log) -> None:
    goal = make_goal(assignees=[(member, 10)])
    log = make_log(goal, member, 1, datetime(2025, 1, 1), images=["https://img.acme.io/a.png"])
    log_id = log.id

    resp = client.delete(f"/api/worklogs/{log_id}", headers=auth(member))

    assert resp.status_code == 204
    db.session.expire_all()
    assert db.session.query(WorkLog).count() == 0
    assert db.session.query(WorkLogImage).count() == 0
    assert client.get(f"/api/worklogs/{log_id}", headers=auth(member)).status_code == 404
