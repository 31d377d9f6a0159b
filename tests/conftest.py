from __future__ import annotations

from datetime import date, datetime

import pytest
from flask_jwt_extended import create_access_token

from kpi_tracker import create_app
from kpi_tracker.extensions import db
from kpi_tracker.models import Goal, GoalAssignment, User, WorkLog, WorkLogImage


@pytest.fixture()
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    def _make(name="Somchai", email=None, role="USER", password="secret123"):
        user = User(name=name, email=email or f"{name.lower()}@acme.io", role=role)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user
    return _make


@pytest.fixture()
def admin(make_user):
    return make_user(name="Admin", role="ADMIN")


@pytest.fixture()
def member(make_user):
    return make_user(name="Malee")


@pytest.fixture()
def auth():
    def _headers(user):
        token = create_access_token(identity=str(user.id))
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture()
def make_goal(app):
    def _make(title="Install meters", unit="pieces", assignees=(), start=date(2024, 10, 1), end=date(2025, 9, 30)):
        goal = Goal(title=title, unit=unit, start_date=start, end_date=end)
        db.session.add(goal)
        for user, target in assignees:
            db.session.add(GoalAssignment(goal=goal, user_id=user.id, target=target))
        db.session.flush()
        goal.recompute_target()
        db.session.commit()
        return goal
    return _make


@pytest.fixture()
def make_log(app):
    def _make(goal, author, quantity, completed_at, description="Site visit", images=()):
        if isinstance(completed_at, date) and not isinstance(completed_at, datetime):
            completed_at = datetime(completed_at.year, completed_at.month, completed_at.day, 9, 0)
        log = WorkLog(
            goal_id=goal.id,
            author_id=author.id,
            quantity=quantity,
            completed_at=completed_at,
            description=description,
        )
        log.images = [WorkLogImage(url=url) for url in images]
        db.session.add(log)
        db.session.commit()
        return log
    return _make
