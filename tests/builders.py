"""Snapshot builders and an in-memory repository for engine tests."""

from __future__ import annotations

from datetime import date, datetime

from domain.progress.ports import IProgressRepository
from domain.progress.schemas import AuthorRef, GoalRecord, GoalRef, UserRecord, WorkLogRecord


def goal_record(id=1, title="Install meters", target=100, unit="pieces",
                start=date(2024, 10, 1), end=date(2025, 9, 30)) -> GoalRecord:
    return GoalRecord(id=id, title=title, target=target, unit=unit, start_date=start, end_date=end)


def user_record(id=1, name="Somchai", email=None) -> UserRecord:
    return UserRecord(id=id, name=name, email=email or f"{name.lower()}@acme.io", role="USER")


def log_record(id, quantity, completed_at, goal_id=1, author_id=1, author_name="Somchai") -> WorkLogRecord:
    return WorkLogRecord(
        id=id,
        description=f"log {id}",
        quantity=quantity,
        completed_at=completed_at,
        goal_id=goal_id,
        author_id=author_id,
        author=AuthorRef(id=author_id, name=author_name),
        goal=GoalRef(id=goal_id, title=f"goal {goal_id}", unit="pieces"),
    )


class InMemoryProgressRepository(IProgressRepository):
    def __init__(self, goals=(), users=(), work_logs=()):
        self.goals = list(goals)
        self.users = list(users)
        self.work_logs = list(work_logs)

    def list_goals(self):
        return sorted(self.goals, key=lambda g: g.id)

    def get_goal(self, goal_id):
        return next((g for g in self.goals if g.id == goal_id), None)

    def goals_by_ids(self, goal_ids):
        return [g for g in self.list_goals() if g.id in set(goal_ids)]

    def get_user(self, user_id):
        return next((u for u in self.users if u.id == user_id), None)

    def list_work_logs(self, start=None, end=None, goal_id=None, author_id=None):
        logs = [
            log for log in self.work_logs
            if (start is None or log.completed_at >= start)
            and (end is None or log.completed_at <= end)
            and (goal_id is None or log.goal_id == goal_id)
            and (author_id is None or log.author_id == author_id)
        ]
        return sorted(logs, key=lambda log: (log.completed_at, log.id), reverse=True)


def at(year, month, day, hour=9, minute=0, second=0) -> datetime:
    return datetime(year, month, day, hour, minute, second)
