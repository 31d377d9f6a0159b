# kpi_tracker/repositories.py
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from domain.progress.ports import IProgressRepository
from domain.progress.schemas import GoalRecord, UserRecord, WorkLogRecord
from kpi_tracker.models import Goal, User, WorkLog


class SqlAlchemyProgressRepository(IProgressRepository):
    """Loads dashboard snapshots through an explicitly provided session."""

    def __init__(self, session: Session):
        self.session = session

    def list_goals(self) -> List[GoalRecord]:
        goals = self.session.scalars(select(Goal).order_by(Goal.id)).all()
        return [GoalRecord.model_validate(g) for g in goals]

    def get_goal(self, goal_id: int) -> Optional[GoalRecord]:
        goal = self.session.get(Goal, goal_id)
        return GoalRecord.model_validate(goal) if goal else None

    def goals_by_ids(self, goal_ids: Sequence[int]) -> List[GoalRecord]:
        goals = self.session.scalars(
            select(Goal).where(Goal.id.in_(list(goal_ids))).order_by(Goal.id)
        ).all()
        return [GoalRecord.model_validate(g) for g in goals]

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        user = self.session.get(User, user_id)
        return UserRecord.model_validate(user) if user else None

    def list_work_logs(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        goal_id: Optional[int] = None,
        author_id: Optional[int] = None,
    ) -> List[WorkLogRecord]:
        query = select(WorkLog).options(
            selectinload(WorkLog.author),
            selectinload(WorkLog.goal),
            selectinload(WorkLog.images),
        )
        if start is not None:
            query = query.where(WorkLog.completed_at >= start)
        if end is not None:
            query = query.where(WorkLog.completed_at <= end)
        if goal_id is not None:
            query = query.where(WorkLog.goal_id == goal_id)
        if author_id is not None:
            query = query.where(WorkLog.author_id == author_id)
        query = query.order_by(WorkLog.completed_at.desc(), WorkLog.id.desc())

        return [WorkLogRecord.model_validate(log) for log in self.session.scalars(query).all()]
