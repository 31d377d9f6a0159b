"""Immutable snapshots consumed by the aggregation engine and the shapes it produces.

Every model serializes with camelCase keys (``model_dump(by_alias=True)``) so
the dashboard JSON matches what the front end reads.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )


# ---------------- Inputs ----------------

class UserRecord(CamelModel):
    id: int
    name: str
    email: str
    role: str = "USER"


class AuthorRef(CamelModel):
    id: int
    name: str


class GoalRef(CamelModel):
    id: int
    title: str
    unit: str


class ImageRecord(CamelModel):
    id: int
    url: str


class GoalRecord(CamelModel):
    id: int
    title: str
    target: int
    unit: str
    start_date: date
    end_date: date


class WorkLogRecord(CamelModel):
    id: int
    description: str
    quantity: int
    completed_at: datetime
    goal_id: int
    author_id: int
    author: Optional[AuthorRef] = None
    goal: Optional[GoalRef] = None
    images: List[ImageRecord] = []


# ---------------- Outputs ----------------

class PeriodWindow(CamelModel):
    """Inclusive [start, end] range of completion timestamps."""
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


class GoalProgress(CamelModel):
    id: int
    title: str
    target: int
    unit: str
    current_progress: int
    percentage: float
    work_logs: List[WorkLogRecord]


class MonthlyBucket(CamelModel):
    month: str
    name: str
    quantity: int


class GoalDetail(GoalProgress):
    start_date: date
    end_date: date
    fiscal_year: int
    monthly_chart_data: List[MonthlyBucket]


class UserGoalContribution(CamelModel):
    goal_id: int
    goal_title: str
    goal_target: int
    unit: str
    user_contribution: int
    percentage_of_total_target: float


class ContributionSummary(CamelModel):
    total_logs: int
    total_units_contributed: int
    involved_goals_count: int


class UserSummary(CamelModel):
    id: int
    name: str
    email: str


class UserDashboard(CamelModel):
    user: UserSummary
    goal_progress: List[UserGoalContribution]
    recent_logs: List[WorkLogRecord]
    summary: ContributionSummary
