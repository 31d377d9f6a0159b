# domain/progress/ports.py
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from .schemas import GoalRecord, UserRecord, WorkLogRecord


class IProgressRepository(ABC):
    """Read-only data access needed by the dashboards."""

    @abstractmethod
    def list_goals(self) -> List[GoalRecord]:
        pass

    @abstractmethod
    def get_goal(self, goal_id: int) -> Optional[GoalRecord]:
        pass

    @abstractmethod
    def goals_by_ids(self, goal_ids: Sequence[int]) -> List[GoalRecord]:
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserRecord]:
        pass

    @abstractmethod
    def list_work_logs(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        goal_id: Optional[int] = None,
        author_id: Optional[int] = None,
    ) -> List[WorkLogRecord]:
        """Work logs with completed_at in [start, end], newest first."""
        pass
