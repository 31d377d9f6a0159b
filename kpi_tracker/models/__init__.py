from .user import User
from .goal import Goal
from .goal_assignment import GoalAssignment
from .work_log import WorkLog
from .work_log_image import WorkLogImage

__all__ = [
    "User",
    "Goal", "GoalAssignment",
    "WorkLog", "WorkLogImage",
]
