from .user import UserSchema, UserRefSchema
from .goal import GoalSchema, AssignmentSchema
from .work_log import WorkLogSchema

user_schema = UserSchema()
users_schema = UserSchema(many=True)
goal_schema = GoalSchema()
goals_schema = GoalSchema(many=True)
work_log_schema = WorkLogSchema()
work_logs_schema = WorkLogSchema(many=True)

__all__ = [
    "UserSchema", "UserRefSchema", "GoalSchema", "AssignmentSchema", "WorkLogSchema",
    "user_schema", "users_schema", "goal_schema", "goals_schema",
    "work_log_schema", "work_logs_schema",
]
