from marshmallow import fields
from kpi_tracker.extensions import ma
from .user import UserRefSchema


class AssignmentSchema(ma.Schema):
    id = fields.Integer()
    goal_id = fields.Integer(data_key="goalId")
    user_id = fields.Integer(data_key="userId")
    target = fields.Integer()
    user = fields.Nested(UserRefSchema)


class GoalSchema(ma.Schema):
    id = fields.Integer()
    title = fields.String()
    target = fields.Integer()
    unit = fields.String()
    start_date = fields.Date(data_key="startDate")
    end_date = fields.Date(data_key="endDate")
    created_at = fields.DateTime(data_key="createdAt")
    assignments = fields.List(fields.Nested(AssignmentSchema))
