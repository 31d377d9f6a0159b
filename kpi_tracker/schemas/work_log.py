from marshmallow import fields
from kpi_tracker.extensions import ma
from .goal import GoalSchema


class AuthorSchema(ma.Schema):
    id = fields.Integer()
    name = fields.String()
    email = fields.String()


class ImageSchema(ma.Schema):
    id = fields.Integer()
    url = fields.String()


class WorkLogSchema(ma.Schema):
    id = fields.Integer()
    description = fields.String()
    quantity = fields.Integer()
    completed_at = fields.DateTime(data_key="completedAt")
    created_at = fields.DateTime(data_key="createdAt")
    goal_id = fields.Integer(data_key="goalId")
    author_id = fields.Integer(data_key="authorId")
    author = fields.Nested(AuthorSchema)
    goal = fields.Nested(GoalSchema(exclude=("assignments",)))
    images = fields.List(fields.Nested(ImageSchema))
