from marshmallow import fields
from kpi_tracker.extensions import ma


class UserSchema(ma.Schema):
    id = fields.Integer()
    name = fields.String()
    email = fields.String()
    role = fields.String()
    created_at = fields.DateTime(data_key="createdAt")


class UserRefSchema(ma.Schema):
    id = fields.Integer()
    name = fields.String()
