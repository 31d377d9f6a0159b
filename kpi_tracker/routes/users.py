from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from sqlalchemy import select

from domain.progress import build_user_dashboard
from domain.users.schemas import UserCreate, UserUpdate
from kpi_tracker.extensions import db
from kpi_tracker.models import User, Goal, GoalAssignment, WorkLog
from kpi_tracker.repositories import SqlAlchemyProgressRepository
from kpi_tracker.schemas import user_schema, users_schema
from kpi_tracker.utils.decorators import admin_required, self_or_admin

users_bp = Blueprint("users", __name__)


@users_bp.route("/", methods=["GET"])
@admin_required
def list_users():
    users = User.query.order_by(User.name).all()
    return jsonify(users_schema.dump(users)), 200


@users_bp.route("/", methods=["POST"])
@admin_required
def create_user():
    data = UserCreate.model_validate(request.get_json(silent=True) or {})

    if User.query.filter_by(email=data.email).first():
        return jsonify({"msg": "Email already exists"}), 409

    user = User(name=data.name, email=data.email, role=data.role.value)
    user.set_password(data.password)
    db.session.add(user)
    db.session.commit()

    current_app.logger.info("Admin created user %s with role %s", user.email, user.role)
    return jsonify(user_schema.dump(user)), 201


@users_bp.route("/<int:user_id>", methods=["GET"])
@jwt_required()
def get_user(user_id):
    if not self_or_admin(user_id):
        return jsonify({"msg": "Unauthorized"}), 403

    user = db.get_or_404(User, user_id, description="User not found")
    return jsonify(user_schema.dump(user)), 200


@users_bp.route("/<int:user_id>", methods=["PUT"])
@admin_required
def update_user(user_id):
    user = db.get_or_404(User, user_id, description="User not found")
    data = UserUpdate.model_validate(request.get_json(silent=True) or {})

    if data.email and data.email != user.email:
        if User.query.filter(User.email == data.email, User.id != user.id).first():
            return jsonify({"msg": "Email already exists"}), 409
        user.email = data.email
    if data.name:
        user.name = data.name
    if data.role:
        user.role = data.role.value

    db.session.commit()
    return jsonify(user_schema.dump(user)), 200


@users_bp.route("/<int:user_id>", methods=["DELETE"])
@admin_required
def delete_user(user_id):
    user = db.get_or_404(User, user_id, description="User not found")

    if WorkLog.query.filter_by(author_id=user.id).count() > 0:
        return jsonify({"msg": "Cannot delete user with existing work logs. Please reassign their work first."}), 400

    affected_goal_ids = db.session.scalars(
        select(GoalAssignment.goal_id).where(GoalAssignment.user_id == user.id)
    ).all()

    # Assignments first, then re-sum the goals they belonged to, then the user
    db.session.execute(
        db.delete(GoalAssignment)
        .where(GoalAssignment.user_id == user.id)
        .execution_options(synchronize_session=False)
    )
    db.session.expire_all()
    for goal in Goal.query.filter(Goal.id.in_(affected_goal_ids)).all():
        goal.recompute_target()
    db.session.delete(user)
    db.session.commit()

    current_app.logger.info("Deleted user %s", user_id)
    return "", 204


@users_bp.route("/<int:user_id>/dashboard", methods=["GET"])
@jwt_required()
def user_dashboard(user_id):
    if not self_or_admin(user_id):
        return jsonify({"msg": "Unauthorized"}), 403

    repo = SqlAlchemyProgressRepository(db.session)
    dashboard = build_user_dashboard(repo, user_id)
    if dashboard is None:
        return jsonify({"msg": "User not found"}), 404
    return jsonify(dashboard.model_dump(mode="json", by_alias=True)), 200
