from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from sqlalchemy import select

from domain.goals.schemas import GoalCreate, GoalUpdate
from kpi_tracker.extensions import db
from kpi_tracker.models import Goal, GoalAssignment, User, WorkLog, WorkLogImage
from kpi_tracker.schemas import goal_schema, goals_schema
from kpi_tracker.utils.decorators import admin_required

goals_bp = Blueprint("goals", __name__)


def _check_assignees(data):
    """Return an error response for bad assignees, or None when they are usable."""
    duplicates = data.duplicate_user_ids()
    if duplicates:
        return jsonify({"msg": "A user can only be assigned to a goal once.", "userIds": duplicates}), 409

    user_ids = {a.user_id for a in data.assignees}
    if user_ids:
        found = set(db.session.scalars(select(User.id).where(User.id.in_(user_ids))).all())
        unknown = sorted(user_ids - found)
        if unknown:
            return jsonify({"msg": "Invalid user ID provided for assignment.", "userIds": unknown}), 400
    return None


def _assignments_for(goal, data):
    return [
        GoalAssignment(goal=goal, user_id=a.user_id, target=a.target)
        for a in data.assignees
    ]


# ---------------- API: Get all goals ----------------
@goals_bp.route("/", methods=["GET"])
@jwt_required()
def list_goals():
    goals = Goal.query.order_by(Goal.end_date.desc(), Goal.id.desc()).all()
    return jsonify(goals_schema.dump(goals)), 200


# ---------------- API: Create goal ----------------
@goals_bp.route("/", methods=["POST"])
@admin_required
def create_goal():
    data = GoalCreate.model_validate(request.get_json(silent=True) or {})
    error = _check_assignees(data)
    if error:
        return error

    goal = Goal(
        title=data.title,
        unit=data.unit,
        start_date=data.start_date,
        end_date=data.end_date,
        target=data.total_target,
    )
    db.session.add(goal)
    db.session.add_all(_assignments_for(goal, data))
    db.session.commit()

    current_app.logger.info("Created goal %s (%s, target %s)", goal.id, goal.title, goal.target)
    return jsonify(goal_schema.dump(goal)), 201


# ---------------- API: Get goal ----------------
@goals_bp.route("/<int:goal_id>", methods=["GET"])
@jwt_required()
def get_goal(goal_id):
    goal = db.get_or_404(Goal, goal_id, description="Goal not found")
    return jsonify(goal_schema.dump(goal)), 200


# ---------------- API: Update goal ----------------
@goals_bp.route("/<int:goal_id>", methods=["PUT"])
@admin_required
def update_goal(goal_id):
    goal = db.get_or_404(Goal, goal_id, description="Goal not found")
    data = GoalUpdate.model_validate(request.get_json(silent=True) or {})
    error = _check_assignees(data)
    if error:
        return error

    goal.title = data.title
    goal.unit = data.unit
    goal.start_date = data.start_date
    goal.end_date = data.end_date
    goal.target = data.total_target

    # Replace every assignment in the same transaction
    db.session.execute(
        db.delete(GoalAssignment)
        .where(GoalAssignment.goal_id == goal.id)
        .execution_options(synchronize_session=False)
    )
    db.session.expire(goal, ["assignments"])
    db.session.add_all(_assignments_for(goal, data))
    db.session.commit()

    db.session.refresh(goal)
    return jsonify(goal_schema.dump(goal)), 200


# ---------------- API: Delete goal ----------------
@goals_bp.route("/<int:goal_id>", methods=["DELETE"])
@admin_required
def delete_goal(goal_id):
    goal = db.get_or_404(Goal, goal_id, description="Goal not found")

    # Assignments, then work log images, then work logs, then the goal itself
    log_ids = select(WorkLog.id).where(WorkLog.goal_id == goal.id)
    for statement in (
        db.delete(GoalAssignment).where(GoalAssignment.goal_id == goal.id),
        db.delete(WorkLogImage).where(WorkLogImage.work_log_id.in_(log_ids)),
        db.delete(WorkLog).where(WorkLog.goal_id == goal.id),
        db.delete(Goal).where(Goal.id == goal.id),
    ):
        db.session.execute(statement.execution_options(synchronize_session=False))
    db.session.commit()

    current_app.logger.info("Deleted goal %s", goal_id)
    return "", 204
