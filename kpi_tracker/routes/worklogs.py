from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, current_user

from domain.worklogs.schemas import WorkLogCreate, WorkLogUpdate
from kpi_tracker.extensions import db
from kpi_tracker.models import Goal, User, WorkLog, WorkLogImage
from kpi_tracker.schemas import work_log_schema, work_logs_schema
from kpi_tracker.utils.params import optional_int_arg

worklogs_bp = Blueprint("worklogs", __name__)


def _can_modify(work_log):
    return current_user.is_admin or work_log.author_id == current_user.id


# ---------------- API: List work logs ----------------
@worklogs_bp.route("/", methods=["GET"])
@jwt_required()
def list_work_logs():
    query = WorkLog.query
    for name, column in (("goalId", WorkLog.goal_id), ("authorId", WorkLog.author_id)):
        value = optional_int_arg(name)
        if value is not None:
            query = query.filter(column == value)

    work_logs = query.order_by(WorkLog.completed_at.desc(), WorkLog.id.desc()).all()
    return jsonify(work_logs_schema.dump(work_logs)), 200


# ---------------- API: Create work log ----------------
@worklogs_bp.route("/", methods=["POST"])
@jwt_required()
def create_work_log():
    data = WorkLogCreate.model_validate(request.get_json(silent=True) or {})

    author_id = current_user.id
    if data.author_id is not None and data.author_id != current_user.id:
        if not current_user.is_admin:
            return jsonify({"msg": "Only admins can log work for another user"}), 403
        author_id = data.author_id

    if db.session.get(Goal, data.goal_id) is None or db.session.get(User, author_id) is None:
        return jsonify({"msg": "Invalid goalId or authorId provided."}), 400

    work_log = WorkLog(
        description=data.description,
        quantity=data.quantity,
        completed_at=data.completed_at,
        goal_id=data.goal_id,
        author_id=author_id,
    )
    work_log.images = [WorkLogImage(url=url) for url in data.images]
    db.session.add(work_log)
    db.session.commit()

    current_app.logger.info(
        "User %s logged %s on goal %s", author_id, data.quantity, data.goal_id
    )
    return jsonify(work_log_schema.dump(work_log)), 201


# ---------------- API: Get work log ----------------
@worklogs_bp.route("/<int:work_log_id>", methods=["GET"])
@jwt_required()
def get_work_log(work_log_id):
    work_log = db.get_or_404(WorkLog, work_log_id, description="Work log not found.")
    return jsonify(work_log_schema.dump(work_log)), 200


# ---------------- API: Update work log ----------------
@worklogs_bp.route("/<int:work_log_id>", methods=["PUT"])
@jwt_required()
def update_work_log(work_log_id):
    work_log = db.get_or_404(WorkLog, work_log_id, description="Work log not found.")
    if not _can_modify(work_log):
        return jsonify({"msg": "Unauthorized"}), 403

    data = WorkLogUpdate.model_validate(request.get_json(silent=True) or {})
    if data.goal_id != work_log.goal_id and db.session.get(Goal, data.goal_id) is None:
        return jsonify({"msg": "Invalid goalId provided."}), 400

    work_log.description = data.description
    work_log.quantity = data.quantity
    work_log.completed_at = data.completed_at
    work_log.goal_id = data.goal_id

    if data.images_to_delete:
        # Only images that belong to this log
        db.session.execute(
            db.delete(WorkLogImage)
            .where(
                WorkLogImage.id.in_(data.images_to_delete),
                WorkLogImage.work_log_id == work_log.id,
            )
            .execution_options(synchronize_session=False)
        )
        db.session.expire(work_log, ["images"])
    for url in data.images_to_add:
        db.session.add(WorkLogImage(url=url, work_log_id=work_log.id))
    db.session.commit()

    db.session.refresh(work_log)
    return jsonify(work_log_schema.dump(work_log)), 200


# ---------------- API: Delete work log ----------------
@worklogs_bp.route("/<int:work_log_id>", methods=["DELETE"])
@jwt_required()
def delete_work_log(work_log_id):
    work_log = db.get_or_404(WorkLog, work_log_id, description="Work log not found.")
    if not _can_modify(work_log):
        return jsonify({"msg": "Unauthorized"}), 403

    for statement in (
        db.delete(WorkLogImage).where(WorkLogImage.work_log_id == work_log.id),
        db.delete(WorkLog).where(WorkLog.id == work_log.id),
    ):
        db.session.execute(statement.execution_options(synchronize_session=False))
    db.session.commit()

    current_app.logger.info("Deleted work log %s", work_log_id)
    return "", 204
