from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from domain.progress import (
    build_goal_detail,
    build_period_dashboard,
    parse_period_params,
)
from kpi_tracker.extensions import db
from kpi_tracker.repositories import SqlAlchemyProgressRepository
from kpi_tracker.utils.params import optional_int_arg

dashboard_bp = Blueprint("dashboard", __name__)


@dashboard_bp.route("/", methods=["GET"])
@jwt_required()
def dashboard():
    goal_id = optional_int_arg("goalId")
    year, month = parse_period_params(request.args.get("year"), request.args.get("month"))
    repo = SqlAlchemyProgressRepository(db.session)

    # Single-goal detail, wrapped in a list like the period view
    if goal_id is not None:
        detail = build_goal_detail(repo, goal_id, year=year)
        if detail is None:
            return jsonify({"msg": "Goal not found"}), 404
        return jsonify([detail.model_dump(mode="json", by_alias=True)]), 200

    goals = build_period_dashboard(repo, year=year, month=month)
    return jsonify([g.model_dump(mode="json", by_alias=True) for g in goals]), 200
