# kpi_tracker/utils/decorators.py
from functools import wraps
from flask import jsonify
from flask_jwt_extended import current_user, jwt_required


def admin_required(view_func):
    """Require a valid JWT whose user has the ADMIN role."""
    @wraps(view_func)
    @jwt_required()
    def wrapper(*args, **kwargs):
        if not current_user.is_admin:
            return jsonify({"msg": "Admin access required"}), 403
        return view_func(*args, **kwargs)
    return wrapper


def self_or_admin(user_id):
    """True when the authenticated user is ``user_id`` or an admin."""
    return current_user.is_admin or current_user.id == user_id
