from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import create_access_token, jwt_required, current_user

from domain.users.schemas import UserRegister, UserLogin
from kpi_tracker.extensions import db, limiter
from kpi_tracker.models.user import User, ROLE_USER
from kpi_tracker.schemas import user_schema

auth_bp = Blueprint("auth", __name__)


def _login_rate_limit():
    return current_app.config.get("LOGIN_RATE_LIMIT", "10 per 15 minutes")


def _password_too_short(password):
    return len(password) < current_app.config.get("PASSWORD_MIN_LENGTH", 6)


@auth_bp.route("/register", methods=["POST"])
def register():
    data = UserRegister.model_validate(request.get_json(silent=True) or {})

    if _password_too_short(data.password):
        return jsonify({"msg": "Password is too short"}), 400

    if User.query.filter_by(email=data.email).first():
        return jsonify({"msg": "Email is already registered"}), 409

    new_user = User(name=data.name, email=data.email, role=ROLE_USER)
    new_user.set_password(data.password)
    db.session.add(new_user)
    db.session.commit()

    current_app.logger.info("Registered user %s", new_user.email)
    return jsonify(user_schema.dump(new_user)), 201


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(_login_rate_limit)
def login():
    data = UserLogin.model_validate(request.get_json(silent=True) or {})

    user = User.query.filter_by(email=data.email).first()
    # Same message for unknown email and wrong password
    if not user or not user.check_password(data.password):
        current_app.logger.warning("Failed login for %s", data.email)
        return jsonify({"msg": "Invalid email or password"}), 401

    access_token = create_access_token(
        identity=str(user.id),
        additional_claims={
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role,
        },
    )
    current_app.logger.info("User %s logged in", user.email)
    return jsonify({
        "msg": "Login successful",
        "token": access_token,
        "user": user_schema.dump(user),
    }), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    return jsonify(user_schema.dump(current_user)), 200
