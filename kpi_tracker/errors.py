from flask import jsonify, current_app
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from domain.progress.errors import InvalidParameter
from kpi_tracker.extensions import db, jwt


def _validation_details(error: ValidationError):
    return [
        {"field": ".".join(str(part) for part in e["loc"]), "msg": e["msg"]}
        for e in error.errors()
    ]


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({"msg": "Invalid request body", "errors": _validation_details(error)}), 400

    @app.errorhandler(InvalidParameter)
    def handle_invalid_parameter(error):
        return jsonify({"msg": str(error)}), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({"msg": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        current_app.logger.exception("Unhandled error: %s", error)
        db.session.rollback()
        return jsonify({"msg": "Internal server error"}), 500


@jwt.expired_token_loader
def expired_token_callback(jwt_header, jwt_payload):
    return jsonify({"msg": "Token has expired"}), 401


@jwt.invalid_token_loader
def invalid_token_callback(error):
    return jsonify({"msg": "Invalid token"}), 401


@jwt.unauthorized_loader
def unauthorized_callback(error):
    return jsonify({"msg": "Missing authorization token"}), 401


@jwt.user_lookup_error_loader
def user_lookup_error_callback(jwt_header, jwt_payload):
    return jsonify({"msg": "User no longer exists"}), 401
