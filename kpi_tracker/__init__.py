import os

from flask import Flask

from kpi_tracker.config import config
from kpi_tracker.extensions import db, ma, jwt, migrate, cors, limiter
from kpi_tracker.logging_config import configure_logging


def create_app(config_name=None):
    app = Flask(__name__)

    # Settings
    config_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config[config_name])
    app.url_map.strict_slashes = False

    configure_logging(app.config.get("LOG_FILE"), app.config.get("LOG_LEVEL", "INFO"))

    # Extensions
    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    cors.init_app(app, resources={r"/api/*": {
        "origins": app.config["CORS_ORIGINS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    }})

    # Models must be imported before migrations or create_all see the metadata
    from kpi_tracker import models  # noqa: F401
    from kpi_tracker.errors import register_error_handlers
    register_error_handlers(app)

    # Blueprints
    from kpi_tracker.routes.auth import auth_bp
    from kpi_tracker.routes.users import users_bp
    from kpi_tracker.routes.goals import goals_bp
    from kpi_tracker.routes.worklogs import worklogs_bp
    from kpi_tracker.routes.dashboard import dashboard_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(users_bp, url_prefix="/api/users")
    app.register_blueprint(goals_bp, url_prefix="/api/goals")
    app.register_blueprint(worklogs_bp, url_prefix="/api/worklogs")
    app.register_blueprint(dashboard_bp, url_prefix="/api/dashboard")

    app.logger.info("KPI tracker started with '%s' config", config_name)
    return app


# JWT callback
@jwt.user_lookup_loader
def user_lookup_callback(_jwt_header, jwt_data):
    from kpi_tracker.models import User
    identity = jwt_data["sub"]
    return db.session.get(User, int(identity))
