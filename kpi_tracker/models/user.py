from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from kpi_tracker.extensions import db

USERS_TABLE = "users"

ROLE_ADMIN = "ADMIN"
ROLE_USER = "USER"
ROLES = (ROLE_ADMIN, ROLE_USER)


class User(db.Model):
    __tablename__ = USERS_TABLE

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    name = db.Column(db.String(150), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.String(20),
        db.CheckConstraint("role IN ('ADMIN','USER')"),
        nullable=False,
        default=ROLE_USER,
        index=True,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    assignments = db.relationship("GoalAssignment", back_populates="user", lazy="dynamic")
    work_logs = db.relationship("WorkLog", back_populates="author", lazy="dynamic")

    # Helpers
    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def __repr__(self):
        return f"<User {self.id} {self.email}>"
