from kpi_tracker.extensions import db


class GoalAssignment(db.Model):
    __tablename__ = "goal_assignments"

    id = db.Column(db.Integer, primary_key=True)
    goal_id = db.Column(db.Integer, db.ForeignKey("goals.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    target = db.Column(db.Integer, nullable=False, default=0)

    goal = db.relationship("Goal", back_populates="assignments")
    user = db.relationship("User", back_populates="assignments")

    __table_args__ = (
        db.UniqueConstraint("goal_id", "user_id", name="uq_goal_assignments_goal_user"),
        db.CheckConstraint("target >= 0", name="ck_goal_assignments_target_non_negative"),
    )
