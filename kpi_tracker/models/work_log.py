from datetime import datetime
from kpi_tracker.extensions import db


class WorkLog(db.Model):
    __tablename__ = "work_logs"

    id = db.Column(db.Integer, primary_key=True)
    description = db.Column(db.Text, nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    # When the work was done; every dashboard aggregates on this, not created_at
    completed_at = db.Column(db.DateTime, nullable=False, index=True)
    goal_id = db.Column(db.Integer, db.ForeignKey("goals.id"), nullable=False, index=True)
    author_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    goal = db.relationship("Goal", back_populates="work_logs")
    author = db.relationship("User", back_populates="work_logs")
    images = db.relationship(
        "WorkLogImage",
        back_populates="work_log",
        order_by="WorkLogImage.id",
    )

    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_work_logs_quantity_positive"),
        db.Index("idx_work_logs_goal_completed", "goal_id", "completed_at"),
        db.Index("idx_work_logs_author_completed", "author_id", "completed_at"),
    )
