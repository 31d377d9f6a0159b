from datetime import datetime
from kpi_tracker.extensions import db


class Goal(db.Model):
    __tablename__ = "goals"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    # Sum of the assignment targets, recomputed whenever assignments change
    target = db.Column(db.Integer, nullable=False, default=0)
    unit = db.Column(db.String(50), nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    assignments = db.relationship(
        "GoalAssignment",
        back_populates="goal",
        order_by="GoalAssignment.id",
    )
    work_logs = db.relationship("WorkLog", back_populates="goal", lazy="dynamic")

    __table_args__ = (
        db.CheckConstraint("target >= 0", name="ck_goals_target_non_negative"),
        db.Index("idx_goals_end_date", "end_date"),
    )

    def recompute_target(self):
        self.target = sum(a.target for a in self.assignments)
        return self.target
