from kpi_tracker.extensions import db


class WorkLogImage(db.Model):
    __tablename__ = "work_log_images"

    id = db.Column(db.Integer, primary_key=True)
    url = db.Column(db.String(500), nullable=False)
    work_log_id = db.Column(db.Integer, db.ForeignKey("work_logs.id"), nullable=False, index=True)

    work_log = db.relationship("WorkLog", back_populates="images")
