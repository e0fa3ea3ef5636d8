from datetime import datetime
from health_tracker.extensions import db


class HealthRecord(db.Model):
    __tablename__ = "health_records"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Daily metrics
    weight = db.Column(db.Float)        # kg
    steps = db.Column(db.Integer)
    sleep_hours = db.Column(db.Float)   # 0-24
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", back_populates="records")
    vital_signs = db.relationship(
        "VitalSign",
        back_populates="record",
        order_by="VitalSign.timestamp",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.CheckConstraint("weight IS NULL OR weight > 0", name="ck_health_records_weight"),
        db.CheckConstraint("steps IS NULL OR steps >= 0", name="ck_health_records_steps"),
        db.CheckConstraint(
            "sleep_hours IS NULL OR (sleep_hours >= 0 AND sleep_hours <= 24)",
            name="ck_health_records_sleep_hours",
        ),
        db.Index("idx_health_records_user_id", "user_id"),
        db.Index("idx_health_records_user_date", "user_id", "date"),
    )

    def __repr__(self):
        return f"<HealthRecord {self.id}: user {self.user_id} @ {self.date:%Y-%m-%d}>"
