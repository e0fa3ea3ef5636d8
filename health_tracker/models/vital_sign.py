from datetime import datetime
from health_tracker.extensions import db

TIMES_OF_DAY = ("morning", "afternoon", "evening", "night")


class VitalSign(db.Model):
    __tablename__ = "vital_signs"

    id = db.Column(db.Integer, primary_key=True)
    record_id = db.Column(
        db.Integer,
        db.ForeignKey("health_records.id", ondelete="CASCADE"),
        nullable=False,
    )
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    time_of_day = db.Column(
        db.String(20),
        db.CheckConstraint(
            "time_of_day IN ('morning','afternoon','evening','night')",
            name="ck_vital_signs_time_of_day",
        ),
        nullable=False,
    )

    heart_rate = db.Column(db.Integer)                  # bpm
    blood_pressure_systolic = db.Column(db.Integer)     # mmHg
    blood_pressure_diastolic = db.Column(db.Integer)    # mmHg
    temperature = db.Column(db.Float)                   # °C
    oxygen_saturation = db.Column(db.Integer)           # %
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    record = db.relationship("HealthRecord", back_populates="vital_signs")

    __table_args__ = (
        db.Index("idx_vital_signs_record_id", "record_id"),
        db.Index("idx_vital_signs_time_of_day", "time_of_day"),
    )

    def __repr__(self):
        return f"<VitalSign {self.id}: record {self.record_id} ({self.time_of_day})>"
