"""
Owner-scoped persistence for health records and their vital signs.

Every function takes the session and the acting user's id explicitly; the
ownership constraint is part of each lookup, so a record belonging to someone
else is indistinguishable from a missing one.
"""
from datetime import datetime

from sqlalchemy.orm import Session, selectinload

from health_tracker.errors import NotFound
from health_tracker.models import HealthRecord, VitalSign
from health_tracker.statistics import compute_statistics, period_start

RECORD_FIELDS = ("weight", "steps", "sleep_hours", "notes")
VITAL_SIGN_FIELDS = (
    "timestamp",
    "time_of_day",
    "heart_rate",
    "blood_pressure_systolic",
    "blood_pressure_diastolic",
    "temperature",
    "oxygen_saturation",
    "notes",
)


def _owned(db: Session, user_id: int):
    return db.query(HealthRecord).filter(HealthRecord.user_id == user_id)


def list_records(db: Session, user_id: int, limit: int, sort_by: str = "date"):
    sort_column = getattr(HealthRecord, sort_by)
    return (
        _owned(db, user_id)
        .options(selectinload(HealthRecord.vital_signs))
        .order_by(sort_column.desc(), HealthRecord.id.desc())
        .limit(limit)
        .all()
    )


def get_record(db: Session, user_id: int, record_id: int) -> HealthRecord:
    record = _owned(db, user_id).filter(HealthRecord.id == record_id).first()
    if record is None:
        raise NotFound("Record not found")
    return record


def _build_vital_sign(data: dict) -> VitalSign:
    vital = VitalSign(**{key: data.get(key) for key in VITAL_SIGN_FIELDS if key != "timestamp"})
    vital.timestamp = data.get("timestamp") or datetime.utcnow()
    return vital


def create_record(db: Session, user_id: int, data: dict) -> HealthRecord:
    """Persist a record and its nested vital signs in one transaction.

    ``data`` must already be validated; nothing is written unless every
    vital sign passed validation.
    """
    record = HealthRecord(
        user_id=user_id,
        date=data.get("date") or datetime.utcnow(),
        **{key: data.get(key) for key in RECORD_FIELDS},
    )
    for vital_data in data.get("vital_signs") or []:
        record.vital_signs.append(_build_vital_sign(vital_data))

    db.add(record)
    db.commit()
    return record


def update_record(db: Session, user_id: int, record_id: int, changes: dict) -> HealthRecord:
    record = get_record(db, user_id, record_id)
    # Omitted fields are left unchanged
    for key in RECORD_FIELDS:
        if key in changes:
            setattr(record, key, changes[key])
    db.commit()
    return record


def delete_record(db: Session, user_id: int, record_id: int) -> None:
    record = get_record(db, user_id, record_id)
    db.delete(record)
    db.commit()


def get_vital_sign(db: Session, user_id: int, record_id: int, vital_id: int) -> VitalSign:
    get_record(db, user_id, record_id)
    vital = (
        db.query(VitalSign)
        .filter(VitalSign.id == vital_id, VitalSign.record_id == record_id)
        .first()
    )
    if vital is None:
        raise NotFound("Vital sign not found")
    return vital


def add_vital_sign(db: Session, user_id: int, record_id: int, data: dict) -> VitalSign:
    record = get_record(db, user_id, record_id)
    vital = _build_vital_sign(data)
    record.vital_signs.append(vital)
    db.commit()
    return vital


def update_vital_sign(db: Session, user_id: int, record_id: int, vital_id: int, changes: dict) -> VitalSign:
    vital = get_vital_sign(db, user_id, record_id, vital_id)
    for key in VITAL_SIGN_FIELDS:
        if key in changes:
            setattr(vital, key, changes[key])
    db.commit()
    return vital


def delete_vital_sign(db: Session, user_id: int, record_id: int, vital_id: int) -> None:
    vital = get_vital_sign(db, user_id, record_id, vital_id)
    db.delete(vital)
    db.commit()


def records_for_period(db: Session, user_id: int, period: str, now=None):
    start = period_start(period, now or datetime.utcnow())
    query = _owned(db, user_id).options(selectinload(HealthRecord.vital_signs))
    if start is not None:
        query = query.filter(HealthRecord.date >= start)
    return query.all()


def statistics_for_period(db: Session, user_id: int, period: str, now=None) -> dict:
    records = records_for_period(db, user_id, period, now=now)
    if not records:
        return {"period": period, "count": 0, "statistics": None}

    return {
        "period": period,
        "recordsCount": len(records),
        "vitalSignsCount": sum(len(r.vital_signs) for r in records),
        "statistics": compute_statistics(records),
    }
