"""
Descriptive statistics over a user's health records.

Everything here is pure: callers load the records (with their vital signs)
and pass them in, so the aggregation can be exercised without a database.
"""
import calendar
from datetime import timedelta

from health_tracker.models.vital_sign import TIMES_OF_DAY

PERIODS = ("week", "month", "year", "all")
DEFAULT_PERIOD = "month"


def _shift_months(moment, months):
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def period_start(period, now):
    """Lower bound of the window for ``period`` relative to ``now``; ``None`` means unbounded."""
    if period == "week":
        return now - timedelta(days=7)
    if period == "month":
        return _shift_months(now, 1)
    if period == "year":
        return _shift_months(now, 12)
    if period == "all":
        return None
    raise ValueError(f"Unknown period: {period!r}")


def summarize(values):
    values = [v for v in values if v is not None]
    if not values:
        return None
    return {
        "average": round(sum(values) / len(values), 2),
        "min": min(values),
        "max": max(values),
        "count": len(values),
    }


def _blood_pressure(vitals):
    return {
        "systolic": summarize(v.blood_pressure_systolic for v in vitals),
        "diastolic": summarize(v.blood_pressure_diastolic for v in vitals),
    }


def vital_sign_stats(vitals):
    vitals = list(vitals)
    return {
        "heartRate": summarize(v.heart_rate for v in vitals),
        "bloodPressure": _blood_pressure(vitals),
        "count": len(vitals),
    }


def compute_statistics(records):
    records = list(records)
    if not records:
        return None

    vitals = [vital for record in records for vital in record.vital_signs]
    by_time_of_day = {slot: [] for slot in TIMES_OF_DAY}
    for vital in vitals:
        if vital.time_of_day in by_time_of_day:
            by_time_of_day[vital.time_of_day].append(vital)

    return {
        "weight": summarize(r.weight for r in records),
        "steps": summarize(r.steps for r in records),
        "sleepHours": summarize(r.sleep_hours for r in records),
        "vitalSigns": {
            "overall": {
                "heartRate": summarize(v.heart_rate for v in vitals),
                "bloodPressure": _blood_pressure(vitals),
            },
            "byTimeOfDay": {
                slot: vital_sign_stats(group) for slot, group in by_time_of_day.items()
            },
        },
    }
