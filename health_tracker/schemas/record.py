from marshmallow import fields, validate, pre_load, EXCLUDE

from health_tracker.extensions import ma
from health_tracker.models.vital_sign import TIMES_OF_DAY
from health_tracker.statistics import PERIODS, DEFAULT_PERIOD
from .fields import FlexibleDateTime, WholeInteger

TIME_OF_DAY_ERROR = "timeOfDay must be: morning, afternoon, evening, or night"
SORTABLE_FIELDS = {
    "date": "date",
    "createdAt": "created_at",
    "weight": "weight",
    "steps": "steps",
    "sleepHours": "sleep_hours",
}


class BlankAsNullMixin:
    """Form inputs post empty strings for untouched numeric fields."""

    blank_as_null = ()

    @pre_load
    def blank_to_none(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in self.blank_as_null:
            if isinstance(data.get(key), str) and not data[key].strip():
                data[key] = None
        return data


class VitalSignSchema(BlankAsNullMixin, ma.Schema):
    class Meta:
        unknown = EXCLUDE

    blank_as_null = ("heartRate", "bloodPressureSystolic", "bloodPressureDiastolic",
                     "temperature", "oxygenSaturation")

    id = fields.Integer(dump_only=True)
    record_id = fields.Integer(data_key="recordId", dump_only=True)
    timestamp = FlexibleDateTime()
    time_of_day = fields.String(
        data_key="timeOfDay",
        required=True,
        validate=validate.OneOf(TIMES_OF_DAY, error=TIME_OF_DAY_ERROR),
        error_messages={"required": TIME_OF_DAY_ERROR, "null": TIME_OF_DAY_ERROR},
    )
    heart_rate = WholeInteger(
        data_key="heartRate",
        allow_none=True,
        validate=validate.Range(min=30, max=250, error="Heart rate must be between 30-250 bpm"),
    )
    blood_pressure_systolic = WholeInteger(
        data_key="bloodPressureSystolic",
        allow_none=True,
        validate=validate.Range(min=70, max=200, error="Blood pressure systolic must be between 70-200"),
    )
    blood_pressure_diastolic = WholeInteger(
        data_key="bloodPressureDiastolic",
        allow_none=True,
        validate=validate.Range(min=40, max=130, error="Blood pressure diastolic must be between 40-130"),
    )
    temperature = fields.Float(allow_none=True)
    oxygen_saturation = WholeInteger(
        data_key="oxygenSaturation",
        allow_none=True,
        validate=validate.Range(min=0, max=100, error="Oxygen saturation must be between 0-100"),
    )
    notes = fields.String(allow_none=True)
    created_at = fields.DateTime(data_key="createdAt", dump_only=True)


class HealthRecordSchema(BlankAsNullMixin, ma.Schema):
    class Meta:
        unknown = EXCLUDE

    blank_as_null = ("weight", "steps", "sleepHours")

    id = fields.Integer(dump_only=True)
    user_id = fields.Integer(data_key="userId", dump_only=True)
    date = FlexibleDateTime()
    weight = fields.Float(
        allow_none=True,
        validate=validate.Range(min=0, min_inclusive=False, error="Weight must be positive"),
    )
    steps = WholeInteger(
        allow_none=True,
        validate=validate.Range(min=0, error="Steps cannot be negative"),
    )
    sleep_hours = fields.Float(
        data_key="sleepHours",
        allow_none=True,
        validate=validate.Range(min=0, max=24, error="Sleep hours must be between 0-24"),
    )
    notes = fields.String(allow_none=True)
    vital_signs = fields.List(
        fields.Nested(VitalSignSchema),
        data_key="vitalSigns",
        allow_none=True,
    )
    created_at = fields.DateTime(data_key="createdAt", dump_only=True)
    updated_at = fields.DateTime(data_key="updatedAt", dump_only=True)


class RecordListQuerySchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    limit = fields.Integer(
        load_default=None,
        validate=validate.Range(min=1, error="limit must be a positive integer"),
    )
    sort_by = fields.String(data_key="sortBy", load_default="date")


class StatisticsQuerySchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    period = fields.String(
        load_default=DEFAULT_PERIOD,
        validate=validate.OneOf(PERIODS, error="period must be one of: week, month, year, all"),
    )


record_schema = HealthRecordSchema()
records_schema = HealthRecordSchema(many=True)
record_update_schema = HealthRecordSchema(only=("weight", "steps", "sleep_hours", "notes"))
vital_sign_schema = VitalSignSchema()
record_list_query_schema = RecordListQuerySchema()
statistics_query_schema = StatisticsQuerySchema()
