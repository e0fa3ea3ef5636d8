import math
from datetime import datetime, timezone

from marshmallow import fields, ValidationError


class FlexibleDateTime(fields.DateTime):
    """ISO datetime that also takes a bare ``YYYY-MM-DD`` and stores naive UTC."""

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, str) and len(value.strip()) == 10:
            try:
                return datetime.strptime(value.strip(), "%Y-%m-%d")
            except ValueError:
                raise ValidationError("Not a valid date.")
        result = super()._deserialize(value, attr, data, **kwargs)
        if result.tzinfo is not None:
            result = result.astimezone(timezone.utc).replace(tzinfo=None)
        return result


class WholeInteger(fields.Integer):
    """Integer that rejects fractional input instead of truncating it."""

    default_error_messages = {"fractional": "Must be a whole number."}

    def _deserialize(self, value, attr, data, **kwargs):
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = None
        if number is not None and math.isfinite(number) and not number.is_integer():
            raise self.make_error("fractional")
        return super()._deserialize(value, attr, data, **kwargs)
