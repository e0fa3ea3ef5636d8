from flask import request

from health_tracker.errors import ValidationFailed


def json_body():
    """Return the request's JSON object, rejecting anything that isn't one."""
    if not request.get_data(cache=True):
        return {}
    data = request.get_json(force=True, silent=True)
    if data is None:
        raise ValidationFailed("Request body must be valid JSON")
    if not isinstance(data, dict):
        raise ValidationFailed("Request body must be a JSON object")
    return data
