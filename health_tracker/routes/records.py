from flask import Blueprint, current_app, jsonify, request

from health_tracker.extensions import db, limiter
from health_tracker.schemas import (
    SORTABLE_FIELDS,
    record_schema,
    records_schema,
    record_update_schema,
    vital_sign_schema,
    record_list_query_schema,
    statistics_query_schema,
)
from health_tracker.services import records as record_service
from health_tracker.utils.decorators import with_user_id
from health_tracker.utils.request import json_body

records_bp = Blueprint("records", __name__)


def api_rate_limit():
    return current_app.config["API_RATE_LIMIT"]


limiter.limit(api_rate_limit)(records_bp)


# ---------------- Statistics ----------------
@records_bp.route("/statistics", methods=["GET"])
@with_user_id
def get_statistics(user_id):
    params = statistics_query_schema.load(request.args)
    result = record_service.statistics_for_period(db.session, user_id, params["period"])
    return jsonify(result), 200


# ---------------- Records ----------------
@records_bp.route("", methods=["GET"])
@with_user_id
def list_records(user_id):
    params = record_list_query_schema.load(request.args)
    limit = params["limit"] or current_app.config["DEFAULT_RECORDS_LIMIT"]
    sort_by = SORTABLE_FIELDS.get(params["sort_by"], "date")

    records = record_service.list_records(db.session, user_id, limit=limit, sort_by=sort_by)
    return jsonify({
        "count": len(records),
        "records": records_schema.dump(records),
    }), 200


@records_bp.route("/<int:record_id>", methods=["GET"])
@with_user_id
def get_record(user_id, record_id):
    record = record_service.get_record(db.session, user_id, record_id)
    return jsonify({"record": record_schema.dump(record)}), 200


@records_bp.route("", methods=["POST"])
@with_user_id
def create_record(user_id):
    data = record_schema.load(json_body())
    record = record_service.create_record(db.session, user_id, data)
    current_app.logger.info(
        f"User {user_id} created record {record.id} with {len(record.vital_signs)} vital signs"
    )
    return jsonify({
        "message": "Record created successfully",
        "record": record_schema.dump(record),
    }), 201


@records_bp.route("/<int:record_id>", methods=["PUT"])
@with_user_id
def update_record(user_id, record_id):
    # Ownership first, so another user's id is a 404 even with a bad body
    record_service.get_record(db.session, user_id, record_id)
    changes = record_update_schema.load(json_body())
    record = record_service.update_record(db.session, user_id, record_id, changes)
    return jsonify({
        "message": "Record updated successfully",
        "record": record_schema.dump(record),
    }), 200


@records_bp.route("/<int:record_id>", methods=["DELETE"])
@with_user_id
def delete_record(user_id, record_id):
    record_service.delete_record(db.session, user_id, record_id)
    current_app.logger.info(f"User {user_id} deleted record {record_id}")
    return jsonify({"message": "Record deleted successfully"}), 200


# ---------------- Vital signs ----------------
@records_bp.route("/<int:record_id>/vitals", methods=["POST"])
@with_user_id
def add_vital_sign(user_id, record_id):
    record_service.get_record(db.session, user_id, record_id)
    data = vital_sign_schema.load(json_body())
    vital = record_service.add_vital_sign(db.session, user_id, record_id, data)
    return jsonify({
        "message": "Vital sign added successfully",
        "vitalSign": vital_sign_schema.dump(vital),
    }), 201


@records_bp.route("/<int:record_id>/vitals/<int:vital_id>", methods=["PUT"])
@with_user_id
def update_vital_sign(user_id, record_id, vital_id):
    record_service.get_vital_sign(db.session, user_id, record_id, vital_id)
    changes = vital_sign_schema.load(json_body(), partial=True)
    vital = record_service.update_vital_sign(db.session, user_id, record_id, vital_id, changes)
    return jsonify({
        "message": "Vital sign updated successfully",
        "vitalSign": vital_sign_schema.dump(vital),
    }), 200


@records_bp.route("/<int:record_id>/vitals/<int:vital_id>", methods=["DELETE"])
@with_user_id
def delete_vital_sign(user_id, record_id, vital_id):
    record_service.delete_vital_sign(db.session, user_id, record_id, vital_id)
    return jsonify({"message": "Vital sign deleted successfully"}), 200
