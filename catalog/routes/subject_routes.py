# catalog/routes/subject_routes.py
from flask import Blueprint, jsonify, request

from catalog.services.subject_service import (
    add_subject,
    get_subject_details,
    list_subject_classes,
    list_subject_users,
    list_subjects,
)
from catalog.utils.decorators import json_errors
from catalog.utils.request_params import (
    parse_entity_id,
    parse_list_params,
    parse_role,
)
from catalog.utils.responses import created, detail, paginated

subjects_bp = Blueprint("subjects", __name__)


# Get all subjects with optional search, department filter and pagination
@subjects_bp.route("", methods=["GET"])
@json_errors("Failed to get subjects")
def get_subjects():
    params = parse_list_params(request.args, "search", "department")
    return jsonify(paginated(list_subjects(params))), 200


@subjects_bp.route("", methods=["POST"])
@json_errors("Failed to create subject")
def create_subject():
    data = request.get_json(silent=True) or {}

    subject_id = add_subject(
        department_id=data.get("departmentId"),
        name=data.get("name"),
        code=data.get("code"),
        description=data.get("description")
    )
    return jsonify(created(subject_id)), 201


@subjects_bp.route("/<subject_id>", methods=["GET"])
@json_errors("Failed to get subject details")
def get_subject(subject_id):
    subject_id = parse_entity_id(subject_id, "subject")
    return jsonify(detail(get_subject_details(subject_id))), 200


@subjects_bp.route("/<subject_id>/classes", methods=["GET"])
@json_errors("Failed to get subject classes")
def get_subject_classes(subject_id):
    subject_id = parse_entity_id(subject_id, "subject")
    params = parse_list_params(request.args, "search")
    return jsonify(paginated(list_subject_classes(subject_id, params))), 200


# List users in a subject by role with pagination
@subjects_bp.route("/<subject_id>/users", methods=["GET"])
@json_errors("Failed to get subject users")
def get_subject_users(subject_id):
    subject_id = parse_entity_id(subject_id, "subject")
    role = parse_role(request.args.get("role"))
    params = parse_list_params(request.args, "search")
    return jsonify(paginated(list_subject_users(subject_id, role, params))), 200
