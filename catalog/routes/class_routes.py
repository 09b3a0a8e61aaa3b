# catalog/routes/class_routes.py
from flask import Blueprint, jsonify, request

from catalog.services.class_service import (
    add_class,
    get_class_details,
    list_class_users,
    list_classes,
)
from catalog.utils.decorators import json_errors
from catalog.utils.request_params import (
    parse_entity_id,
    parse_list_params,
    parse_role,
)
from catalog.utils.responses import created, detail, paginated

classes_bp = Blueprint("classes", __name__)


@classes_bp.route("", methods=["GET"])
@json_errors("Failed to get classes")
def get_classes():
    params = parse_list_params(request.args, "search", "subject", "teacher")
    return jsonify(paginated(list_classes(params))), 200


@classes_bp.route("", methods=["POST"])
@json_errors("Failed to create class")
def create_class():
    data = request.get_json(silent=True) or {}

    class_id = add_class(
        subject_id=data.get("subjectId"),
        teacher_id=data.get("teacherId"),
        name=data.get("name"),
        description=data.get("description")
    )
    return jsonify(created(class_id)), 201


@classes_bp.route("/<class_id>", methods=["GET"])
@json_errors("Failed to get class details")
def get_class(class_id):
    class_id = parse_entity_id(class_id, "class")
    return jsonify(detail(get_class_details(class_id))), 200


@classes_bp.route("/<class_id>/users", methods=["GET"])
@json_errors("Failed to get class users")
def get_class_users(class_id):
    class_id = parse_entity_id(class_id, "class")
    role = parse_role(request.args.get("role"))
    params = parse_list_params(request.args, "search")
    return jsonify(paginated(list_class_users(class_id, role, params))), 200
