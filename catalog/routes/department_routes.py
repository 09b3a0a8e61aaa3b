# catalog/routes/department_routes.py
from flask import Blueprint, jsonify, request

from catalog.services.department_service import (
    get_department_details,
    list_department_subjects,
    list_departments,
)
from catalog.utils.decorators import json_errors
from catalog.utils.request_params import parse_entity_id, parse_list_params
from catalog.utils.responses import detail, paginated

departments_bp = Blueprint("departments", __name__)


@departments_bp.route("", methods=["GET"])
@json_errors("Failed to fetch departments.")
def get_departments():
    params = parse_list_params(request.args, "search")
    return jsonify(paginated(list_departments(params))), 200


@departments_bp.route("/<department_id>", methods=["GET"])
@json_errors("Failed to fetch department.")
def get_department(department_id):
    department_id = parse_entity_id(department_id, "department")
    return jsonify(detail(get_department_details(department_id))), 200


@departments_bp.route("/<department_id>/subjects", methods=["GET"])
@json_errors("Failed to fetch department subjects.")
def get_department_subjects(department_id):
    department_id = parse_entity_id(department_id, "department")
    params = parse_list_params(request.args, "search")
    return jsonify(paginated(list_department_subjects(department_id, params))), 200
