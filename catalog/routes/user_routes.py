# catalog/routes/user_routes.py
from flask import Blueprint, jsonify, request

from catalog.services.topology_service import Role
from catalog.services.user_service import (
    get_user_or_404,
    list_user_classes,
    list_user_departments,
    list_user_subjects,
    list_users,
)
from catalog.utils.decorators import json_errors
from catalog.utils.request_params import parse_list_params, parse_role
from catalog.utils.responses import detail, paginated

users_bp = Blueprint("users", __name__)


@users_bp.route("", methods=["GET"])
@json_errors("Failed to get users")
def get_users():
    params = parse_list_params(request.args, "search")
    if request.args.get("role", "") != "":
        # Optional here, but when given it has to be a known role
        role = parse_role(request.args["role"], allowed=tuple(Role))
        params = params.with_scope(role=role.value)
    return jsonify(paginated(list_users(params))), 200


@users_bp.route("/<user_id>", methods=["GET"])
@json_errors("Failed to fetch user.")
def get_user(user_id):
    return jsonify(detail(get_user_or_404(user_id).to_dict())), 200


@users_bp.route("/<user_id>/departments", methods=["GET"])
@json_errors("Failed to fetch user departments")
def get_user_departments(user_id):
    params = parse_list_params(request.args)
    return jsonify(paginated(list_user_departments(user_id, params))), 200


@users_bp.route("/<user_id>/subjects", methods=["GET"])
@json_errors("Failed to fetch user subjects")
def get_user_subjects(user_id):
    params = parse_list_params(request.args)
    return jsonify(paginated(list_user_subjects(user_id, params))), 200


@users_bp.route("/<user_id>/classes", methods=["GET"])
@json_errors("Failed to fetch user classes")
def get_user_classes(user_id):
    params = parse_list_params(request.args)
    return jsonify(paginated(list_user_classes(user_id, params))), 200
