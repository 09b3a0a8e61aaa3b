from functools import wraps

from flask import jsonify, request

from catalog.app_logger import get_logger
from catalog.exceptions import NotFoundError, ValidationError
from catalog.extensions import db

logger = get_logger(__name__)


def json_errors(failure_message):
    """
    Maps service exceptions to JSON error responses.

    Anything that is not a ValidationError / NotFoundError is logged with
    the failing route and answered with `failure_message` only.
    """
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"error": str(e)}), 400
            except NotFoundError as e:
                return jsonify({"error": str(e)}), 404
            except Exception:
                db.session.rollback()
                rule = request.url_rule.rule if request.url_rule else request.path
                logger.exception("%s %s failed", request.method, rule)
                return jsonify({"error": failure_message}), 500
        return wrapped
    return decorator
