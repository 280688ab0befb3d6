"""
JSON API blueprint

Every endpoint requires a bearer token. Request bodies and responses use the
records' snake_case dictionaries; errors are ``{"error": ...}`` bodies
produced by the application error handlers.
"""

from flask import Blueprint, abort, request
from flask_login import current_user

from teamstock import login_manager
from teamstock.build import current_context
from teamstock.logger import get_logger
from teamstock.utils.logging_sanitizer import sanitize_headers

api = Blueprint('api', __name__)
logger = get_logger("teamstock.routes.api")


@api.before_request
def require_token():
    if not current_user.is_authenticated:
        logger.debug(f"Unauthenticated {request.method} {request.path}: {sanitize_headers(request.headers)}")
        return login_manager.unauthorized()
    return None


def json_body():
    """The request's JSON object; anything else is a ValueError"""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def actor():
    return current_user.username


def permission_required(*permissions):
    """Decorator to require a role granting any of ``permissions``"""
    def decorator(f):
        def decorated_function(*args, **kwargs):
            if not current_user.has_permission(*permissions):
                deny(f.__name__)
            return f(*args, **kwargs)
        decorated_function.__name__ = f.__name__
        return decorated_function
    return decorator


def deny(action):
    logger.warning(f"User {current_user.username} ({current_user.role}) denied {action} on {request.method} {request.path}")
    abort(403, description='You do not have permission to perform this action')


def context():
    return current_context()


def arg_flag(name):
    return request.args.get(name, '').lower() in ('true', '1', 'yes', 'on')


def merge_update(repository, record_id, patch, protected=()):
    """
    Apply a partial update to a stored record.

    The stored record's dictionary is overlaid with ``patch`` (minus the
    identity, audit and ``protected`` keys), re-normalized through
    ``from_dict`` and written back with a fresh stamp.
    """
    current = repository.get(record_id)
    ignored = {'id', *current.AUDIT_FIELDS, *protected}
    merged = current.to_dict()
    merged.update({key: value for key, value in patch.items() if key not in ignored})
    record = type(current).from_dict(merged)
    record.id = current.id
    return repository.update(record, actor())


from . import inventory, purchasing, vendors, bom, notifications, csv_transfer, teams, dashboard  # noqa: E402,F401
