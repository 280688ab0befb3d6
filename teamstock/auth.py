from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from teamstock import db, limiter
from teamstock.buisness.validation.normalizers import clean_optional_str
from teamstock.data.users.permissions import ASSIGN_ROLES, DEFAULT_ROLE, MANAGE_USERS, SUPER_ADMIN, validate_role
from teamstock.data.users.user import User
from teamstock.logger import get_logger
from teamstock.utils.logging_sanitizer import sanitize_dict

logger = get_logger("teamstock.auth")
auth = Blueprint('auth', __name__, url_prefix='/api/auth')


def _login_limit():
    return current_app.config['LOGIN_RATE_LIMIT']


def _credentials():
    data = request.get_json(silent=True) or {}
    username = clean_optional_str(data.get('username')) or ''
    password = str(data.get('password') or '')
    return data, username, password


@auth.route('/register', methods=['POST'])
@limiter.limit(_login_limit)
def register():
    data, username, password = _credentials()
    logger.debug(f"Registration request: {sanitize_dict(data)}")

    if not username or not password:
        return jsonify({'error': 'Username and password are required'}), 400
    if len(password) < 8:
        return jsonify({'error': 'Password must be at least 8 characters'}), 400
    if User.query.filter_by(username=username).first():
        logger.warning(f"Registration attempt for existing username: {username}")
        return jsonify({'error': 'Username already taken'}), 409

    # The first account administers the rest
    role = SUPER_ADMIN if User.query.count() == 0 else DEFAULT_ROLE
    user = User(username=username, email=clean_optional_str(data.get('email')),
                team=clean_optional_str(data.get('team')), role=role)
    user.set_password(password)
    token = user.issue_token()
    db.session.add(user)
    db.session.commit()

    logger.info(f"Registered user: {username} as {role}")
    return jsonify({'user': user.to_dict(), 'token': token}), 201


@auth.route('/login', methods=['POST'])
@limiter.limit(_login_limit)
def login():
    _, username, password = _credentials()

    if not username or not password:
        logger.warning(f"Login attempt with missing credentials for username: {username}")
        return jsonify({'error': 'Username and password are required'}), 400

    user = User.query.filter_by(username=username).first()
    if user is None or not user.check_password(password):
        logger.warning(f"Failed login attempt for username: {username}")
        return jsonify({'error': 'Invalid username or password'}), 401

    if not user.is_active:
        logger.warning(f"Login attempt for disabled account: {username}")
        return jsonify({'error': 'Account is disabled'}), 403

    token = user.issue_token()
    db.session.commit()

    logger.info(f"Successful login for user: {username}")
    return jsonify({'user': user.to_dict(), 'token': token})


@auth.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify({'user': current_user.to_dict()})


@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    username = current_user.username
    current_user.revoke_token()
    db.session.commit()
    logger.info(f"User logged out: {username}")
    return jsonify({'status': 'logged out'})


@auth.route('/users', methods=['GET'])
@login_required
def list_users():
    if not current_user.has_permission(MANAGE_USERS, ASSIGN_ROLES):
        return jsonify({'error': 'You do not have permission to view users'}), 403
    users = User.query.order_by(User.username).all()
    if not current_user.has_permission(MANAGE_USERS):
        users = [user for user in users if user.team == current_user.team]
    return jsonify({'users': [user.to_dict() for user in users]})


@auth.route('/users/<int:user_id>/role', methods=['PUT'])
@login_required
def assign_role(user_id):
    data = request.get_json(silent=True) or {}
    target = db.session.get(User, user_id)
    if target is None:
        return jsonify({'error': f"User {user_id} not found"}), 404
    try:
        role = validate_role(data.get('role'))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    if not current_user.can_assign_role(target, role):
        logger.warning(f"User {current_user.username} ({current_user.role}) denied assigning {role} to {target.username}")
        return jsonify({'error': 'You do not have permission to assign this role'}), 403

    previous = target.role
    target.role = role
    db.session.commit()
    logger.info(f"{current_user.username} changed role of {target.username} from {previous} to {role}")
    return jsonify({'user': target.to_dict()})
