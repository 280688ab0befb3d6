import hashlib
import secrets

from flask import jsonify
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from teamstock import db, login_manager
from teamstock.data.users.permissions import (
    APPROVE_PURCHASES,
    APPROVE_TEAM_PURCHASES,
    ASSIGN_ROLES,
    DEFAULT_ROLE,
    MANAGE_USERS,
    TEAM_ASSIGNABLE_ROLES,
    permissions_for,
)
from teamstock.utils.timestamps import utcnow


def _digest(token):
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)
    team = db.Column(db.String(80), nullable=True)
    role = db.Column(db.String(32), default=DEFAULT_ROLE, nullable=False)
    api_token_hash = db.Column(db.String(64), unique=True, nullable=True, index=True)
    active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    @property
    def is_active(self):
        return bool(self.active)

    @property
    def permissions(self):
        return permissions_for(self.role)

    def has_permission(self, *permissions):
        """True when the role grants any of ``permissions``"""
        return any(permission in self.permissions for permission in permissions)

    def can_approve_purchase(self, team=None):
        if self.has_permission(APPROVE_PURCHASES):
            return True
        return bool(team) and team == self.team and self.has_permission(APPROVE_TEAM_PURCHASES)

    def can_assign_role(self, target, role):
        """Managers assign any role; team leads assign non-lead roles within their team"""
        if self.has_permission(MANAGE_USERS):
            return True
        if not self.has_permission(ASSIGN_ROLES) or target.id == self.id:
            return False
        return (
            bool(self.team) and target.team == self.team
            and target.role in TEAM_ASSIGNABLE_ROLES and role in TEAM_ASSIGNABLE_ROLES
        )

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def issue_token(self):
        """Create a new bearer token; only its digest is stored"""
        token = secrets.token_urlsafe(32)
        self.api_token_hash = _digest(token)
        return token

    def revoke_token(self):
        self.api_token_hash = None

    @classmethod
    def find_by_token(cls, token):
        if not token:
            return None
        return cls.query.filter_by(api_token_hash=_digest(token)).first()

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'team': self.team,
            'role': self.role,
        }

    def __repr__(self):
        return f'<User {self.username}>'


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


@login_manager.request_loader
def load_user_from_request(request):
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer':
        return None
    user = User.find_by_token(token.strip())
    if user is None or not user.is_active:
        return None
    return user


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'error': 'Authentication required'}), 401
