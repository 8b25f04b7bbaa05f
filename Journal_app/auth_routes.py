# Journal_app/auth_routes.py

from flask import Blueprint, jsonify, current_app, g
from flask_login import login_user, logout_user, login_required, current_user
from werkzeug.security import generate_password_hash

from .extensions import login_manager, limiter
from .rate_limiting import RATE_LIMITS
from .schemas import RegisterRequest, LoginRequest, ProfileUpdate, PasswordChange
from .storage import get_storage
from .api_utils import json_body
from .errors import error_response

auth = Blueprint('auth', __name__, url_prefix='/api')


@login_manager.user_loader
def load_user(user_id):
    try:
        return get_storage().get_user(int(user_id))
    except (TypeError, ValueError):
        return None


@login_manager.unauthorized_handler
def unauthorized():
    return error_response('Not authenticated', 401)


@auth.route('/register', methods=['POST'])
@limiter.limit(lambda: RATE_LIMITS['register'])
def register():
    data = RegisterRequest.model_validate(json_body())
    storage = get_storage()

    if storage.get_user_by_username(data.username):
        return error_response('Username already exists', 400)

    user = storage.create_user(
        username=data.username,
        password_hash=generate_password_hash(data.password),
        name=data.name,
        email=data.email,
    )
    login_user(user)
    current_app.logger.info("User registered", extra={
        'user_id': user.id,
        'request_id': getattr(g, 'request_id', None)
    })
    return jsonify(user.to_dict()), 201


@auth.route('/login', methods=['POST'])
@limiter.limit(lambda: RATE_LIMITS['login'])
def login():
    data = LoginRequest.model_validate(json_body())
    user = get_storage().get_user_by_username(data.username)
    if not user or not user.check_password(data.password):
        current_app.logger.warning("Failed login attempt", extra={
            'username': data.username,
            'request_id': getattr(g, 'request_id', None)
        })
        return error_response('Invalid credentials', 401)

    login_user(user)
    return jsonify(user.to_dict()), 200


@auth.route('/logout', methods=['POST'])
def logout():
    logout_user()
    return jsonify({'message': 'Logged out successfully'}), 200


@auth.route('/user', methods=['GET'])
@login_required
def get_user():
    return jsonify(current_user.to_dict())


@auth.route('/user', methods=['PATCH', 'PUT'])
@login_required
def update_profile():
    data = ProfileUpdate.model_validate(json_body())
    fields = data.to_fields(partial=True)
    user = get_storage().update_user(current_user.id, fields)
    return jsonify(user.to_dict())


@auth.route('/user/password', methods=['POST'])
@login_required
def change_password():
    data = PasswordChange.model_validate(json_body())
    if not current_user.check_password(data.current_password):
        return error_response('Current password is incorrect', 400)

    get_storage().update_user(current_user.id, {
        'password_hash': generate_password_hash(data.new_password)
    })
    current_app.logger.info("Password changed", extra={
        'user_id': current_user.id,
        'request_id': getattr(g, 'request_id', None)
    })
    return jsonify({'message': 'Password changed'}), 200
