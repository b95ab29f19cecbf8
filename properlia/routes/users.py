from flask import Blueprint, jsonify, current_app, g
from properlia import db
from properlia.models.user import User
from properlia.utils.auth import require_auth, issue_token
from properlia.utils.errors import ValidationError, AuthError
from properlia.utils.params import require_params

bp = Blueprint('users', __name__)


@bp.route('', methods=['POST'])
def sign_up():
    """
    Register a dashboard account
    ---
    tags:
      - Users
    requestBody:
      required: true
      content:
        application/json:
          schema:
            type: object
            properties:
              user:
                type: object
                required:
                  - email
                  - password
                properties:
                  email:
                    type: string
                    format: email
                  password:
                    type: string
                  password_confirmation:
                    type: string
                  name:
                    type: string
    responses:
      201:
        description: Account created
      400:
        description: user parameter missing
      422:
        description: Validation errors
    """
    data = require_params('user')
    email = (data.get('email') or '').strip()
    password = data.get('password') or ''

    # Role is never taken from the request; accounts get the column default
    user = User(email=email, name=data.get('name'))
    if password:
        user.set_password(password)

    errors = user.validate(password=password or None)
    confirmation = data.get('password_confirmation')
    if confirmation is not None and confirmation != password:
        errors.append("Password confirmation doesn't match Password")
    if errors:
        raise ValidationError(errors)

    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"User registered: {user.email}")
    return jsonify(user.to_dict()), 201


@bp.route('/sign_in', methods=['POST'])
def sign_in():
    """
    Sign in; the access token is returned in the Authorization header
    ---
    tags:
      - Users
    requestBody:
      required: true
      content:
        application/json:
          schema:
            type: object
            properties:
              user:
                type: object
                properties:
                  email:
                    type: string
                  password:
                    type: string
    responses:
      200:
        description: Signed in user
        headers:
          Authorization:
            description: Bearer token
            schema:
              type: string
      401:
        description: Invalid email or password
    """
    data = require_params('user')
    email = (data.get('email') or '').strip()
    user = User.query.filter(db.func.lower(User.email) == email.lower()).first() if email else None

    if user is None or not user.check_password(data.get('password')):
        current_app.logger.info(f"Failed sign in for {email}")
        raise AuthError('Invalid email or password')

    response = jsonify(user.to_dict())
    response.headers['Authorization'] = f'Bearer {issue_token(user)}'
    return response, 200


@bp.route('/sign_out', methods=['DELETE'])
@require_auth
def sign_out():
    """
    Sign out; every token issued so far stops working
    ---
    tags:
      - Users
    security:
      - Bearer: []
    responses:
      200:
        description: Signed out
      401:
        description: Unauthorized
    """
    g.current_user.revoke_tokens()
    db.session.commit()
    return jsonify({'message': 'Sesión cerrada'}), 200


@bp.route('/current', methods=['GET'])
@require_auth
def current():
    """
    The signed-in user
    ---
    tags:
      - Users
    security:
      - Bearer: []
    responses:
      200:
        description: Current user
      401:
        description: Unauthorized
    """
    return jsonify(g.current_user.to_dict()), 200
