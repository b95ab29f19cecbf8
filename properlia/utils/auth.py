"""Authentication utilities and decorators"""
from datetime import datetime, timezone
from functools import wraps

import jwt
from flask import request, jsonify, current_app, g

from properlia import db
from properlia.models.user import User
from properlia.utils.helpers import parse_uuid


def issue_token(user):
    """Signed access token for user, bound to its current jti"""
    now = datetime.now(timezone.utc)
    claims = {
        'sub': str(user.id),
        'jti': user.jti,
        'iat': now,
        'exp': now + current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
    }
    return jwt.encode(
        claims,
        current_app.config['JWT_SECRET_KEY'],
        algorithm=current_app.config.get('JWT_ALGORITHM', 'HS256')
    )


def decode_token(token):
    """Verify and decode a token. Returns the claims or None."""
    try:
        return jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=[current_app.config.get('JWT_ALGORITHM', 'HS256')],
            options={'require': ['sub', 'jti', 'exp']}
        )
    except jwt.ExpiredSignatureError:
        current_app.logger.info("Token has expired")
    except jwt.InvalidTokenError as e:
        current_app.logger.warning(f"Invalid token: {e}")
    return None


def bearer_token():
    auth_header = request.headers.get('Authorization')
    if not auth_header:
        return None
    # Format: "Bearer <token>"
    scheme, _, token = auth_header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def get_current_user():
    """User owning the request's bearer token, or None"""
    token = bearer_token()
    if not token:
        return None

    claims = decode_token(token)
    if not claims:
        return None

    user_id = parse_uuid(claims.get('sub'))
    user = db.session.get(User, user_id) if user_id is not None else None
    if user is None:
        current_app.logger.warning(f"Token for unknown user {claims.get('sub')}")
        return None

    # Signing out rotates the jti, which revokes every older token
    if claims.get('jti') != user.jti:
        current_app.logger.info(f"Revoked token presented for user {user.id}")
        return None

    return user


def require_auth(f):
    """Decorator to require authentication"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = get_current_user()
        if not user:
            return jsonify({'error': 'Unauthorized - Invalid or missing token'}), 401

        # Attach user to request context
        g.current_user = user
        return f(*args, **kwargs)
    return decorated_function


def require_role(*roles):
    """Decorator to require specific role(s)"""
    def decorator(f):
        @wraps(f)
        @require_auth
        def decorated_function(*args, **kwargs):
            user_role = g.current_user.role

            if not user_role or user_role not in roles:
                return jsonify({
                    'error': f'Forbidden - Required role: {", ".join(roles)}'
                }), 403

            return f(*args, **kwargs)
        return decorated_function
    return decorator
