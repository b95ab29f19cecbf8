from properlia import db
from properlia.utils.helpers import valid_email
from sqlalchemy import Uuid
from werkzeug.security import generate_password_hash, check_password_hash
import uuid
from datetime import datetime, timezone

MIN_PASSWORD_LENGTH = 6


class User(db.Model):
    """Dashboard account. Tokens carry jti; rotating it revokes them."""
    __tablename__ = 'users'

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)

    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100))
    role = db.Column(db.String(50), nullable=False, default='admin')

    # Revocation identifier embedded in every issued token
    jti = db.Column(db.String(64), nullable=False, unique=True, default=lambda: str(uuid.uuid4()))

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not self.password_hash or password is None:
            return False
        return check_password_hash(self.password_hash, password)

    def revoke_tokens(self):
        self.jti = str(uuid.uuid4())

    def validate(self, password=None):
        errors = []
        if not self.email:
            errors.append("Email can't be blank")
        elif not valid_email(self.email):
            errors.append('Email is invalid')
        else:
            with db.session.no_autoflush:
                taken = User.query.filter(db.func.lower(User.email) == self.email.lower())
                if self.id is not None:
                    taken = taken.filter(User.id != self.id)
                if taken.first() is not None:
                    errors.append('Email has already been taken')
        if password is not None and len(password) < MIN_PASSWORD_LENGTH:
            errors.append(f'Password is too short (minimum is {MIN_PASSWORD_LENGTH} characters)')
        if not self.password_hash:
            errors.append("Password can't be blank")
        return errors

    def to_dict(self):
        return {
            'id': str(self.id),
            'email': self.email,
            'name': self.name,
            'role': self.role
        }

    def __repr__(self):
        return f'<User {self.email}>'
