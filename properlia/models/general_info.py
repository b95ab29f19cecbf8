from properlia import db
from properlia.utils.helpers import valid_email
from properlia.utils.errors import ValidationError
from flask import current_app
from sqlalchemy import Uuid
from sqlalchemy.exc import IntegrityError
import uuid
import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

SINGLETON_GUARD = 0


class GeneralInfo(db.Model):
    """
    Contact details shown across the site (phone, WhatsApp, destination inbox
    for contact emails). Exactly one row may exist: singleton_guard is unique
    and always 0.
    """
    __tablename__ = 'general_infos'

    EDITABLE_FIELDS = ('phone', 'whatsapp', 'email_to')

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)

    phone = db.Column(db.String(50), nullable=False)
    whatsapp = db.Column(db.String(50), nullable=False)
    email_to = db.Column(db.String(255), nullable=False)

    singleton_guard = db.Column(db.Integer, nullable=False, unique=True, default=SINGLETON_GUARD)

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    @classmethod
    def instance(cls):
        """Get-or-create the single row"""
        info = cls.query.filter_by(singleton_guard=SINGLETON_GUARD).first()
        if info is not None:
            return info
        return cls._insert_or_fetch()

    @classmethod
    def _insert_or_fetch(cls):
        # Another process may insert between our read and this write; the
        # unique guard rejects the second row and we read the winner instead.
        info = cls(
            phone=current_app.config.get('DEFAULT_CONTACT_PHONE'),
            whatsapp=current_app.config.get('DEFAULT_CONTACT_WHATSAPP'),
            email_to=current_app.config.get('DEFAULT_CONTACT_EMAIL'),
        )
        db.session.add(info)
        try:
            db.session.commit()
            logger.info("GeneralInfo singleton created")
            return info
        except IntegrityError:
            db.session.rollback()
            logger.info("GeneralInfo singleton already created by a concurrent request")
            return cls.query.filter_by(singleton_guard=SINGLETON_GUARD).one()

    @classmethod
    def update_instance(cls, attributes):
        """Apply attributes to the single row, raising ValidationError on bad input"""
        info = cls.instance()
        for field in cls.EDITABLE_FIELDS:
            if field in attributes:
                value = attributes[field]
                setattr(info, field, value.strip() if isinstance(value, str) else value)

        errors = info.validate()
        if errors:
            db.session.rollback()
            raise ValidationError(errors)

        db.session.commit()
        return info

    def validate(self):
        # The guard is not user-editable
        self.singleton_guard = SINGLETON_GUARD

        errors = []
        if not self.phone:
            errors.append("Phone can't be blank")
        if not self.whatsapp:
            errors.append("Whatsapp can't be blank")
        if not self.email_to:
            errors.append("Email to can't be blank")
        elif not valid_email(self.email_to):
            errors.append('Email to is invalid')
        return errors

    def to_dict(self):
        return {
            'phone': self.phone,
            'whatsapp': self.whatsapp,
            'email_to': self.email_to
        }

    def __repr__(self):
        return f'<GeneralInfo {self.email_to}>'
