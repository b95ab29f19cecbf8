from properlia import db
from sqlalchemy import Uuid, func
import uuid
from datetime import datetime, timezone


class ReferenceMixin:
    """
    Shared shape of the lookup tables a property points at
    (property types, statuses, listing types).
    """
    # Label used in messages, e.g. 'Property type'
    label = 'Record'
    foreign_key = None  # column on properties pointing here
    case_insensitive = False

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(100), nullable=False, unique=True)
    es_name = db.Column(db.String(100), nullable=False, unique=True)

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    def _taken(self, column, value):
        cls = type(self)
        if self.case_insensitive:
            query = cls.query.filter(func.lower(column) == value.lower())
        else:
            query = cls.query.filter(column == value)
        if self.id is not None:
            query = query.filter(cls.id != self.id)
        # Pending edits must not be flushed while we look for duplicates
        with db.session.no_autoflush:
            return db.session.query(query.exists()).scalar()

    def validate(self):
        errors = []
        cls = type(self)
        for field, column, title in (('name', cls.name, 'Name'), ('es_name', cls.es_name, 'Es name')):
            value = getattr(self, field)
            if value is None or not str(value).strip():
                errors.append(f"{title} can't be blank")
            elif self._taken(column, value):
                errors.append(f'{title} has already been taken')
        return errors

    def to_dict(self):
        return {
            'id': str(self.id) if self.id else None,
            'name': self.name,
            'es_name': self.es_name,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    def to_summary(self):
        """Nested form embedded in a property"""
        return {'id': str(self.id), 'name': self.name, 'es_name': self.es_name}

    def __repr__(self):
        return f'<{type(self).__name__} {self.name}>'
