from properlia import db
from properlia.models.reference import ReferenceMixin
from properlia.utils.helpers import normalize_name
from sqlalchemy.orm import validates


class PropertyType(ReferenceMixin, db.Model):
    """House, land, warehouse... Names are stored lowercased and trimmed."""
    __tablename__ = 'property_types'

    label = 'Property type'
    foreign_key = 'property_type_id'
    case_insensitive = True

    properties = db.relationship('Property', back_populates='property_type', lazy='dynamic', passive_deletes='all')

    @validates('name', 'es_name')
    def _normalize(self, key, value):
        return normalize_name(value)
