from properlia import db
from properlia.models.reference import ReferenceMixin


class ListingType(ReferenceMixin, db.Model):
    """Sale, rent..."""
    __tablename__ = 'listing_types'

    label = 'Listing type'
    foreign_key = 'listing_type_id'

    properties = db.relationship('Property', back_populates='listing_type', lazy='dynamic', passive_deletes='all')
