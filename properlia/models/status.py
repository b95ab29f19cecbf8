from properlia import db
from properlia.models.reference import ReferenceMixin


class Status(ReferenceMixin, db.Model):
    __tablename__ = 'statuses'

    label = 'Status'
    foreign_key = 'status_id'

    properties = db.relationship('Property', back_populates='status', lazy='dynamic', passive_deletes='all')
