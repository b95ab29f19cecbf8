from properlia import db
from sqlalchemy import Uuid
import uuid
from datetime import datetime, timezone

IMAGE = 'image'
VIDEO = 'video'
KINDS = (IMAGE, VIDEO)


def kind_error(kind, filename):
    """Validation message for a file in the wrong collection"""
    if kind == IMAGE:
        return f'Images {filename} must be an image'
    return f'Videos {filename} must be a video'


class Attachment(db.Model):
    """An image or video blob owned by exactly one property"""
    __tablename__ = 'attachments'

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    property_id = db.Column(Uuid, db.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False, index=True)

    kind = db.Column(db.String(10), nullable=False)  # 'image' | 'video'
    key = db.Column(db.String(255), nullable=False, unique=True)  # storage key
    filename = db.Column(db.String(255), nullable=False)
    content_type = db.Column(db.String(255), nullable=False)
    byte_size = db.Column(db.BigInteger, nullable=False, default=0)
    position = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    owner = db.relationship('Property', back_populates='attachments')

    def matches_kind(self):
        return (self.content_type or '').startswith(f'{self.kind}/')

    @property
    def url(self):
        from properlia.services.storage import get_storage
        return get_storage().url_for(self)

    def to_dict(self):
        return {
            'id': str(self.id),
            'url': self.url,
            'filename': self.filename,
            'content_type': self.content_type
        }

    def __repr__(self):
        return f'<Attachment {self.kind} {self.filename}>'
