from properlia import db
from properlia.models.attachment import Attachment, IMAGE, VIDEO, kind_error
from sqlalchemy import Uuid, CheckConstraint
from decimal import Decimal
import uuid
from datetime import datetime, timezone


def _too_large(value, limit):
    """True when value, rounded to the column's two decimals, does not fit under limit"""
    if value >= limit:
        return True
    return isinstance(value, Decimal) and value.quantize(Decimal('0.01')) >= limit


class Property(db.Model):
    """A listed real-estate property"""
    __tablename__ = 'properties'
    __table_args__ = (
        CheckConstraint('price >= 0', name='properties_price_non_negative'),
        CheckConstraint('rooms >= 0', name='properties_rooms_non_negative'),
        CheckConstraint('bathrooms >= 0', name='properties_bathrooms_non_negative'),
        CheckConstraint('half_bathrooms >= 0', name='properties_half_bathrooms_non_negative'),
        CheckConstraint('parking_spaces >= 0', name='properties_parking_spaces_non_negative'),
        CheckConstraint('land_area >= 0', name='properties_land_area_non_negative'),
        CheckConstraint('built_area >= 0', name='properties_built_area_non_negative'),
    )

    # Writable attributes and how request values are cast for them
    FIELD_TYPES = {
        'featured': 'bool',
        'title': 'str',
        'description': 'str',
        'land_area': 'decimal',
        'built_area': 'decimal',
        'rooms': 'int',
        'bathrooms': 'int',
        'half_bathrooms': 'int',
        'parking_spaces': 'int',
        'price': 'decimal',
        'address': 'str',
        'city': 'str',
        'state': 'str',
        'zip_code': 'str',
        'neighborhood': 'str',
        'coordinates': 'str',
        'property_type_id': 'uuid',
        'status_id': 'uuid',
        'listing_type_id': 'uuid',
    }
    COUNT_FIELDS = ('rooms', 'bathrooms', 'half_bathrooms', 'parking_spaces')
    AREA_FIELDS = ('land_area', 'built_area')
    DEFAULTS = {'featured': False, 'rooms': 0, 'bathrooms': 0, 'half_bathrooms': 0, 'parking_spaces': 0}

    # Largest values the columns can store: Integer, Numeric(12, 2), Numeric(10, 2)
    MAX_COUNT = 2 ** 31 - 1
    MAX_PRICE = Decimal('10000000000')
    MAX_AREA = Decimal('100000000')

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Highlighted on the public home page
    featured = db.Column(db.Boolean, nullable=False, default=False, index=True)

    # Basic information
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)

    # Areas (square meters)
    land_area = db.Column(db.Numeric(10, 2))
    built_area = db.Column(db.Numeric(10, 2))

    # Physical attributes
    rooms = db.Column(db.Integer, nullable=False, default=0)
    bathrooms = db.Column(db.Integer, nullable=False, default=0)
    half_bathrooms = db.Column(db.Integer, nullable=False, default=0)
    parking_spaces = db.Column(db.Integer, nullable=False, default=0)

    price = db.Column(db.Numeric(12, 2), nullable=False, index=True)

    # Location
    address = db.Column(db.String(255), nullable=False)
    city = db.Column(db.String(100), index=True)
    state = db.Column(db.String(100), index=True)
    zip_code = db.Column(db.String(20))
    neighborhood = db.Column(db.String(100), index=True)
    coordinates = db.Column(db.String(100))  # e.g. "19.0436,-98.1981"

    # Lookups
    property_type_id = db.Column(Uuid, db.ForeignKey('property_types.id'), nullable=False, index=True)
    status_id = db.Column(Uuid, db.ForeignKey('statuses.id'), nullable=False, index=True)
    listing_type_id = db.Column(Uuid, db.ForeignKey('listing_types.id'), nullable=False, index=True)

    # Timestamps
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    property_type = db.relationship('PropertyType', back_populates='properties')
    status = db.relationship('Status', back_populates='properties')
    listing_type = db.relationship('ListingType', back_populates='properties')

    attachments = db.relationship(
        'Attachment', back_populates='owner', cascade='all, delete-orphan',
        order_by=(Attachment.position, Attachment.created_at)
    )

    def __init__(self, **kwargs):
        # Column defaults only apply at flush; validation runs before that
        for field, value in self.DEFAULTS.items():
            kwargs.setdefault(field, value)
        super().__init__(**kwargs)

    @property
    def images(self):
        return [a for a in self.attachments if a.kind == IMAGE]

    @property
    def videos(self):
        return [a for a in self.attachments if a.kind == VIDEO]

    def validate(self):
        """Return every violation, not just the first"""
        from properlia.models.property_type import PropertyType
        from properlia.models.status import Status
        from properlia.models.listing_type import ListingType

        errors = []
        for field, title in (('title', 'Title'), ('address', 'Address')):
            value = getattr(self, field)
            if value is None or not str(value).strip():
                errors.append(f"{title} can't be blank")

        if self.price is None:
            errors.append("Price can't be blank")
        elif self.price < 0:
            errors.append('Price must be greater than or equal to 0')
        elif _too_large(self.price, self.MAX_PRICE):
            errors.append('Price is too large')

        for field in self.COUNT_FIELDS:
            value = getattr(self, field)
            label = field.replace('_', ' ').capitalize()
            if value is None:
                errors.append(f"{label} can't be blank")
            elif value < 0:
                errors.append(f'{label} must be greater than or equal to 0')
            elif value > self.MAX_COUNT:
                errors.append(f'{label} is too large')

        for field in self.AREA_FIELDS:
            value = getattr(self, field)
            if value is None:
                continue
            label = field.replace('_', ' ').capitalize()
            if value < 0:
                errors.append(f'{label} must be greater than or equal to 0')
            elif _too_large(value, self.MAX_AREA):
                errors.append(f'{label} is too large')

        with db.session.no_autoflush:
            for model, relation in ((PropertyType, 'property_type'),
                                    (Status, 'status'),
                                    (ListingType, 'listing_type')):
                if getattr(self, relation) is not None:
                    continue
                ref_id = getattr(self, f'{relation}_id')
                if ref_id is None or db.session.get(model, ref_id) is None:
                    errors.append(f'{model.label} must exist')

        for attachment in self.attachments:
            if not attachment.matches_kind():
                errors.append(kind_error(attachment.kind, attachment.filename))

        return errors

    def to_dict(self):
        """JSON shape consumed by the public site and the dashboard"""
        data = {}
        for column in self.__table__.columns:
            if column.name in ('created_at', 'updated_at'):
                continue
            value = getattr(self, column.name)
            if isinstance(value, Decimal):
                value = float(value)
            elif isinstance(value, uuid.UUID):
                value = str(value)
            data[column.name] = value

        data['property_type'] = self.property_type.to_summary() if self.property_type else None
        data['status'] = self.status.to_summary() if self.status else None
        data['listing_type'] = self.listing_type.to_summary() if self.listing_type else None
        data['images'] = [image.to_dict() for image in self.images]
        data['videos'] = [video.to_dict() for video in self.videos]
        return data

    def __repr__(self):
        return f'<Property {self.title}>'
