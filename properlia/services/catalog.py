"""
Property catalog: listing queries and create/update of properties.

Updates are partial (only supplied keys change) and media is always appended;
removing media goes through services.attachments.delete_attachment.
"""
import logging

from sqlalchemy import false, func
from sqlalchemy.orm import selectinload

from properlia import db
from properlia.models.attachment import IMAGE, VIDEO
from properlia.models.property import Property
from properlia.models.property_type import PropertyType
from properlia.models.status import Status
from properlia.models.listing_type import ListingType
from properlia.services import attachments as attachment_store
from properlia.utils.errors import ValidationError, NotFound
from properlia.utils.helpers import parse_bool, parse_decimal, parse_int, parse_uuid
from properlia.utils.pagination import paginate

logger = logging.getLogger(__name__)

REFERENCE_MODELS = {
    'property_type_id': PropertyType,
    'status_id': Status,
    'listing_type_id': ListingType,
}


def _label(field):
    return field.replace('_', ' ').capitalize()


def _eager(query):
    return query.options(
        selectinload(Property.property_type),
        selectinload(Property.status),
        selectinload(Property.listing_type),
        selectinload(Property.attachments),
    )


def get_property(property_id):
    prop = None
    pk = parse_uuid(property_id)
    if pk is not None:
        prop = _eager(Property.query).filter(Property.id == pk).first()
    if prop is None:
        raise NotFound('Property not found')
    return prop


def list_properties(filters, page, items):
    """
    One page of properties, newest first.

    filters: featured, status_id (wins over status), status (name),
    property_type_id, listing_type_id. Blank values are ignored; malformed
    ids match nothing.
    """
    query = _eager(Property.query)

    featured = parse_bool(filters.get('featured'))
    if featured is not None:
        query = query.filter(Property.featured == featured)

    if filters.get('status_id'):
        query = _filter_by_id(query, Property.status_id, filters['status_id'])
    elif filters.get('status'):
        query = query.join(Property.status).filter(
            func.lower(Status.name) == str(filters['status']).strip().lower()
        )

    for param, column in (('property_type_id', Property.property_type_id),
                          ('listing_type_id', Property.listing_type_id)):
        if filters.get(param):
            query = _filter_by_id(query, column, filters[param])

    query = query.order_by(Property.created_at.desc(), Property.id.desc())
    return paginate(query, page, items)


def _filter_by_id(query, column, raw):
    value = parse_uuid(raw)
    if value is None:
        return query.filter(false())
    return query.filter(column == value)


def assign_fields(prop, data):
    """
    Copy permitted keys from data onto prop, casting request strings.
    Unknown keys are ignored. Returns cast errors.
    """
    errors = []
    for field, value in data.items():
        kind = Property.FIELD_TYPES.get(field)
        if kind is None:
            continue

        if kind == 'uuid':
            model = REFERENCE_MODELS[field]
            pk = parse_uuid(value)
            record = db.session.get(model, pk) if pk is not None else None
            if record is None:
                errors.append(f'{model.label} must exist')
                continue
            # Assign the object so the loaded relationship never goes stale
            setattr(prop, field[:-3], record)
            continue

        try:
            if kind == 'bool':
                cast = parse_bool(value)
                if cast is None:
                    errors.append(f'{_label(field)} must be true or false')
                    continue
            elif kind == 'int':
                cast = parse_int(value)
            elif kind == 'decimal':
                cast = parse_decimal(value)
            else:
                cast = None if value is None else str(value)
        except ValueError:
            errors.append(f'{_label(field)} is not a number')
            continue
        setattr(prop, field, cast)
    return errors


def _check(prop, images, videos, cast_errors):
    errors = list(cast_errors)
    errors += prop.validate()
    errors += attachment_store.classify(images, IMAGE)
    errors += attachment_store.classify(videos, VIDEO)
    # Cast and validation can report the same missing reference
    return list(dict.fromkeys(errors))


def _store_media_and_commit(prop, images, videos):
    added = []
    try:
        added += attachment_store.attach(prop, images, IMAGE)
        added += attachment_store.attach(prop, videos, VIDEO)
        db.session.commit()
    except Exception:
        db.session.rollback()
        attachment_store.purge_blobs(added)
        raise


def create_property(data, images=None, videos=None):
    """Validate everything first; nothing is persisted when anything fails"""
    prop = Property()
    errors = _check(prop, images, videos, assign_fields(prop, data))
    if errors:
        # Drops the backref appends made on the referenced lookups
        db.session.rollback()
        raise ValidationError(errors)

    db.session.add(prop)
    _store_media_and_commit(prop, images, videos)
    logger.info(f"Property created: {prop.id}")
    return prop


def update_property(property_id, data, images=None, videos=None):
    """Partial update; new media is appended to the existing collections"""
    prop = get_property(property_id)
    errors = _check(prop, images, videos, assign_fields(prop, data))
    if errors:
        db.session.rollback()
        raise ValidationError(errors)

    _store_media_and_commit(prop, images, videos)
    return prop
