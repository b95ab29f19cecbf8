"""
Create/update/delete for the lookup tables (property types, statuses,
listing types).

Deletes are guarded: count_dependents() is checked first and delete_reference()
refuses while any property still points at the record. The foreign key is the
last line: if a property sneaks in between count and delete, the commit fails
and is reported the same way.
"""
import logging

from sqlalchemy.exc import IntegrityError

from properlia import db
from properlia.models.property import Property
from properlia.utils.errors import ValidationError, NotFound, Conflict
from properlia.utils.helpers import parse_uuid
from properlia.utils.pagination import paginate

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('name', 'es_name')


def _fk_column(model):
    return getattr(Property, model.foreign_key)


def get_reference(model, record_id):
    pk = parse_uuid(record_id)
    record = db.session.get(model, pk) if pk is not None else None
    if record is None:
        raise NotFound(f'{model.label} not found')
    return record


def list_references(model, page, items):
    query = model.query.order_by(model.created_at.asc(), model.name.asc())
    return paginate(query, page, items)


def count_dependents(model, record_id):
    """Number of properties referencing the record"""
    return Property.query.filter(_fk_column(model) == record_id).count()


def _save(record):
    errors = record.validate()
    if errors:
        db.session.rollback()
        raise ValidationError(errors)
    try:
        db.session.commit()
    except IntegrityError:
        # Unique index lost a race with a concurrent insert
        db.session.rollback()
        raise ValidationError(['Name has already been taken'])
    return record


def create_reference(model, data):
    record = model(**{field: data.get(field) for field in EDITABLE_FIELDS})
    db.session.add(record)
    return _save(record)


def update_reference(model, record_id, data):
    record = get_reference(model, record_id)
    for field in EDITABLE_FIELDS:
        if field in data:
            setattr(record, field, data[field])
    return _save(record)


def _conflict(model, count):
    return Conflict(
        f'Cannot delete {model.label.lower()} because it is assigned to one or more properties',
        count
    )


def delete_reference(model, record_id):
    record = get_reference(model, record_id)
    pk = record.id

    count = count_dependents(model, pk)
    if count:
        raise _conflict(model, count)

    db.session.delete(record)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        count = count_dependents(model, pk)
        logger.warning(f"{model.label} {pk} gained {count} dependents during delete")
        raise _conflict(model, count)
    logger.info(f"{model.label} deleted: {pk}")
