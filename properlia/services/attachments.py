"""
Image and video collections of a property.

Uploads are checked as a batch: if any file is in the wrong collection the
whole call fails and every offending file is reported. Blobs are written only
after the batch passes.
"""
import logging
import mimetypes

from werkzeug.utils import secure_filename

from properlia import db
from properlia.models.attachment import Attachment, kind_error
from properlia.services.storage import get_storage, generate_key
from properlia.utils.errors import ValidationError, NotFound
from properlia.utils.helpers import parse_uuid

logger = logging.getLogger(__name__)


def uploaded_files(files):
    """Drop the empty parts browsers send for untouched file inputs"""
    return [f for f in (files or []) if f is not None and getattr(f, 'filename', None)]


def content_type_of(upload):
    content_type = getattr(upload, 'mimetype', None) or ''
    if not content_type:
        content_type = mimetypes.guess_type(upload.filename)[0] or 'application/octet-stream'
    return content_type


def classify(files, kind):
    """Messages for every file whose content type does not match kind"""
    errors = []
    for upload in uploaded_files(files):
        if not content_type_of(upload).startswith(f'{kind}/'):
            errors.append(kind_error(kind, upload.filename))
    return errors


def attach(prop, files, kind, storage=None):
    """
    Store files and append them to the property's collection.
    Never removes existing attachments. The caller commits.
    """
    files = uploaded_files(files)
    if not files:
        return []

    errors = classify(files, kind)
    if errors:
        raise ValidationError(errors)

    storage = storage or get_storage()
    start = len(prop.attachments)
    added = []
    for offset, upload in enumerate(files):
        key = generate_key()
        content_type = content_type_of(upload)
        size = storage.save(upload.stream, key, content_type)
        attachment = Attachment(
            kind=kind,
            key=key,
            filename=secure_filename(upload.filename) or 'file',
            content_type=content_type,
            byte_size=size,
            position=start + offset,
        )
        prop.attachments.append(attachment)
        added.append(attachment)
    return added


def purge_blobs(attachments, storage=None):
    """Best-effort removal of blobs whose rows never got committed"""
    storage = storage or get_storage()
    for attachment in attachments:
        try:
            storage.delete(attachment.key)
        except Exception as e:
            logger.error(f"Could not remove orphaned blob {attachment.key}: {e}")


def find_attachment(prop, attachment_id):
    """Look in images first, then videos"""
    target = parse_uuid(attachment_id)
    if target is None:
        return None
    for collection in (prop.images, prop.videos):
        for attachment in collection:
            if attachment.id == target:
                return attachment
    return None


def delete_attachment(prop, attachment_id, storage=None):
    """Remove one attachment row and its blob; NotFound if it is not there"""
    attachment = find_attachment(prop, attachment_id)
    if attachment is None:
        raise NotFound('Attachment not found')

    key = attachment.key
    prop.attachments.remove(attachment)
    db.session.commit()

    storage = storage or get_storage()
    try:
        storage.delete(key)
    except Exception as e:
        # The row is gone; a leftover blob is unreachable and only logged
        logger.error(f"Failed to delete blob {key}: {e}")
    return True

