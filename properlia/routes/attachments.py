from flask import Blueprint, redirect, send_file
from properlia import db
from properlia.models.attachment import Attachment
from properlia.services.storage import get_storage, unsign_attachment_id, LocalStorage
from properlia.utils.errors import NotFound
from properlia.utils.helpers import parse_uuid

bp = Blueprint('attachments', __name__)


@bp.route('/<signed_id>/<path:filename>', methods=['GET'])
def serve_attachment(signed_id, filename):
    """
    Public URL of an image or video
    ---
    tags:
      - Attachments
    parameters:
      - in: path
        name: signed_id
        required: true
        schema:
          type: string
      - in: path
        name: filename
        required: true
        schema:
          type: string
    responses:
      200:
        description: File contents (local storage)
      302:
        description: Redirect to a presigned URL (S3 storage)
      404:
        description: Unknown or tampered id, or missing file
    """
    attachment_id = parse_uuid(unsign_attachment_id(signed_id))
    attachment = db.session.get(Attachment, attachment_id) if attachment_id is not None else None
    if attachment is None:
        raise NotFound('Attachment not found')

    storage = get_storage()
    if isinstance(storage, LocalStorage):
        if not storage.exists(attachment.key):
            raise NotFound('Attachment not found')
        return send_file(
            storage.path_for(attachment.key),
            mimetype=attachment.content_type,
            download_name=attachment.filename,
            max_age=3600
        )
    return redirect(storage.url_for(attachment))
