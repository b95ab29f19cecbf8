"""
Blob storage for property attachments.

Two backends share one interface (save / delete / url_for):
- LocalStorage writes under UPLOAD_FOLDER and serves blobs through the
  public attachments blueprint using signed ids.
- S3Storage writes to a bucket and hands out presigned GET URLs.

Both produce URLs a browser can fetch without an Authorization header, since
the front-ends drop them straight into <img> and <video> tags.
"""
import os
import uuid
import logging

import boto3
from botocore.exceptions import ClientError
from flask import current_app, url_for
from itsdangerous import URLSafeSerializer, BadSignature

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'properlia_storage'
SIGNING_SALT = 'attachment'


def generate_key():
    return uuid.uuid4().hex


def _serializer():
    return URLSafeSerializer(current_app.config['SECRET_KEY'], salt=SIGNING_SALT)


def sign_attachment_id(attachment_id):
    return _serializer().dumps(str(attachment_id))


def unsign_attachment_id(signed_id):
    """Attachment id from a signed id, or None when tampered with"""
    try:
        return _serializer().loads(signed_id)
    except BadSignature:
        return None


class LocalStorage:
    """Disk storage under UPLOAD_FOLDER/<first two key chars>/<key>"""

    def __init__(self, root):
        self.root = os.path.abspath(root)

    def path_for(self, key):
        return os.path.join(self.root, key[:2], key)

    def save(self, stream, key, content_type):
        path = self.path_for(key)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'wb') as fh:
            data = stream.read()
            fh.write(data)
        return len(data)

    def delete(self, key):
        path = self.path_for(key)
        if os.path.exists(path):
            os.remove(path)
            return True
        logger.warning(f"Blob does not exist on disk: {key}")
        return False

    def exists(self, key):
        return os.path.exists(self.path_for(key))

    def url_for(self, attachment):
        return url_for(
            'attachments.serve_attachment',
            signed_id=sign_attachment_id(attachment.id),
            filename=attachment.filename,
            _external=True
        )


class S3Storage:
    """S3 bucket storage with presigned URLs"""

    def __init__(self, bucket, region, expires_in):
        self.bucket = bucket
        self.expires_in = int(expires_in)
        self.client = boto3.client('s3', region_name=region)

    def save(self, stream, key, content_type):
        data = stream.read()
        self.client.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)
        return len(data)

    def delete(self, key):
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            logger.error(f"Failed to delete blob {key} from S3: {e}")
            return False

    def exists(self, key):
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError:
            return False

    def url_for(self, attachment):
        return self.client.generate_presigned_url(
            'get_object',
            Params={
                'Bucket': self.bucket,
                'Key': attachment.key,
                'ResponseContentType': attachment.content_type,
                'ResponseContentDisposition': f'inline; filename="{attachment.filename}"'
            },
            ExpiresIn=self.expires_in
        )


def build_storage(app_config):
    backend = (app_config.get('STORAGE_BACKEND') or 'local').lower()
    if backend == 's3':
        if not app_config.get('S3_BUCKET'):
            raise RuntimeError('STORAGE_BACKEND is s3 but S3_BUCKET is not configured')
        expires = app_config.get('ATTACHMENT_URL_EXPIRES')
        seconds = expires.total_seconds() if hasattr(expires, 'total_seconds') else expires
        return S3Storage(app_config['S3_BUCKET'], app_config.get('AWS_REGION'), seconds)
    if backend == 'local':
        return LocalStorage(app_config.get('UPLOAD_FOLDER', 'uploads'))
    raise RuntimeError(f'Unknown STORAGE_BACKEND: {backend}')


def get_storage():
    """Storage backend for the current app, built on first use"""
    storage = current_app.extensions.get(EXTENSION_KEY)
    if storage is None:
        storage = build_storage(current_app.config)
        current_app.extensions[EXTENSION_KEY] = storage
    return storage
