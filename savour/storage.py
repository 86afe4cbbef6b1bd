"""Image storage: one bucket directory on disk, files served by public URL."""
import logging
import os
import secrets

from flask import current_app, url_for
from werkzeug.utils import safe_join

from savour.errors import StorageError

logger = logging.getLogger(__name__)


def bucket_root(bucket=None):
    bucket = bucket or current_app.config['STORAGE_BUCKET']
    return os.path.join(current_app.config['STORAGE_ROOT'], bucket)


def file_extension(filename):
    if not filename or '.' not in filename:
        return ''
    return filename.rsplit('.', 1)[1].lower()


def random_filename(original):
    ext = file_extension(original)
    if ext not in current_app.config['ALLOWED_IMAGE_EXTENSIONS']:
        raise StorageError(f'Unsupported file type: {original}')
    return f'{secrets.token_hex(12)}.{ext}'


def object_path(filename, prefix=''):
    if prefix and prefix not in current_app.config['STORAGE_PREFIXES']:
        raise StorageError(f'Unknown upload path: {prefix}')
    return f'{prefix}/{filename}' if prefix else filename


def public_url(path, bucket=None):
    bucket = bucket or current_app.config['STORAGE_BUCKET']
    return url_for('storage.public_file', bucket=bucket, path=path)


def upload(file_storage, prefix=''):
    """Store an uploaded file under a random name and return its public URL.

    Nothing is ever deleted: replacing or clearing an image leaves the old
    object in the bucket.
    """
    if file_storage is None or not file_storage.filename:
        raise StorageError('No file selected.')

    path = object_path(random_filename(file_storage.filename), prefix)
    root = bucket_root()
    target = safe_join(root, path)
    if target is None:
        raise StorageError('Invalid upload path.')

    try:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        file_storage.save(target)
    except OSError as e:
        logger.exception("Upload of %s failed", file_storage.filename)
        raise StorageError(f'Error uploading image: {e.strerror or e}')

    logger.info("Stored %s as %s", file_storage.filename, path)
    return public_url(path)
