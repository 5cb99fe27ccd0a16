"""
File Storage Services

Uploaded images and documents live either in a local folder served by the
app or in an S3 bucket under a fixed key prefix. Both stores validate the
declared MIME type and the size before anything is written, and name every
upload with a fresh UUID that keeps the original extension.
"""

import logging
import os
import uuid
from datetime import datetime, timezone

from botocore.exceptions import ClientError
from werkzeug.utils import secure_filename

from portfolio.errors import FileTooLarge, InvalidFileType, NotFound, StorageError
from portfolio.schema import format_timestamp

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 10 * 1024 * 1024


def _is_plain_name(filename):
    """True for a bare file name that cannot escape the store."""
    return bool(filename) and secure_filename(filename) == filename and filename != '.gitkeep'


class FileStore:
    """Common validation and naming for upload backends."""

    backend = None

    def __init__(self, allowed_types, max_size=DEFAULT_MAX_SIZE):
        self.allowed_types = frozenset(allowed_types)
        self.max_size = max_size

    def validate(self, content, mimetype):
        if mimetype not in self.allowed_types:
            raise InvalidFileType()
        if len(content) > self.max_size:
            raise FileTooLarge(f'File size too large. Maximum {self.max_size // (1024 * 1024)}MB allowed.')

    @staticmethod
    def unique_name(original_filename):
        """UUID name keeping the (sanitised, lower-cased) original extension."""
        ext = os.path.splitext(secure_filename(original_filename or ''))[1].lower()
        return f'{uuid.uuid4().hex}{ext}'

    def upload(self, content, mimetype, original_filename):
        """Validate and persist ``content``; return the stored file's description."""
        self.validate(content, mimetype)
        filename = self.unique_name(original_filename)
        url = self._put(filename, content, mimetype)
        logger.info('Stored upload %s as %s (%d bytes)', original_filename, filename, len(content))
        return {
            'filename': filename,
            'originalName': original_filename,
            'url': url,
            'size': len(content),
            'mimetype': mimetype,
        }

    def list(self):
        raise NotImplementedError

    def delete(self, filename):
        raise NotImplementedError

    def _put(self, filename, content, mimetype):
        raise NotImplementedError


class LocalFileStore(FileStore):
    """Uploads kept in a directory and served under ``url_prefix``."""

    backend = 'local'

    def __init__(self, folder, url_prefix='/uploads/', **kwargs):
        super().__init__(**kwargs)
        self.folder = folder
        self.url_prefix = url_prefix if url_prefix.endswith('/') else url_prefix + '/'

    def url_for(self, filename):
        return f'{self.url_prefix}{filename}'

    def _put(self, filename, content, mimetype):
        os.makedirs(self.folder, exist_ok=True)
        path = os.path.join(self.folder, filename)
        try:
            with open(path, 'wb') as f:
                f.write(content)
        except OSError as e:
            # Best effort: do not leave a truncated file behind
            if os.path.exists(path):
                os.remove(path)
            raise StorageError(f'Could not write upload {path}: {e}') from e
        return self.url_for(filename)

    def list(self):
        if not os.path.isdir(self.folder):
            return []

        files = []
        for entry in os.scandir(self.folder):
            if not entry.is_file() or entry.name == '.gitkeep':
                continue
            stats = entry.stat()
            files.append({
                'filename': entry.name,
                'url': self.url_for(entry.name),
                'size': stats.st_size,
                'uploadedAt': format_timestamp(datetime.fromtimestamp(stats.st_mtime, timezone.utc)),
            })
        files.sort(key=lambda f: f['uploadedAt'], reverse=True)
        return files

    def delete(self, filename):
        if not _is_plain_name(filename):
            raise NotFound('File not found')
        path = os.path.join(self.folder, filename)
        if not os.path.isfile(path):
            raise NotFound('File not found')
        os.remove(path)
        logger.info('Deleted upload %s', filename)


class S3FileStore(FileStore):
    """Uploads kept in an S3 bucket under ``prefix``."""

    backend = 's3'

    def __init__(self, bucket, prefix='portfolio/', public_url=None, region='us-east-1',
                 client=None, **kwargs):
        super().__init__(**kwargs)
        self.bucket = bucket
        self.prefix = prefix if prefix.endswith('/') else prefix + '/'
        self.public_url = (public_url or f'https://{bucket}.s3.{region}.amazonaws.com').rstrip('/')
        if client is None:
            import boto3
            client = boto3.client('s3', region_name=region)
        self.client = client

    def _key(self, filename):
        return f'{self.prefix}{filename}'

    def url_for(self, filename):
        return f'{self.public_url}/{self._key(filename)}'

    def _put(self, filename, content, mimetype):
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=self._key(filename),
                Body=content,
                ContentType=mimetype,
            )
        except ClientError as e:
            raise StorageError(f'Error uploading to S3: {e}') from e
        return self.url_for(filename)

    def list(self):
        files = []
        paginator = self.client.get_paginator('list_objects_v2')
        try:
            for page in paginator.paginate(Bucket=self.bucket, Prefix=self.prefix):
                for obj in page.get('Contents', []):
                    filename = obj['Key'][len(self.prefix):]
                    if not filename or '/' in filename:
                        continue
                    files.append({
                        'filename': filename,
                        'url': self.url_for(filename),
                        'size': obj['Size'],
                        'uploadedAt': format_timestamp(obj['LastModified']),
                    })
        except ClientError as e:
            raise StorageError(f'Error listing S3 bucket {self.bucket}: {e}') from e
        files.sort(key=lambda f: f['uploadedAt'], reverse=True)
        return files

    def delete(self, filename):
        if not _is_plain_name(filename):
            raise NotFound('File not found')
        key = self._key(filename)
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code')
            if code in ('404', 'NoSuchKey', 'NotFound'):
                raise NotFound('File not found') from e
            raise StorageError(f'Error checking S3 object {key}: {e}') from e
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            raise StorageError(f'Error deleting S3 object {key}: {e}') from e
        logger.info('Deleted upload %s from bucket %s', filename, self.bucket)


def create_file_store(config):
    """Build the file store named by the app configuration."""
    backend = config.get('FILE_BACKEND', 'local')
    common = dict(
        allowed_types=config['ALLOWED_UPLOAD_TYPES'],
        max_size=config.get('MAX_UPLOAD_SIZE', DEFAULT_MAX_SIZE),
    )
    if backend == 'local':
        return LocalFileStore(config['UPLOAD_FOLDER'], config.get('UPLOAD_URL_PREFIX', '/uploads/'), **common)
    if backend == 's3':
        return S3FileStore(
            config['S3_BUCKET'],
            prefix=config.get('S3_PREFIX', 'portfolio/'),
            public_url=config.get('S3_PUBLIC_URL'),
            region=config.get('S3_REGION', 'us-east-1'),
            **common,
        )
    raise ValueError(f'Unknown FILE_BACKEND: {backend!r}')
