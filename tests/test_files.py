import io
from datetime import datetime, timezone

import pytest
from botocore.exceptions import ClientError

from portfolio import create_app
from portfolio.config import TestConfig
from portfolio.errors import FileTooLarge, InvalidFileType, NotFound, StorageError
from portfolio.services.files import LocalFileStore, S3FileStore

from conftest import make_config

MB = 1024 * 1024


def upload(client, content, filename, mimetype):
    return client.post(
        '/api/files/upload',
        data={'file': (io.BytesIO(content), filename, mimetype)},
        content_type='multipart/form-data',
    )


def test_upload_rejects_disallowed_type(auth_client):
    r = upload(auth_client, b'MZ\x90\x00', 'setup.exe', 'application/x-msdownload')
    assert r.status_code == 400
    assert r.get_json() == {'error': 'Invalid file type'}


def test_upload_rejects_large_file(auth_client):
    r = upload(auth_client, b'\x00' * (11 * MB), 'huge.png', 'image/png')
    assert r.status_code == 400
    assert r.get_json() == {'error': 'File size too large. Maximum 10MB allowed.'}


def test_upload_requires_file(auth_client):
    r = auth_client.post('/api/files/upload', data={}, content_type='multipart/form-data')
    assert r.status_code == 400
    assert r.get_json() == {'error': 'No file uploaded'}


def test_upload_list_serve_delete(auth_client, app):
    content = b'\x89PNG' + b'\x00' * (2 * MB)
    r = upload(auth_client, content, 'My Photo.PNG', 'image/png')
    assert r.status_code == 200
    stored = r.get_json()['file']
    assert stored['url'].startswith('/uploads/')
    assert stored['filename'].endswith('.png')
    assert stored['originalName'] == 'My Photo.PNG'
    assert stored['size'] == len(content)
    assert stored['mimetype'] == 'image/png'

    listed = auth_client.get('/api/files').get_json()
    assert [f['filename'] for f in listed] == [stored['filename']]
    assert listed[0]['url'] == stored['url']
    assert listed[0]['uploadedAt'].endswith('Z')

    # Served without a session
    r = app.test_client().get(stored['url'])
    assert r.status_code == 200
    assert r.data == content

    r = auth_client.delete(f'/api/files/{stored["filename"]}')
    assert r.status_code == 200
    assert r.get_json() == {'success': True, 'message': 'File deleted'}
    assert auth_client.get('/api/files').get_json() == []

    r = auth_client.delete(f'/api/files/{stored["filename"]}')
    assert r.status_code == 404
    assert r.get_json() == {'error': 'File not found'}


def test_uploads_are_uniquely_named(auth_client):
    first = upload(auth_client, b'a', 'cv.pdf', 'application/pdf').get_json()['file']
    second = upload(auth_client, b'b', 'cv.pdf', 'application/pdf').get_json()['file']
    assert first['filename'] != second['filename']
    assert len(auth_client.get('/api/files').get_json()) == 2


def test_local_store_refuses_paths_outside_folder(tmp_path):
    (tmp_path / 'secret.txt').write_text('x')
    store = LocalFileStore(str(tmp_path / 'uploads'), allowed_types=TestConfig.ALLOWED_UPLOAD_TYPES)
    with pytest.raises(NotFound):
        store.delete('../secret.txt')
    with pytest.raises(NotFound):
        store.delete('.gitkeep')
    assert (tmp_path / 'secret.txt').exists()


def test_local_store_validation(tmp_path):
    store = LocalFileStore(str(tmp_path), allowed_types=['image/png'], max_size=10)
    with pytest.raises(InvalidFileType):
        store.upload(b'x', 'text/html', 'page.html')
    with pytest.raises(FileTooLarge):
        store.upload(b'x' * 11, 'image/png', 'big.png')
    assert store.list() == []


class StubPaginator:

    def __init__(self, objects):
        self.objects = objects

    def paginate(self, Bucket, Prefix):
        keys = sorted(k for k in self.objects if k.startswith(Prefix))
        # Two pages to exercise pagination
        for chunk in (keys[:1], keys[1:]):
            yield {'Contents': [self.objects[k] for k in chunk]} if chunk else {}


class StubS3Client:
    """In-memory stand-in for the boto3 S3 client."""

    def __init__(self):
        self.objects = {}
        self.head_error = None

    def put_object(self, Bucket, Key, Body, ContentType):
        self.objects[Key] = {
            'Key': Key,
            'Size': len(Body),
            'ContentType': ContentType,
            'LastModified': datetime.now(timezone.utc),
        }

    def get_paginator(self, name):
        assert name == 'list_objects_v2'
        return StubPaginator(self.objects)

    def head_object(self, Bucket, Key):
        if self.head_error:
            raise ClientError({'Error': {'Code': self.head_error, 'Message': 'error'}}, 'HeadObject')
        if Key not in self.objects:
            raise ClientError({'Error': {'Code': '404', 'Message': 'Not Found'}}, 'HeadObject')
        return self.objects[Key]

    def delete_object(self, Bucket, Key):
        self.objects.pop(Key, None)


@pytest.fixture()
def s3_store():
    return S3FileStore(
        'my-bucket', prefix='portfolio', region='eu-west-1', client=StubS3Client(),
        allowed_types=TestConfig.ALLOWED_UPLOAD_TYPES,
    )


def test_s3_upload(s3_store):
    stored = s3_store.upload(b'%PDF-1.4', 'application/pdf', 'Resume.PDF')
    key = f'portfolio/{stored["filename"]}'
    assert stored['url'] == f'https://my-bucket.s3.eu-west-1.amazonaws.com/{key}'
    assert s3_store.client.objects[key]['ContentType'] == 'application/pdf'


def test_s3_upload_validates_before_writing(s3_store):
    with pytest.raises(InvalidFileType):
        s3_store.upload(b'x', 'application/x-sh', 'run.sh')
    assert s3_store.client.objects == {}


def test_s3_list_strips_prefix(s3_store):
    a = s3_store.upload(b'a', 'image/png', 'a.png')
    b = s3_store.upload(b'bb', 'image/jpeg', 'b.jpg')
    s3_store.client.objects['portfolio/nested/c.png'] = {
        'Key': 'portfolio/nested/c.png', 'Size': 1, 'LastModified': datetime.now(timezone.utc),
    }
    files = s3_store.list()
    assert {f['filename'] for f in files} == {a['filename'], b['filename']}
    assert all(f['url'].startswith('https://my-bucket.s3.eu-west-1.amazonaws.com/portfolio/') for f in files)


def test_s3_delete(s3_store):
    stored = s3_store.upload(b'a', 'image/png', 'a.png')
    s3_store.delete(stored['filename'])
    assert s3_store.client.objects == {}

    with pytest.raises(NotFound):
        s3_store.delete(stored['filename'])


def test_s3_delete_other_errors(s3_store):
    s3_store.client.head_error = 'AccessDenied'
    with pytest.raises(StorageError):
        s3_store.delete('anything.png')


def test_s3_public_url_override():
    store = S3FileStore('bucket', public_url='https://cdn.example.com/', client=StubS3Client(),
                        allowed_types=['image/png'])
    stored = store.upload(b'x', 'image/png', 'x.png')
    assert stored['url'] == f'https://cdn.example.com/portfolio/{stored["filename"]}'


def test_s3_store_behind_api(tmp_path, s3_store):
    app = create_app(make_config(tmp_path), file_store=s3_store)
    client = app.test_client()
    client.post('/api/auth/login', json={'username': 'admin', 'password': 'admin123'})

    r = upload(client, b'\x89PNG', 'logo.png', 'image/png')
    assert r.status_code == 200
    stored = r.get_json()['file']
    assert stored['url'].startswith('https://my-bucket.s3.eu-west-1.amazonaws.com/portfolio/')

    # Nothing is served locally when uploads live in the bucket
    assert client.get(f'/uploads/{stored["filename"]}').status_code == 404

    r = client.delete('/api/files/missing.png')
    assert r.status_code == 404
