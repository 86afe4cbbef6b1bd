import io
import os
import re

import pytest

from savour import storage
from savour.errors import StorageError


def _upload(client, name='dish.png', content=b'\x89PNG fake', path='menus'):
    data = {'file': (io.BytesIO(content), name)}
    if path is not None:
        data['path'] = path
    return client.post('/storage/upload', data=data, content_type='multipart/form-data')


def test_upload_returns_public_url_and_serves_file(super_client):
    resp = _upload(super_client)
    assert resp.status_code == 201
    url = resp.get_json()['url']
    assert re.fullmatch(r'/storage/savour/menus/[0-9a-f]{24}\.png', url)

    served = super_client.get(url)
    assert served.status_code == 200
    assert served.data == b'\x89PNG fake'


def test_public_url_needs_no_session(app, super_client):
    url = _upload(super_client, name='logo.JPG', path='company-logos').get_json()['url']
    assert url.endswith('.jpg')
    anonymous = app.test_client()
    assert anonymous.get(url).status_code == 200


def test_each_upload_gets_a_fresh_name(super_client):
    first = _upload(super_client).get_json()['url']
    second = _upload(super_client).get_json()['url']
    assert first != second


def test_upload_without_prefix_goes_to_bucket_root(app, super_client):
    url = _upload(super_client, path=None).get_json()['url']
    name = url.rsplit('/', 1)[1]
    assert url == f'/storage/savour/{name}'
    assert os.path.exists(os.path.join(app.config['STORAGE_ROOT'], 'savour', name))


def test_rejects_unsupported_extension(super_client):
    resp = _upload(super_client, name='notes.txt')
    assert resp.status_code == 400
    assert 'Unsupported file type' in resp.get_json()['error']


def test_rejects_unknown_prefix(super_client):
    resp = _upload(super_client, path='../secrets')
    assert resp.status_code == 400
    assert resp.get_json()['error'].startswith('Unknown upload path')


def test_rejects_missing_file(super_client):
    resp = super_client.post('/storage/upload', data={}, content_type='multipart/form-data')
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'No file selected.'


def test_rejects_more_than_one_file(super_client):
    data = {'file': [(io.BytesIO(b'a'), 'a.png'), (io.BytesIO(b'b'), 'b.png')]}
    resp = super_client.post('/storage/upload', data=data, content_type='multipart/form-data')
    assert resp.status_code == 400


def test_upload_requires_session(client):
    resp = _upload(client)
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/login')


def test_other_buckets_are_not_served(client):
    assert client.get('/storage/elsewhere/menus/x.png').status_code == 404


def test_random_filename_keeps_lowercased_extension(app):
    with app.app_context():
        name = storage.random_filename('Photo.JPEG')
        assert name.endswith('.jpeg')
        assert len(name) == len('.jpeg') + 24
        with pytest.raises(StorageError):
            storage.random_filename('no_extension')


@pytest.mark.parametrize('filename, ext', [('a.png', 'png'), ('a.b.GIF', 'gif'), ('plain', ''), ('', '')])
def test_file_extension(filename, ext):
    assert storage.file_extension(filename) == ext


def test_missing_object_is_a_real_404(client):
    resp = client.get('/storage/savour/menus/missing.png')
    assert resp.status_code == 404
    assert 'Location' not in resp.headers
