"""
Unit Tests for project file endpoints and uploads
"""
import pytest
from httpx import AsyncClient

from apkstudio.core.config import settings


class TestProjectFiles:
    """JSON file endpoints"""

    async def test_create_and_list_files(self, client: AsyncClient, test_project):
        for name in ('b.py', 'a.py'):
            response = await client.post(
                f'/api/v1/projects/{test_project.id}/files',
                json={'name': name, 'content': 'pass\n', 'type': 'python'}
            )
            assert response.status_code == 201

        response = await client.get(f'/api/v1/projects/{test_project.id}/files')

        assert response.status_code == 200
        assert [f['name'] for f in response.json()] == ['a.py', 'b.py']

    async def test_create_file_defaults_size(self, client: AsyncClient, test_project):
        response = await client.post(
            f'/api/v1/projects/{test_project.id}/files',
            json={'name': 'src', 'content': '', 'type': 'folder'}
        )

        assert response.status_code == 201
        assert response.json()['size'] == 0
        assert response.json()['project_id'] == test_project.id

    async def test_create_file_in_missing_project(self, client: AsyncClient):
        response = await client.post(
            '/api/v1/projects/missing/files',
            json={'name': 'a.py', 'content': '', 'type': 'python'}
        )

        assert response.status_code == 404

    async def test_list_files_of_unknown_project_is_empty(self, client: AsyncClient):
        response = await client.get('/api/v1/projects/unknown/files')

        assert response.status_code == 200
        assert response.json() == []

    async def test_get_update_delete_file(self, client: AsyncClient, test_file):
        response = await client.get(f'/api/v1/files/{test_file.id}')
        assert response.status_code == 200
        assert response.json()['content'] == "print('hello')\n"

        response = await client.put(f'/api/v1/files/{test_file.id}', json={'content': 'print(1)\n'})
        assert response.status_code == 200
        assert response.json()['content'] == 'print(1)\n'
        assert response.json()['name'] == 'main.py'

        response = await client.delete(f'/api/v1/files/{test_file.id}')
        assert response.status_code == 204

        response = await client.get(f'/api/v1/files/{test_file.id}')
        assert response.status_code == 404
        assert response.json()['error']['code'] == 'FILE_NOT_FOUND'

    async def test_update_missing_file(self, client: AsyncClient):
        response = await client.put('/api/v1/files/missing', json={'content': 'x'})

        assert response.status_code == 404


class TestFileUpload:
    """Multipart uploads"""

    async def test_upload_text_and_binary(self, client: AsyncClient, test_project):
        files = [
            ('files', ('main.py', b"print('hi')\n", 'text/x-python')),
            ('files', ('icon.png', b'\x89PNG\r\n\x1a\n' + b'\x00' * 8, 'image/png')),
        ]

        response = await client.post(f'/api/v1/projects/{test_project.id}/files/upload', files=files)

        assert response.status_code == 201
        uploaded = {f['name']: f for f in response.json()}
        assert uploaded['main.py']['content'] == "print('hi')\n"
        assert uploaded['main.py']['type'] == 'file'
        assert uploaded['main.py']['size'] == 12
        assert uploaded['icon.png']['content'] == '[BINARY FILE: icon.png - 16 bytes]'
        assert uploaded['icon.png']['size'] == 16

    async def test_upload_invalid_utf8(self, client: AsyncClient, test_project):
        files = [('files', ('notes.txt', b'\xff\xfe\xfa', 'text/plain'))]

        response = await client.post(f'/api/v1/projects/{test_project.id}/files/upload', files=files)

        assert response.status_code == 201
        assert response.json()[0]['content'] == '[ENCODING ERROR: Unable to read notes.txt as UTF-8]'

    async def test_upload_rejects_extension(self, client: AsyncClient, test_project):
        files = [
            ('files', ('ok.py', b'pass', 'text/x-python')),
            ('files', ('payload.exe', b'MZ', 'application/octet-stream')),
        ]

        response = await client.post(f'/api/v1/projects/{test_project.id}/files/upload', files=files)

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'INVALID_FILE_TYPE'
        listing = await client.get(f'/api/v1/projects/{test_project.id}/files')
        assert listing.json() == []

    async def test_upload_without_files(self, client: AsyncClient, test_project):
        response = await client.post(
            f'/api/v1/projects/{test_project.id}/files/upload',
            data={'note': 'nothing attached'}
        )

        assert response.status_code == 400
        assert response.json()['detail'] == 'No files uploaded'

    async def test_upload_too_large(self, client: AsyncClient, test_project, monkeypatch):
        monkeypatch.setattr(settings, 'MAX_UPLOAD_SIZE', 10)
        files = [('files', ('big.txt', b'x' * 11, 'text/plain'))]

        response = await client.post(f'/api/v1/projects/{test_project.id}/files/upload', files=files)

        assert response.status_code == 413
        assert response.json()['error']['code'] == 'FILE_TOO_LARGE'

    async def test_upload_to_missing_project(self, client: AsyncClient):
        files = [('files', ('main.py', b'pass', 'text/x-python'))]

        response = await client.post('/api/v1/projects/missing/files/upload', files=files)

        assert response.status_code == 404
