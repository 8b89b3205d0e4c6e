"""
Unit Tests for the build endpoints
"""
import pytest
from httpx import AsyncClient

from conftest import wait_until


class TestStartBuild:
    """POST /projects/{id}/build"""

    async def test_start_returns_initial_record(self, client: AsyncClient):
        response = await client.post('/api/v1/projects/p1/build')

        assert response.status_code == 200
        data = response.json()
        assert data['project_id'] == 'p1'
        assert data['status'] == 'building'
        assert data['progress'] == 0
        assert data['log'] == '[INFO] Starting build process...\n'
        assert data['generation'] >= 1
        assert 'created_at' in data

    async def test_start_does_not_require_project(self, client: AsyncClient):
        response = await client.post('/api/v1/projects/not-a-real-project/build')

        assert response.status_code == 200

    async def test_restart_bumps_generation(self, client: AsyncClient):
        first = (await client.post('/api/v1/projects/p1/build')).json()
        second = (await client.post('/api/v1/projects/p1/build')).json()

        assert second['generation'] > first['generation']
        assert second['progress'] == 0


class TestGetBuild:
    """GET /projects/{id}/build"""

    async def test_not_found_before_first_build(self, client: AsyncClient):
        response = await client.get('/api/v1/projects/p1/build')

        assert response.status_code == 404
        data = response.json()
        assert data['error']['code'] == 'BUILD_NOT_FOUND'
        assert data['detail'] == "No build found for project 'p1'"

    async def test_build_completes(self, client: AsyncClient, build_store):
        await client.post('/api/v1/projects/p1/build')
        assert await wait_until(lambda: build_store.get('p1').is_terminal)

        response = await client.get('/api/v1/projects/p1/build')

        data = response.json()
        assert data['status'] == 'success'
        assert data['progress'] == 100
        assert data['log'].endswith('[SUCCESS] Build complete! APK ready for download.\n')
        assert data['log'].count('\n') == 9

    async def test_builds_are_per_project(self, client: AsyncClient):
        await client.post('/api/v1/projects/a/build')

        assert (await client.get('/api/v1/projects/a/build')).status_code == 200
        assert (await client.get('/api/v1/projects/b/build')).status_code == 404
