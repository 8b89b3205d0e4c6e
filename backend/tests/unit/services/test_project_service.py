"""
Unit Tests for ProjectService
"""
import pytest
from faker import Faker

from apkstudio.core.exceptions import ProjectFileNotFoundError, ProjectNotFoundError
from apkstudio.schemas.project import ProjectCreate, ProjectFileCreate, ProjectFileUpdate, ProjectUpdate
from apkstudio.services.project_service import ProjectService

fake = Faker()


def new_project() -> ProjectCreate:
    return ProjectCreate(name=fake.company(), package_name="com.example.app")


class TestProjects:
    """Project CRUD"""

    async def test_create_applies_defaults(self, db_session):
        project = await ProjectService(db_session).create_project(new_project())

        assert project.id
        assert project.version == "1.0.0"
        assert project.target_sdk == "Android 13 (API 33)"
        assert project.entry_point == "main.py"
        assert project.created_at is not None

    async def test_list_newest_first(self, db_session):
        service = ProjectService(db_session)
        first = await service.create_project(new_project())
        second = await service.create_project(new_project())

        projects = await service.list_projects()

        assert [p.id for p in projects] == [second.id, first.id]

    async def test_get_missing(self, db_session):
        with pytest.raises(ProjectNotFoundError):
            await ProjectService(db_session).get_project("missing")

    async def test_partial_update(self, db_session, test_project):
        original_name = test_project.name

        updated = await ProjectService(db_session).update_project(
            test_project.id, ProjectUpdate(version="2.0.0")
        )

        assert updated.version == "2.0.0"
        assert updated.name == original_name

    async def test_delete_removes_files(self, db_session, test_project, test_file):
        service = ProjectService(db_session)

        await service.delete_project(test_project.id)

        with pytest.raises(ProjectNotFoundError):
            await service.get_project(test_project.id)
        with pytest.raises(ProjectFileNotFoundError):
            await service.get_file(test_file.id)


class TestFiles:
    """File CRUD"""

    async def test_list_by_name(self, db_session, test_project):
        service = ProjectService(db_session)
        for name in ("zeta.py", "alpha.py", "main.kv"):
            await service.create_file(test_project.id, ProjectFileCreate(name=name, content="", type="file"))

        files = await service.list_files(test_project.id)

        assert [f.name for f in files] == ["alpha.py", "main.kv", "zeta.py"]

    async def test_create_file_in_missing_project(self, db_session):
        with pytest.raises(ProjectNotFoundError):
            await ProjectService(db_session).create_file(
                "missing", ProjectFileCreate(name="a.py", content="", type="python")
            )

    async def test_update_file(self, db_session, test_file):
        updated = await ProjectService(db_session).update_file(
            test_file.id, ProjectFileUpdate(name="app.py")
        )

        assert updated.name == "app.py"
        assert updated.content == "print('hello')\n"

    async def test_update_file_content_tracks_size(self, db_session, test_file):
        updated = await ProjectService(db_session).update_file_content(test_file.id, "héllo")

        assert updated.size == len("héllo".encode("utf-8"))

    async def test_delete_file(self, db_session, test_file):
        service = ProjectService(db_session)

        await service.delete_file(test_file.id)

        with pytest.raises(ProjectFileNotFoundError):
            await service.delete_file(test_file.id)
