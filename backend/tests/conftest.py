"""
APK Studio - Test Configuration and Fixtures
"""
import os
import asyncio
from typing import AsyncGenerator, Callable, List
import pytest
import httpx
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from faker import Faker

# Set testing environment (before any apkstudio import reads settings)
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite://'
os.environ['LOG_FILE'] = ''
os.environ['LOG_LEVEL'] = 'WARNING'
os.environ['RATE_LIMIT_ENABLED'] = 'false'

from apkstudio.main import create_app
from apkstudio.core.database import Base, create_engine_for_url, get_db
from apkstudio.core.dependencies import get_ai_client
from apkstudio.models.project import Project
from apkstudio.models.project_file import ProjectFile
from apkstudio.services.build_driver import BuildProgressDriver
from apkstudio.services.build_log_store import BuildLogStore

fake = Faker()

# Fast build schedule: 4 steps finish in well under a second
TEST_STEP_INTERVAL = 0.02


class UpstreamAI:
    """Stands in for every third-party AI API via httpx.MockTransport"""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"response": "ok"})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def reply(self, status_code: int = 200, json=None) -> None:
        self.responder = lambda request: httpx.Response(status_code, json=json)

    def fail_connect(self) -> None:
        def responder(request):
            raise httpx.ConnectError("connection refused", request=request)
        self.responder = responder

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0, interval: float = 0.01) -> bool:
    """Poll a condition on the running loop; True once it holds"""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while loop.time() < deadline:
        if predicate():
            return True
        await asyncio.sleep(interval)
    return predicate()


@pytest.fixture
async def db_engine():
    """Fresh in-memory database per test"""
    engine = create_engine_for_url('sqlite+aiosqlite://')
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def build_store() -> BuildLogStore:
    store = BuildLogStore()
    yield store
    store.close()


@pytest.fixture
def build_driver(build_store) -> BuildProgressDriver:
    return BuildProgressDriver(build_store, step_interval=TEST_STEP_INTERVAL)


@pytest.fixture
def upstream() -> UpstreamAI:
    return UpstreamAI()


@pytest.fixture
def app(session_factory, build_store, build_driver, upstream):
    """Application wired to the test database, build driver and mock AI upstream"""
    application = create_app()
    application.state.build_store = build_store
    application.state.build_driver = build_driver

    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def override_get_ai_client():
        async with upstream.client() as client:
            yield client

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_ai_client] = override_get_ai_client
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client against the app"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac


@pytest.fixture
async def test_project(db_session: AsyncSession) -> Project:
    """Create a test project"""
    project = Project(
        name=fake.company(),
        package_name=f"com.{fake.user_name()}.app",
    )
    db_session.add(project)
    await db_session.commit()
    await db_session.refresh(project)
    return project


@pytest.fixture
async def test_file(db_session: AsyncSession, test_project: Project) -> ProjectFile:
    """Create a python file inside the test project"""
    content = "print('hello')\n"
    file = ProjectFile(
        project_id=test_project.id,
        name="main.py",
        content=content,
        type="python",
        size=len(content),
    )
    db_session.add(file)
    await db_session.commit()
    await db_session.refresh(file)
    return file
