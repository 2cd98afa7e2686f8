from typing import AsyncGenerator, Dict, List, Tuple

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.context import AppContext, get_context
from app.core.enums import SMSStatus
from app.core.store import PersistentStore
from app.db.session import Base
from app.main import app
from app.notifications.dispatcher import NotificationDispatcher
from app.notifications.gateway import SMSGateway, SMSSendResponse


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_CREDENTIALS = {"email": "administrator@school.edu", "password": "admin123"}
STAFF_CREDENTIALS = {"email": "staff@school.edu", "password": "staff123"}


class RecordingGateway(SMSGateway):
    """Accepts every message and keeps (to, message) pairs for assertions."""

    def __init__(self) -> None:
        self.sent: List[Tuple[str, str]] = []

    async def send(self, to: str, message: str) -> SMSSendResponse:
        self.sent.append((to, message))
        return SMSSendResponse(status=SMSStatus.SENT, message_id=f"ATXid_{len(self.sent)}")


@pytest.fixture()
async def store() -> AsyncGenerator[PersistentStore, None]:
    """A store over a private in-memory SQLite database."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, future=True, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    yield PersistentStore(session_factory)
    await engine.dispose()


@pytest.fixture()
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture()
async def ctx(store: PersistentStore, gateway: RecordingGateway) -> AsyncGenerator[AppContext, None]:
    dispatcher = NotificationDispatcher(gateway)
    context = await AppContext.load(store, dispatcher)
    yield context
    await dispatcher.drain()


@pytest.fixture()
async def client(ctx: AppContext) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app, with the test context injected."""
    app.dependency_overrides[get_context] = lambda: ctx
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def login(client: AsyncClient, credentials: Dict[str, str]) -> Dict[str, str]:
    response = await client.post("/api/v1/auth/login", json=credentials)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}


@pytest.fixture()
async def admin_headers(client: AsyncClient) -> Dict[str, str]:
    return await login(client, ADMIN_CREDENTIALS)


@pytest.fixture()
async def staff_headers(client: AsyncClient) -> Dict[str, str]:
    return await login(client, STAFF_CREDENTIALS)
