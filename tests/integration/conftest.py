from datetime import datetime, timedelta
from uuid import uuid4

import pytest
import pytest_asyncio
from fastapi import Depends
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.api.utils.jwt import create_access_token
from src.app.services.access_gateway import AccessGateway
from src.depends import get_access_gateway, get_current_principal, get_unit_of_work
from src.domain.base import utcnow
from src.domain.entities import Principal


class FrozenClock:
    """Clock the tests move by hand"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta):
        self.now = self.now + delta


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'access.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FrozenClock(utcnow())


@pytest_asyncio.fixture
async def client(session_factory, clock):
    app = create_app(ApplicationConfig)

    # One session per request, as in production
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    async def override_get_access_gateway(
        principal: Principal = Depends(get_current_principal),
        uow=Depends(get_unit_of_work),
    ):
        return AccessGateway(
            uow, principal, invitation_ttl=ApplicationConfig.INVITATION_TTL, clock=clock
        )

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_access_gateway] = override_get_access_gateway

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    """Build Authorization headers for a principal with the given email"""

    def _headers(email: str, user_id=None) -> dict:
        token = create_access_token(user_id or uuid4(), email)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def acme(client, auth_headers):
    """
    Organization org1 owned by owner@acme.com, with workspaces ws1 and ws2
    and an Editor role {read, write}
    """
    owner = auth_headers("owner@acme.com")

    response = await client.post("/organizations", json={"name": "org1"}, headers=owner)
    assert response.status_code == 201
    org_id = response.json()["id"]

    workspaces = {}
    for name in ("ws1", "ws2"):
        response = await client.post(
            f"/organizations/{org_id}/workspaces", json={"name": name}, headers=owner
        )
        assert response.status_code == 201
        workspaces[name] = response.json()["id"]

    response = await client.post(
        f"/organizations/{org_id}/roles",
        json={"name": "Editor", "actions": ["read", "write"]},
        headers=owner,
    )
    assert response.status_code == 201

    return {
        "org_id": org_id,
        "owner": owner,
        "ws1": workspaces["ws1"],
        "ws2": workspaces["ws2"],
        "editor_role_id": response.json()["id"],
    }
