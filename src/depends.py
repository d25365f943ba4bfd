from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import verify_jwt
from src.app.services.access_gateway import AccessGateway
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Principal

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Principal:
    """
    Dependency to extract and verify the identity provider's token.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Principal built from the token's user_id and email claims

    Raises:
        HTTPException: 401 if token is invalid, expired or lacks a claim
    """
    payload = verify_jwt(credentials.credentials)

    if payload is None or "user_id" not in payload or "email" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    try:
        return Principal(id=UUID(payload["user_id"]), email=payload["email"])
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


async def get_access_gateway(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> AccessGateway:
    return AccessGateway(
        uow,
        principal,
        invitation_ttl=ApplicationConfig.INVITATION_TTL,
    )
