"""
FastAPI dependencies wiring request handlers to process-wide resources
"""
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from idea_studio.config import Settings
from idea_studio.database import DatabaseManager
from idea_studio.errors import AuthenticationRequired, PersistenceError
from idea_studio.logging_config import logger
from idea_studio.services.auth_service import AuthUser
from idea_studio.services.idea_service import IdeaGenerationService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> DatabaseManager:
    return request.app.state.db


async def get_db(db: DatabaseManager = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session"""
    if not db.is_initialized:
        try:
            await db.initialize()
        except Exception as e:
            raise PersistenceError(f"Database unavailable: {str(e)}") from e

    async with db.get_session() as session:
        yield session


def get_generation_service(request: Request) -> IdeaGenerationService:
    """A fresh pipeline per request over the shared provider client"""
    return IdeaGenerationService(
        client=request.app.state.generation_client,
        prompt_builder=request.app.state.prompt_builder,
    )


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> Optional[AuthUser]:
    """Authenticated caller, or None for anonymous requests"""
    token = _bearer_token(authorization)
    user = await request.app.state.auth.get_user(token)
    if token and user is None:
        logger.debug("Bearer token did not resolve to a user")
    return user


async def require_user(user: Optional[AuthUser] = Depends(get_current_user)) -> AuthUser:
    if user is None:
        raise AuthenticationRequired("Login required")
    return user
