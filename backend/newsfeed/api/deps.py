from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from newsfeed.core.config import Settings
from newsfeed.models import User
from newsfeed.services.queue import JobQueueService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.session_factory


def get_job_queue(request: Request) -> JobQueueService:
    return request.app.state.job_queue


SettingsDep = Annotated[Settings, Depends(get_settings)]
SessionFactoryDep = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]
JobQueueDep = Annotated[JobQueueService, Depends(get_job_queue)]


# Dependency to get async session
async def get_session(session_factory: SessionFactoryDep) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_current_user(
    db: SessionDep,
    user_id: Annotated[Optional[int], Header(alias="X-User-Id")] = None,
) -> User:
    """Resolve the acting reader; authentication happens in front of this service"""
    if user_id is None:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
