# roi_api/db/session.py
# -----------------------------------------------------------------------------
# SQLAlchemy Async engine/session/base
# - injected through FastAPI Depends(get_session)
# - SQLite by default; switching to PostgreSQL only needs a new URL
# -----------------------------------------------------------------------------
from collections.abc import AsyncGenerator
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from roi_api.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, echo=False, future=True)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)
Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Request scoped session"""
    async with AsyncSessionLocal() as session:
        yield session
