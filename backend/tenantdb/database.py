"""
Database wiring: sessions whose bind is chosen per statement by the routing provider.

RoutingSession overrides Session.get_bind(), which SQLAlchemy calls right
before it acquires a connection. Service code uses one AsyncSession and never
names the database it talks to.
"""

from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Session

from tenantdb.routing.provider import RoutingConnectionProvider
from tenantdb.routing.registry import PoolRegistry


class Base(DeclarativeBase):
    pass


class RoutingSession(Session):
    def get_bind(self, mapper=None, clause=None, **kw):
        provider: RoutingConnectionProvider = self.info["routing_provider"]
        return provider.resolve().sync_engine


def create_session_factory(provider: RoutingConnectionProvider) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        sync_session_class=RoutingSession,
        expire_on_commit=False,
        info={"routing_provider": provider},
    )


async def init_models(registry: PoolRegistry) -> None:
    """Create all tables on every registered engine (dev and test databases only)."""
    for engine in registry.engines():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one routed session per request."""
    async with request.app.state.session_factory() as session:
        yield session
