"""
User service: plain persistence, unaware of which country database it talks to.

The country_code parameter is only read by the routing interceptor; the
queries themselves are identical for every tenant.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenantdb.models import User
from tenantdb.routing import route_by_tenant
from tenantdb.schemas import UserCreate


class UserService:
    @route_by_tenant()
    async def create_user(self, country_code: str, data: UserCreate, db: AsyncSession) -> User:
        user = User(username=data.username, email=data.email)
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    @route_by_tenant()
    async def list_users(self, country_code: str, db: AsyncSession) -> list[User]:
        result = await db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    @route_by_tenant()
    async def get_user(self, country_code: str, user_id: int, db: AsyncSession) -> User | None:
        return await db.get(User, user_id)


user_service = UserService()
