import asyncio
import logging
import sys

from sqlalchemy import delete

from tenantdb.config import settings
from tenantdb.database import create_session_factory, init_models
from tenantdb.logging_config import configure_logging
from tenantdb.models import User
from tenantdb.routing import RoutingConnectionProvider, build_registry, route_by_tenant
from tenantdb.schemas import UserCreate
from tenantdb.services.users import user_service

logger = logging.getLogger("seed")

USERS = {
    "DE": [
        {"username": "anna", "email": "anna@example.de"},
        {"username": "lukas", "email": "lukas@example.de"},
    ],
    "ES": [
        {"username": "lucia", "email": "lucia@example.es"},
        {"username": "mateo", "email": "mateo@example.es"},
    ],
    "GB": [
        {"username": "oliver", "email": "oliver@example.co.uk"},
    ],
}


@route_by_tenant()
async def clear_users(country_code: str, db) -> None:
    await db.execute(delete(User))
    await db.commit()


async def seed():
    """Create the schema on every tenant database and insert sample users."""
    configure_logging(settings.log_level)
    registry = build_registry(settings)
    session_factory = create_session_factory(RoutingConnectionProvider(registry))

    try:
        await init_models(registry)
        for country_code in registry.keys():
            async with session_factory() as db:
                # Clear existing users (for clean state)
                await clear_users(country_code, db)

                for data in USERS.get(country_code, []):
                    user = await user_service.create_user(country_code, UserCreate(**data), db)
                    logger.info("[%s] created user %s (id=%s)", country_code, user.username, user.id)
    finally:
        await registry.dispose()

    logger.info("Seed complete.")


if __name__ == "__main__":
    try:
        asyncio.run(seed())
    except Exception:
        logger.exception("Error seeding database")
        sys.exit(1)
