"""
Exhibition location service.

Create and update receive the whole record, so the country comes from its
country_code field; find and delete receive the composite key as separate
arguments and route on the country_code parameter.
"""

from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantdb.models import ExhibitionLocation
from tenantdb.routing import route_by_tenant
from tenantdb.schemas import ExhibitionLocationCreate, ExhibitionLocationUpdate


def _key_filter(
    country_code: str,
    company_code: int,
    dealer_code: int,
    chassis: str,
    sequence: int,
    location_code: str,
):
    return (
        ExhibitionLocation.country_code == country_code.upper(),
        ExhibitionLocation.company_code == company_code,
        ExhibitionLocation.dealer_code == dealer_code,
        ExhibitionLocation.chassis == chassis,
        ExhibitionLocation.sequence == sequence,
        ExhibitionLocation.location_code == location_code,
    )


class ExhibitionLocationService:
    @route_by_tenant()
    async def create(self, location: ExhibitionLocationCreate, db: AsyncSession) -> ExhibitionLocation:
        """Insert a location, stamping both audit timestamps. Duplicate keys raise IntegrityError."""
        now = datetime.now(timezone.utc)
        data = location.model_dump()
        data["country_code"] = location.country_code.upper()
        row = ExhibitionLocation(**data, created_at=now, updated_at=now)
        db.add(row)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        await db.refresh(row)
        return row

    @route_by_tenant()
    async def find(
        self,
        country_code: str,
        company_code: int,
        dealer_code: int,
        chassis: str,
        sequence: int,
        location_code: str,
        db: AsyncSession,
    ) -> ExhibitionLocation | None:
        result = await db.execute(
            select(ExhibitionLocation).where(
                *_key_filter(country_code, company_code, dealer_code, chassis, sequence, location_code)
            )
        )
        return result.scalar_one_or_none()

    @route_by_tenant()
    async def update(self, location: ExhibitionLocationUpdate, db: AsyncSession) -> int:
        """Update the mutable fields. Returns the number of rows affected (0 = not found)."""
        result = await db.execute(
            update(ExhibitionLocation)
            .where(
                *_key_filter(
                    location.country_code,
                    location.company_code,
                    location.dealer_code,
                    location.chassis,
                    location.sequence,
                    location.location_code,
                )
            )
            .values(
                address=location.address,
                change_status=location.change_status,
                updated_by=location.updated_by,
                updated_at=datetime.now(timezone.utc),
            )
        )
        await db.commit()
        return result.rowcount

    @route_by_tenant()
    async def delete(
        self,
        country_code: str,
        company_code: int,
        dealer_code: int,
        chassis: str,
        sequence: int,
        location_code: str,
        db: AsyncSession,
    ) -> int:
        result = await db.execute(
            delete(ExhibitionLocation).where(
                *_key_filter(country_code, company_code, dealer_code, chassis, sequence, location_code)
            )
        )
        await db.commit()
        return result.rowcount


location_service = ExhibitionLocationService()
