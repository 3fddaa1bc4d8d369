"""Exhibition location CRUD. The country_code in the body or query selects the database."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantdb.database import get_db
from tenantdb.schemas import (
    COUNTRY_CODE,
    ExhibitionLocationCreate,
    ExhibitionLocationKey,
    ExhibitionLocationResponse,
    ExhibitionLocationUpdate,
)
from tenantdb.services.locations import location_service

router = APIRouter(prefix="/exhibition-locations", tags=["exhibition-locations"])


def location_key(
    country_code: str = Query(..., pattern=COUNTRY_CODE),
    company_code: int = Query(...),
    dealer_code: int = Query(...),
    chassis: str = Query(..., min_length=1, max_length=17),
    sequence: int = Query(...),
    location_code: str = Query(..., min_length=1, max_length=10),
) -> ExhibitionLocationKey:
    return ExhibitionLocationKey(
        country_code=country_code,
        company_code=company_code,
        dealer_code=dealer_code,
        chassis=chassis,
        sequence=sequence,
        location_code=location_code,
    )


@router.post("", response_model=ExhibitionLocationResponse, status_code=201)
async def create_location(
    body: ExhibitionLocationCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    try:
        row = await location_service.create(body, db)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Exhibition location already exists")

    response.headers["Location"] = (
        f"/api/v1/exhibition-locations?country_code={row.country_code}"
        f"&company_code={row.company_code}&dealer_code={row.dealer_code}"
        f"&chassis={row.chassis}&sequence={row.sequence}&location_code={row.location_code}"
    )
    return row


@router.get("", response_model=ExhibitionLocationResponse)
async def find_location(
    key: ExhibitionLocationKey = Depends(location_key),
    db: AsyncSession = Depends(get_db),
):
    row = await location_service.find(**key.model_dump(), db=db)
    if row is None:
        raise HTTPException(status_code=404, detail="Exhibition location not found")
    return row


@router.put("", status_code=204)
async def update_location(body: ExhibitionLocationUpdate, db: AsyncSession = Depends(get_db)):
    updated = await location_service.update(body, db)
    if not updated:
        raise HTTPException(status_code=404, detail="Exhibition location not found")


@router.delete("", status_code=204)
async def delete_location(
    key: ExhibitionLocationKey = Depends(location_key),
    db: AsyncSession = Depends(get_db),
):
    deleted = await location_service.delete(**key.model_dump(), db=db)
    if not deleted:
        raise HTTPException(status_code=404, detail="Exhibition location not found")
