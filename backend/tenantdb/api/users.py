"""User endpoints: the country code in the path selects the database."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tenantdb.database import get_db
from tenantdb.schemas import COUNTRY_CODE, UserCreate, UserResponse
from tenantdb.services.users import user_service

router = APIRouter(prefix="/users", tags=["users"])

CountryCode = Annotated[str, Path(pattern=COUNTRY_CODE, description="Tenant key, e.g. DE or ES")]


@router.post("/{country_code}", response_model=UserResponse, status_code=201)
async def create_user(
    body: UserCreate,
    response: Response,
    country_code: CountryCode,
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.create_user(country_code, body, db)
    response.headers["Location"] = f"/api/users/{country_code}/{user.id}"
    return user


@router.get("/{country_code}", response_model=list[UserResponse])
async def list_users(country_code: CountryCode, db: AsyncSession = Depends(get_db)):
    return await user_service.list_users(country_code, db)


@router.get("/{country_code}/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    country_code: CountryCode,
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.get_user(country_code, user_id, db)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
