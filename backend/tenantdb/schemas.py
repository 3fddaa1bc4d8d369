"""Pydantic schemas for API request/response validation."""

from datetime import date, datetime

from pydantic import BaseModel, Field

COUNTRY_CODE = r"^[A-Za-z]{2}$"


# User

class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)


class UserResponse(BaseModel):
    id: int
    username: str
    email: str

    model_config = {"from_attributes": True}


# Exhibition location

class ExhibitionLocationKey(BaseModel):
    country_code: str = Field(..., pattern=COUNTRY_CODE)
    company_code: int
    dealer_code: int
    chassis: str = Field(..., min_length=1, max_length=17)
    sequence: int
    location_code: str = Field(..., min_length=1, max_length=10)


class ExhibitionLocationCreate(ExhibitionLocationKey):
    starts_on: date | None = None
    ends_on: date | None = None
    address: str | None = Field(default=None, max_length=255)
    length: int | None = None
    kind: str | None = Field(default=None, max_length=20)
    approved_on: date | None = None
    change_status: str | None = Field(default=None, max_length=1)
    created_by: str | None = Field(default=None, max_length=50)


class ExhibitionLocationUpdate(ExhibitionLocationKey):
    address: str | None = Field(default=None, max_length=255)
    change_status: str | None = Field(default=None, max_length=1)
    updated_by: str | None = Field(default=None, max_length=50)


class ExhibitionLocationResponse(ExhibitionLocationKey):
    starts_on: date | None = None
    ends_on: date | None = None
    address: str | None = None
    length: int | None = None
    kind: str | None = None
    approved_on: date | None = None
    change_status: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_by: str | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


# Health

class DatabaseHealth(BaseModel):
    tenant: str
    status: str


class HealthResponse(BaseModel):
    status: str
    databases: list[DatabaseHealth]
    version: str
