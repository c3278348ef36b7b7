"""Tenant Pydantic schemas for request/response validation."""

from pydantic import EmailStr, Field

from app.schemas.common import CamelModel
from app.schemas.property import PropertySummary


class TenantCreate(CamelModel):
    """Schema for registering a tenant after sign-up."""

    cognito_id: str = Field(min_length=1, max_length=255)
    name: str
    email: EmailStr
    phone_number: str = ""


class TenantUpdate(CamelModel):
    """Schema for updating tenant contact fields."""

    name: str | None = None
    email: EmailStr | None = None
    phone_number: str | None = None


class TenantResponse(CamelModel):
    """Schema for tenant response."""

    id: int
    cognito_id: str
    name: str
    email: str
    phone_number: str


class TenantWithFavorites(TenantResponse):
    """Tenant including favorited properties."""

    favorites: list[PropertySummary] = []
