"""Manager Pydantic schemas for request/response validation."""

from pydantic import EmailStr, Field

from app.schemas.common import CamelModel


class ManagerCreate(CamelModel):
    """Schema for registering a manager after sign-up."""

    cognito_id: str = Field(min_length=1, max_length=255)
    name: str
    email: EmailStr
    phone_number: str = ""


class ManagerUpdate(CamelModel):
    """Schema for updating manager contact fields."""

    name: str | None = None
    email: EmailStr | None = None
    phone_number: str | None = None


class ManagerResponse(CamelModel):
    """Schema for manager response."""

    id: int
    cognito_id: str
    name: str
    email: str
    phone_number: str
