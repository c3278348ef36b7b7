"""Application Pydantic schemas for request/response validation."""

from datetime import datetime

from pydantic import EmailStr

from app.models.enums import ApplicationStatus
from app.schemas.common import CamelModel
from app.schemas.lease import LeaseResponse, LeaseWithNextPayment
from app.schemas.manager import ManagerResponse
from app.schemas.property import PropertySummary
from app.schemas.tenant import TenantResponse


class ApplicationCreate(CamelModel):
    """Schema for submitting an application.

    New applications always start as Pending; a status sent by the client is ignored.
    """

    application_date: datetime | None = None
    property_id: int
    tenant_cognito_id: str
    name: str
    email: EmailStr
    phone_number: str
    message: str | None = None


class ApplicationStatusUpdate(CamelModel):
    """Schema for a manager's decision."""

    status: ApplicationStatus


class ApplicationBase(CamelModel):
    """Application fields without relations."""

    id: int
    application_date: datetime
    status: ApplicationStatus
    name: str
    email: str
    phone_number: str
    message: str | None
    property_id: int
    tenant_cognito_id: str
    lease_id: int | None


class ApplicationResponse(ApplicationBase):
    """Application with property, tenant and lease, as returned after create/decide."""

    property: PropertySummary
    tenant: TenantResponse
    lease: LeaseResponse | None


class ApplicationProperty(PropertySummary):
    """Property as shown in application lists, with its street address."""

    address: str


class ApplicationListItem(ApplicationBase):
    """Application enriched for dashboards."""

    property: ApplicationProperty
    manager: ManagerResponse | None
    tenant: TenantResponse
    lease: LeaseWithNextPayment | None
