"""Lease and Payment Pydantic schemas."""

from datetime import date

from app.models.enums import PaymentStatus
from app.schemas.common import CamelModel, Money
from app.schemas.property import PropertySummary
from app.schemas.tenant import TenantResponse


class LeaseResponse(CamelModel):
    """Schema for lease response."""

    id: int
    start_date: date
    end_date: date
    rent: Money
    deposit: Money
    property_id: int
    tenant_cognito_id: str


class LeaseDetail(LeaseResponse):
    """Lease with its tenant and property."""

    tenant: TenantResponse
    property: PropertySummary


class LeaseWithNextPayment(LeaseResponse):
    """Lease plus the derived next monthly payment date."""

    next_payment_date: date


class PaymentResponse(CamelModel):
    """Schema for payment response."""

    id: int
    amount_due: Money
    amount_paid: Money
    due_date: date
    payment_date: date | None
    payment_status: PaymentStatus
    lease_id: int
