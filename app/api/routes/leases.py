"""Lease API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import require_roles
from app.schemas.lease import LeaseDetail, PaymentResponse
from app.services import lease as lease_service

router = APIRouter(
    prefix="/leases",
    tags=["leases"],
    dependencies=[Depends(require_roles("manager", "tenant"))],
)


@router.get("", response_model=list[LeaseDetail])
def get_leases(db: Session = Depends(get_db)) -> list[LeaseDetail]:
    """List all leases."""
    return [LeaseDetail.model_validate(lease) for lease in lease_service.get_leases(db)]


@router.get("/{lease_id}/payments", response_model=list[PaymentResponse])
def get_lease_payments(lease_id: int, db: Session = Depends(get_db)) -> list[PaymentResponse]:
    """List the payments recorded for a lease."""
    payments = lease_service.get_lease_payments(db, lease_id)
    return [PaymentResponse.model_validate(p) for p in payments]
