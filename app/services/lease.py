"""Lease service: lease terms, payment schedule and lease queries."""

from datetime import date

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import NotFoundError
from app.models.lease import Lease
from app.models.payment import Payment
from app.models.property import Property

# Feb 29 + 1 year lands on Feb 28
LEASE_TERM = relativedelta(years=1)


def calculate_next_payment_date(start_date: date, today: date | None = None) -> date:
    """
    First monthly due date strictly after ``today``.

    Due dates are anchored on the lease start day, so a lease starting on the
    31st is due on the last day of shorter months and back on the 31st after.
    """
    today = today or date.today()
    months = 0
    next_payment = start_date
    while next_payment <= today:
        months += 1
        next_payment = start_date + relativedelta(months=months)
    return next_payment


def new_lease(db_property: Property, tenant_cognito_id: str, today: date | None = None) -> Lease:
    """Build (not persist) a one-year lease priced from the property's current terms."""
    start = today or date.today()
    return Lease(
        start_date=start,
        end_date=start + LEASE_TERM,
        rent=db_property.price_per_month,
        deposit=db_property.security_deposit,
        property_id=db_property.id,
        tenant_cognito_id=tenant_cognito_id,
    )


def get_latest_lease(db: Session, tenant_cognito_id: str, property_id: int) -> Lease | None:
    """Most recent lease (by start date, then newest row) for a tenant and property."""
    return (
        db.query(Lease)
        .filter(
            Lease.tenant_cognito_id == tenant_cognito_id,
            Lease.property_id == property_id,
        )
        .order_by(Lease.start_date.desc(), Lease.id.desc())
        .first()
    )


def get_leases(db: Session) -> list[Lease]:
    """Get all leases with tenant and property loaded."""
    return (
        db.query(Lease)
        .options(joinedload(Lease.tenant), joinedload(Lease.property))
        .order_by(Lease.id)
        .all()
    )


def get_lease(db: Session, lease_id: int) -> Lease:
    """Get a lease by ID."""
    lease = db.query(Lease).filter(Lease.id == lease_id).first()
    if not lease:
        raise NotFoundError("Lease not found")
    return lease


def get_lease_payments(db: Session, lease_id: int) -> list[Payment]:
    """Get the payments recorded against a lease, oldest due date first."""
    get_lease(db, lease_id)
    return (
        db.query(Payment)
        .filter(Payment.lease_id == lease_id)
        .order_by(Payment.due_date)
        .all()
    )


def get_property_leases(db: Session, property_id: int) -> list[Lease]:
    """Get all leases of a property."""
    exists = db.query(Property.id).filter(Property.id == property_id).first()
    if not exists:
        raise NotFoundError("Property not found")
    return (
        db.query(Lease)
        .options(joinedload(Lease.tenant), joinedload(Lease.property))
        .filter(Lease.property_id == property_id)
        .order_by(Lease.start_date.desc())
        .all()
    )
