"""Application lifecycle: submission, manager decisions and dashboard listing.

An application starts Pending and moves once to Approved or Denied. Approval
creates a fresh lease at the property's current price and makes the tenant a
resident of the property.
"""

from datetime import UTC, date, datetime

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models.application import Application
from app.models.enums import ApplicationStatus
from app.models.property import Property
from app.models.tenant import Tenant
from app.schemas.application import (
    ApplicationBase,
    ApplicationCreate,
    ApplicationListItem,
    ApplicationProperty,
)
from app.schemas.lease import LeaseResponse, LeaseWithNextPayment
from app.schemas.manager import ManagerResponse
from app.schemas.property import PropertySummary
from app.schemas.tenant import TenantResponse
from app.services.lease import calculate_next_payment_date, get_latest_lease, new_lease

logger = get_logger("applications")

USER_TYPES = ("tenant", "manager")


def get_application(db: Session, application_id: int) -> Application:
    """Get an application with its property, tenant and lease."""
    application = (
        db.query(Application)
        .options(
            joinedload(Application.property),
            joinedload(Application.tenant),
            joinedload(Application.lease),
        )
        .filter(Application.id == application_id)
        .first()
    )
    if not application:
        raise NotFoundError("Application not found.")
    return application


def create_application(
    db: Session,
    data: ApplicationCreate,
    today: date | None = None,
) -> Application:
    """
    Submit an application together with a tentative one-year lease.

    The lease and the application are written in one transaction; if either
    insert fails nothing is kept.

    Raises:
        NotFoundError: If the property or the tenant does not exist

    """
    db_property = db.query(Property).filter(Property.id == data.property_id).first()
    if not db_property:
        raise NotFoundError("Property not found")

    tenant = db.query(Tenant).filter(Tenant.cognito_id == data.tenant_cognito_id).first()
    if not tenant:
        raise NotFoundError("Tenant not found")

    try:
        lease = new_lease(db_property, tenant.cognito_id, today)
        db.add(lease)
        db.flush()

        application = Application(
            application_date=data.application_date or datetime.now(UTC),
            status=ApplicationStatus.PENDING,
            name=data.name,
            email=data.email,
            phone_number=data.phone_number,
            message=data.message,
            property_id=db_property.id,
            tenant_cognito_id=tenant.cognito_id,
            lease_id=lease.id,
        )
        db.add(application)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Failed to create application for property %s by tenant %s",
            data.property_id,
            data.tenant_cognito_id,
        )
        raise

    logger.info(
        "Tenant %s applied for property %s (application %s, lease %s)",
        tenant.cognito_id,
        db_property.id,
        application.id,
        lease.id,
    )
    return get_application(db, application.id)


def update_application_status(
    db: Session,
    application_id: int,
    new_status: ApplicationStatus,
    today: date | None = None,
) -> Application:
    """
    Record a manager's decision on a pending application.

    Repeating the decision an application already has returns it unchanged;
    asking for a different decision once one is made is a conflict. The move
    out of Pending is claimed with a conditional UPDATE, so of two concurrent
    approvals only one creates a lease.

    Raises:
        NotFoundError: If the application does not exist
        ValidationError: If the target status is Pending
        ConflictError: If the application was already decided differently

    """
    if new_status == ApplicationStatus.PENDING:
        raise ValidationError("Applications can only be moved to Approved or Denied")

    application = get_application(db, application_id)
    if application.status != ApplicationStatus.PENDING:
        return _already_decided(application, new_status)

    claimed = db.execute(
        update(Application)
        .where(
            Application.id == application_id,
            Application.status == ApplicationStatus.PENDING,
        )
        .values(status=new_status)
        .execution_options(synchronize_session=False)
    )
    if claimed.rowcount == 0:
        db.rollback()
        return _already_decided(get_application(db, application_id), new_status)
    db.expire(application, ["status"])

    try:
        if new_status == ApplicationStatus.APPROVED:
            lease = new_lease(application.property, application.tenant_cognito_id, today)
            db.add(lease)
            db.flush()
            application.lease_id = lease.id

            if application.tenant not in application.property.tenants:
                application.property.tenants.append(application.tenant)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to set application %s to %s", application_id, new_status.value)
        raise

    logger.info("Application %s is now %s", application_id, new_status.value)
    return get_application(db, application_id)


def _already_decided(application: Application, new_status: ApplicationStatus) -> Application:
    if application.status == new_status:
        logger.info("Application %s is already %s", application.id, new_status.value)
        return application
    raise ConflictError(
        f"Application {application.id} is already {application.status.value}"
    )


def list_applications(
    db: Session,
    user_id: str | None = None,
    user_type: str | None = None,
    today: date | None = None,
) -> list[ApplicationListItem]:
    """
    List applications for a tenant or for a manager's properties.

    Each item carries the tenant's most recent lease on that property and the
    next monthly payment date derived from it.
    """
    query = db.query(Application).options(
        joinedload(Application.property).joinedload(Property.location),
        joinedload(Application.property).joinedload(Property.manager),
        joinedload(Application.tenant),
    )

    if user_id and user_type:
        if user_type not in USER_TYPES:
            raise ValidationError(f"Unknown userType: {user_type!r}")
        if user_type == "tenant":
            query = query.filter(Application.tenant_cognito_id == user_id)
        else:
            query = query.filter(Application.property.has(Property.manager_cognito_id == user_id))

    items: list[ApplicationListItem] = []
    for application in query.order_by(Application.id).all():
        lease = get_latest_lease(db, application.tenant_cognito_id, application.property_id)
        items.append(_list_item(application, lease, today))
    return items


def _list_item(application: Application, lease, today: date | None) -> ApplicationListItem:
    db_property = application.property
    property_fields = PropertySummary.model_validate(db_property).model_dump()

    lease_item = None
    if lease is not None:
        lease_item = LeaseWithNextPayment(
            **LeaseResponse.model_validate(lease).model_dump(),
            next_payment_date=calculate_next_payment_date(lease.start_date, today),
        )

    return ApplicationListItem(
        **ApplicationBase.model_validate(application).model_dump(),
        property=ApplicationProperty(**property_fields, address=db_property.location.address),
        manager=ManagerResponse.model_validate(db_property.manager) if db_property.manager else None,
        tenant=TenantResponse.model_validate(application.tenant),
        lease=lease_item,
    )
