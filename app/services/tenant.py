"""Tenant service: profile CRUD, favorites and residences."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.property import Property
from app.models.tenant import Tenant
from app.schemas.tenant import TenantCreate, TenantUpdate
from app.services import property as property_service

logger = get_logger("tenants")


def get_tenant(db: Session, cognito_id: str) -> Tenant:
    """Get a tenant and their favorites by identity subject."""
    tenant = (
        db.query(Tenant)
        .options(selectinload(Tenant.favorites))
        .filter(Tenant.cognito_id == cognito_id)
        .first()
    )
    if not tenant:
        raise NotFoundError("Tenant not found")
    return tenant


def create_tenant(db: Session, tenant_data: TenantCreate) -> Tenant:
    """Register a tenant."""
    existing = db.query(Tenant).filter(Tenant.cognito_id == tenant_data.cognito_id).first()
    if existing:
        raise ConflictError("Tenant already exists")

    tenant = Tenant(
        cognito_id=tenant_data.cognito_id,
        name=tenant_data.name,
        email=tenant_data.email,
        phone_number=tenant_data.phone_number,
    )
    db.add(tenant)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Tenant already exists") from None
    db.refresh(tenant)
    logger.info("Created tenant %s", tenant.cognito_id)
    return tenant


def update_tenant(db: Session, cognito_id: str, tenant_data: TenantUpdate) -> Tenant:
    """Update a tenant's contact fields."""
    tenant = get_tenant(db, cognito_id)

    update_data = tenant_data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(tenant, field, value)

    db.commit()
    db.refresh(tenant)
    return tenant


def get_current_residences(db: Session, cognito_id: str) -> list[Property]:
    """Get properties the tenant currently resides in."""
    get_tenant(db, cognito_id)
    return property_service.get_current_residences(db, cognito_id)


def add_favorite_property(db: Session, cognito_id: str, property_id: int) -> Tenant:
    """Add a property to a tenant's favorites; a repeat add is a conflict."""
    tenant = get_tenant(db, cognito_id)

    if any(favorite.id == property_id for favorite in tenant.favorites):
        raise ConflictError("Property already added as favorite")

    db_property = db.query(Property).filter(Property.id == property_id).first()
    if not db_property:
        raise NotFoundError("Property not found")

    tenant.favorites.append(db_property)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request inserted the same pair first
        db.rollback()
        raise ConflictError("Property already added as favorite") from None

    db.refresh(tenant)
    logger.info("Tenant %s favorited property %s", cognito_id, property_id)
    return tenant


def remove_favorite_property(db: Session, cognito_id: str, property_id: int) -> Tenant:
    """Remove a property from a tenant's favorites; removing an absent favorite is a no-op."""
    tenant = get_tenant(db, cognito_id)

    favorite = next((p for p in tenant.favorites if p.id == property_id), None)
    if favorite is not None:
        tenant.favorites.remove(favorite)
        db.commit()
        db.refresh(tenant)
        logger.info("Tenant %s unfavorited property %s", cognito_id, property_id)
    return tenant
