"""Tenant API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import require_roles
from app.schemas.property import PropertyResponse
from app.schemas.tenant import TenantCreate, TenantResponse, TenantUpdate, TenantWithFavorites
from app.services import tenant as tenant_service

router = APIRouter(
    prefix="/tenants",
    tags=["tenants"],
    dependencies=[Depends(require_roles("tenant"))],
)


@router.get("/{cognito_id}", response_model=TenantWithFavorites)
def get_tenant(cognito_id: str, db: Session = Depends(get_db)) -> TenantWithFavorites:
    """Get a tenant with their favorite properties."""
    return TenantWithFavorites.model_validate(tenant_service.get_tenant(db, cognito_id))


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
def create_tenant(tenant_data: TenantCreate, db: Session = Depends(get_db)) -> TenantResponse:
    """Register a tenant."""
    return TenantResponse.model_validate(tenant_service.create_tenant(db, tenant_data))


@router.put("/{cognito_id}", response_model=TenantResponse)
def update_tenant(
    cognito_id: str,
    tenant_data: TenantUpdate,
    db: Session = Depends(get_db),
) -> TenantResponse:
    """Update a tenant's contact details."""
    return TenantResponse.model_validate(tenant_service.update_tenant(db, cognito_id, tenant_data))


@router.get("/{cognito_id}/current-residences", response_model=list[PropertyResponse])
def get_current_residences(cognito_id: str, db: Session = Depends(get_db)) -> list[PropertyResponse]:
    """Get the properties the tenant currently lives in."""
    properties = tenant_service.get_current_residences(db, cognito_id)
    return [PropertyResponse.model_validate(p) for p in properties]


@router.post("/{cognito_id}/favorites/{property_id}", response_model=TenantWithFavorites)
def add_favorite_property(
    cognito_id: str,
    property_id: int,
    db: Session = Depends(get_db),
) -> TenantWithFavorites:
    """Add a property to the tenant's favorites (409 if already there)."""
    tenant = tenant_service.add_favorite_property(db, cognito_id, property_id)
    return TenantWithFavorites.model_validate(tenant)


@router.delete("/{cognito_id}/favorites/{property_id}", response_model=TenantWithFavorites)
def remove_favorite_property(
    cognito_id: str,
    property_id: int,
    db: Session = Depends(get_db),
) -> TenantWithFavorites:
    """Remove a property from the tenant's favorites."""
    tenant = tenant_service.remove_favorite_property(db, cognito_id, property_id)
    return TenantWithFavorites.model_validate(tenant)
