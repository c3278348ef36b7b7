"""Property API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import Principal, require_roles
from app.schemas.lease import LeaseDetail
from app.schemas.property import PropertyCreate, PropertyResponse
from app.services import lease as lease_service
from app.services import property as property_service
from app.services.property_filters import PropertyFilterBuilder

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=list[PropertyResponse])
def list_properties(
    favorite_ids: str | None = Query(None, alias="favoriteIds", description="Comma-separated property IDs"),
    price_min: str | None = Query(None, alias="priceMin"),
    price_max: str | None = Query(None, alias="priceMax"),
    beds: str | None = Query(None, description='Minimum beds, or "any"'),
    baths: str | None = Query(None, description='Minimum baths, or "any"'),
    property_type: str | None = Query(None, alias="propertyType"),
    square_feet_min: str | None = Query(None, alias="squareFeetMin"),
    square_feet_max: str | None = Query(None, alias="squareFeetMax"),
    amenities: str | None = Query(None, description='Comma-separated amenities, or "any"'),
    available_from: str | None = Query(None, alias="availableFrom"),
    latitude: str | None = Query(None),
    longitude: str | None = Query(None),
    db: Session = Depends(get_db),
) -> list[PropertyResponse]:
    """
    Search properties.

    Every filter is optional; the ones given are combined with AND. With both
    latitude and longitude, only properties within the search radius are returned.
    """
    filters = PropertyFilterBuilder.from_params(
        favorite_ids=favorite_ids,
        price_min=price_min,
        price_max=price_max,
        beds=beds,
        baths=baths,
        property_type=property_type,
        square_feet_min=square_feet_min,
        square_feet_max=square_feet_max,
        amenities=amenities,
        available_from=available_from,
        latitude=latitude,
        longitude=longitude,
    )
    properties = property_service.search_properties(db, filters.build())
    return [PropertyResponse.model_validate(p) for p in properties]


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: int,
    db: Session = Depends(get_db),
) -> PropertyResponse:
    """Get a property by ID."""
    return PropertyResponse.model_validate(property_service.get_property(db, property_id))


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    property_data: PropertyCreate,
    principal: Principal = Depends(require_roles("manager")),
    db: Session = Depends(get_db),
) -> PropertyResponse:
    """List a new property owned by the calling manager."""
    db_property = property_service.create_property(db, principal.subject, property_data)
    return PropertyResponse.model_validate(db_property)


@router.get(
    "/{property_id}/leases",
    response_model=list[LeaseDetail],
    dependencies=[Depends(require_roles("manager", "tenant"))],
)
def get_property_leases(
    property_id: int,
    db: Session = Depends(get_db),
) -> list[LeaseDetail]:
    """Get the leases of a property."""
    leases = lease_service.get_property_leases(db, property_id)
    return [LeaseDetail.model_validate(lease) for lease in leases]
