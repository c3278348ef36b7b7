"""Property service for business logic."""

from shapely.geometry import Point as ShapelyPoint
from sqlalchemy.orm import Session, contains_eager, joinedload

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.models.location import Location
from app.models.manager import Manager
from app.models.property import Property
from app.models.tenant import Tenant
from app.schemas.property import PropertyCreate
from app.services.property_filters import Predicate, compile_predicates

logger = get_logger("properties")


def search_properties(db: Session, predicates: list[Predicate]) -> list[Property]:
    """Get properties matching every predicate, with locations loaded."""
    return (
        db.query(Property)
        .join(Property.location)
        .options(contains_eager(Property.location))
        .filter(compile_predicates(predicates))
        .order_by(Property.id)
        .all()
    )


def get_property(db: Session, property_id: int) -> Property:
    """Get a property by ID."""
    db_property = (
        db.query(Property)
        .options(joinedload(Property.location))
        .filter(Property.id == property_id)
        .first()
    )
    if not db_property:
        raise NotFoundError("Property not found")
    return db_property


def create_property(db: Session, manager_cognito_id: str, property_data: PropertyCreate) -> Property:
    """Create a property and its location for a manager."""
    manager = db.query(Manager).filter(Manager.cognito_id == manager_cognito_id).first()
    if not manager:
        raise NotFoundError("Manager not found")

    location = Location(
        address=property_data.address,
        city=property_data.city,
        state=property_data.state,
        country=property_data.country,
        postal_code=property_data.postal_code,
        coordinates=ShapelyPoint(property_data.longitude, property_data.latitude),
    )
    db_property = Property(
        name=property_data.name,
        description=property_data.description,
        price_per_month=property_data.price_per_month,
        security_deposit=property_data.security_deposit,
        application_fee=property_data.application_fee,
        photo_urls=property_data.photo_urls,
        highlights=[h.value for h in property_data.highlights],
        is_pets_allowed=property_data.is_pets_allowed,
        is_parking_included=property_data.is_parking_included,
        beds=property_data.beds,
        baths=property_data.baths,
        square_feet=property_data.square_feet,
        property_type=property_data.property_type,
        location=location,
        manager_cognito_id=manager.cognito_id,
    )
    db_property.amenities.extend(property_data.amenities)
    db.add(db_property)
    db.commit()
    db.refresh(db_property)
    logger.info("Manager %s listed property %s", manager.cognito_id, db_property.id)
    return db_property


def get_manager_properties(db: Session, cognito_id: str) -> list[Property]:
    """Get all properties owned by a manager."""
    return (
        db.query(Property)
        .options(joinedload(Property.location))
        .filter(Property.manager_cognito_id == cognito_id)
        .order_by(Property.id)
        .all()
    )


def get_current_residences(db: Session, cognito_id: str) -> list[Property]:
    """Get the properties a tenant currently lives in."""
    return (
        db.query(Property)
        .options(joinedload(Property.location))
        .filter(Property.tenants.any(Tenant.cognito_id == cognito_id))
        .order_by(Property.id)
        .all()
    )
