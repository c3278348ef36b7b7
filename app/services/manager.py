"""Manager service for business logic."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.manager import Manager
from app.models.property import Property
from app.schemas.manager import ManagerCreate, ManagerUpdate
from app.services import property as property_service

logger = get_logger("managers")


def get_manager(db: Session, cognito_id: str) -> Manager:
    """Get a manager by identity subject."""
    manager = db.query(Manager).filter(Manager.cognito_id == cognito_id).first()
    if not manager:
        raise NotFoundError("Manager not found")
    return manager


def create_manager(db: Session, manager_data: ManagerCreate) -> Manager:
    """Register a manager."""
    existing = db.query(Manager).filter(Manager.cognito_id == manager_data.cognito_id).first()
    if existing:
        raise ConflictError("Manager already exists")

    manager = Manager(
        cognito_id=manager_data.cognito_id,
        name=manager_data.name,
        email=manager_data.email,
        phone_number=manager_data.phone_number,
    )
    db.add(manager)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Manager already exists") from None
    db.refresh(manager)
    logger.info("Created manager %s", manager.cognito_id)
    return manager


def update_manager(db: Session, cognito_id: str, manager_data: ManagerUpdate) -> Manager:
    """Update a manager's contact fields."""
    manager = get_manager(db, cognito_id)

    update_data = manager_data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(manager, field, value)

    db.commit()
    db.refresh(manager)
    return manager


def get_manager_properties(db: Session, cognito_id: str) -> list[Property]:
    """Get the properties a manager owns."""
    get_manager(db, cognito_id)
    return property_service.get_manager_properties(db, cognito_id)
