"""Manager API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import require_roles
from app.schemas.manager import ManagerCreate, ManagerResponse, ManagerUpdate
from app.schemas.property import PropertyResponse
from app.services import manager as manager_service

router = APIRouter(
    prefix="/managers",
    tags=["managers"],
    dependencies=[Depends(require_roles("manager"))],
)


@router.get("/{cognito_id}", response_model=ManagerResponse)
def get_manager(cognito_id: str, db: Session = Depends(get_db)) -> ManagerResponse:
    """Get a manager by identity subject."""
    return ManagerResponse.model_validate(manager_service.get_manager(db, cognito_id))


@router.post("", response_model=ManagerResponse, status_code=status.HTTP_201_CREATED)
def create_manager(manager_data: ManagerCreate, db: Session = Depends(get_db)) -> ManagerResponse:
    """Register a manager."""
    return ManagerResponse.model_validate(manager_service.create_manager(db, manager_data))


@router.put("/{cognito_id}", response_model=ManagerResponse)
def update_manager(
    cognito_id: str,
    manager_data: ManagerUpdate,
    db: Session = Depends(get_db),
) -> ManagerResponse:
    """Update a manager's contact details."""
    return ManagerResponse.model_validate(
        manager_service.update_manager(db, cognito_id, manager_data)
    )


@router.get("/{cognito_id}/properties", response_model=list[PropertyResponse])
def get_manager_properties(cognito_id: str, db: Session = Depends(get_db)) -> list[PropertyResponse]:
    """Get the properties a manager owns, with coordinates."""
    properties = manager_service.get_manager_properties(db, cognito_id)
    return [PropertyResponse.model_validate(p) for p in properties]
