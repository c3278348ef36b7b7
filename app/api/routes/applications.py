"""Application API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import require_roles
from app.schemas.application import (
    ApplicationCreate,
    ApplicationListItem,
    ApplicationResponse,
    ApplicationStatusUpdate,
)
from app.services import application as application_service

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get(
    "",
    response_model=list[ApplicationListItem],
    dependencies=[Depends(require_roles("manager", "tenant"))],
)
def list_applications(
    user_id: str | None = Query(None, alias="userId"),
    user_type: str | None = Query(None, alias="userType", description='"tenant" or "manager"'),
    db: Session = Depends(get_db),
) -> list[ApplicationListItem]:
    """List applications with their latest lease and next payment date."""
    return application_service.list_applications(db, user_id, user_type)


@router.post(
    "",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles("tenant"))],
)
def create_application(
    data: ApplicationCreate,
    db: Session = Depends(get_db),
) -> ApplicationResponse:
    """Submit an application; a tentative lease is created alongside it."""
    application = application_service.create_application(db, data)
    return ApplicationResponse.model_validate(application)


@router.put(
    "/{application_id}/status",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles("manager"))],
)
def update_application_status(
    application_id: int,
    data: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
) -> ApplicationResponse:
    """Approve or deny an application."""
    application = application_service.update_application_status(db, application_id, data.status)
    return ApplicationResponse.model_validate(application)
