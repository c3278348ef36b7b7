"""Application database model."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.enums import ApplicationStatus, str_enum

if TYPE_CHECKING:
    from app.models.lease import Lease
    from app.models.property import Property
    from app.models.tenant import Tenant


class Application(Base):
    """A tenant's request to rent a property."""

    __tablename__ = "applications"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    application_date: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    status: Mapped[ApplicationStatus] = mapped_column(
        str_enum(ApplicationStatus),
        default=ApplicationStatus.PENDING,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))
    phone_number: Mapped[str] = mapped_column(String(50))
    message: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Foreign keys
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id"), index=True)
    tenant_cognito_id: Mapped[str] = mapped_column(
        ForeignKey("tenants.cognito_id"),
        index=True,
    )
    lease_id: Mapped[int | None] = mapped_column(
        ForeignKey("leases.id"),
        unique=True,
        nullable=True,
    )

    # Relationships
    property: Mapped["Property"] = relationship(back_populates="applications")
    tenant: Mapped["Tenant"] = relationship(back_populates="applications")
    lease: Mapped["Lease | None"] = relationship(back_populates="application")
