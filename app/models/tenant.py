"""Tenant database model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.application import Application
    from app.models.lease import Lease
    from app.models.property import Property


class Tenant(Base):
    """Renter, keyed externally by their identity-provider subject."""

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    cognito_id: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))
    phone_number: Mapped[str] = mapped_column(String(50))

    # Relationships
    favorites: Mapped[list["Property"]] = relationship(
        secondary="tenant_favorites",
        back_populates="favorited_by",
    )
    properties: Mapped[list["Property"]] = relationship(
        secondary="tenant_properties",
        back_populates="tenants",
    )
    leases: Mapped[list["Lease"]] = relationship(back_populates="tenant")
    applications: Mapped[list["Application"]] = relationship(back_populates="tenant")
