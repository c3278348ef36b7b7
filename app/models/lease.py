"""Lease database model."""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.application import Application
    from app.models.payment import Payment
    from app.models.property import Property
    from app.models.tenant import Tenant


class Lease(Base):
    """Fixed-term rental contract between a tenant and a property."""

    __tablename__ = "leases"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    start_date: Mapped[date] = mapped_column(index=True)
    end_date: Mapped[date]
    rent: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2))
    deposit: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2))

    # Foreign keys
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id"), index=True)
    tenant_cognito_id: Mapped[str] = mapped_column(
        ForeignKey("tenants.cognito_id"),
        index=True,
    )

    # Relationships
    property: Mapped["Property"] = relationship(back_populates="leases")
    tenant: Mapped["Tenant"] = relationship(back_populates="leases")
    application: Mapped["Application | None"] = relationship(back_populates="lease")
    payments: Mapped[list["Payment"]] = relationship(back_populates="lease")
