"""Payment database model."""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.enums import PaymentStatus, str_enum

if TYPE_CHECKING:
    from app.models.lease import Lease


class Payment(Base):
    """Rent payment record attached to a lease."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    amount_due: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2))
    amount_paid: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        default=Decimal("0"),
    )
    due_date: Mapped[date] = mapped_column(index=True)
    payment_date: Mapped[date | None] = mapped_column(nullable=True)
    payment_status: Mapped[PaymentStatus] = mapped_column(
        str_enum(PaymentStatus),
        default=PaymentStatus.PENDING,
    )

    lease_id: Mapped[int] = mapped_column(ForeignKey("leases.id"), index=True)

    lease: Mapped["Lease"] = relationship(back_populates="payments")
