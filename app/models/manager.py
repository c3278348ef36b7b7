"""Manager database model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.property import Property


class Manager(Base):
    """Property manager, keyed externally by their identity-provider subject."""

    __tablename__ = "managers"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    cognito_id: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))
    phone_number: Mapped[str] = mapped_column(String(50))

    managed_properties: Mapped[list["Property"]] = relationship(back_populates="manager")
