"""Property database model."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import JSON, ForeignKey, Numeric, String, Text
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.enums import Amenity, PropertyType, str_enum

if TYPE_CHECKING:
    from app.models.application import Application
    from app.models.lease import Lease
    from app.models.location import Location
    from app.models.manager import Manager
    from app.models.tenant import Tenant


class PropertyAmenity(Base):
    """One amenity of a property; a row per amenity keeps superset filters portable."""

    __tablename__ = "property_amenities"

    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        primary_key=True,
    )
    amenity: Mapped[Amenity] = mapped_column(str_enum(Amenity), primary_key=True)


class Property(Base):
    """Rental listing owned by a manager."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text, default="")
    price_per_month: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), index=True)
    security_deposit: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2))
    application_fee: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        default=Decimal("0"),
    )
    photo_urls: Mapped[list[str]] = mapped_column(JSON, default=list)
    highlights: Mapped[list[str]] = mapped_column(JSON, default=list)
    is_pets_allowed: Mapped[bool] = mapped_column(default=False)
    is_parking_included: Mapped[bool] = mapped_column(default=False)
    beds: Mapped[int]
    baths: Mapped[float]
    square_feet: Mapped[int]
    property_type: Mapped[PropertyType] = mapped_column(str_enum(PropertyType), index=True)
    posted_date: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    average_rating: Mapped[float | None] = mapped_column(default=0.0, nullable=True)
    number_of_reviews: Mapped[int | None] = mapped_column(default=0, nullable=True)

    # Foreign keys
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), unique=True)
    manager_cognito_id: Mapped[str] = mapped_column(
        ForeignKey("managers.cognito_id"),
        index=True,
    )

    # Relationships
    location: Mapped["Location"] = relationship(back_populates="property")
    manager: Mapped["Manager"] = relationship(back_populates="managed_properties")
    leases: Mapped[list["Lease"]] = relationship(back_populates="property")
    applications: Mapped[list["Application"]] = relationship(back_populates="property")
    tenants: Mapped[list["Tenant"]] = relationship(
        secondary="tenant_properties",
        back_populates="properties",
    )
    favorited_by: Mapped[list["Tenant"]] = relationship(
        secondary="tenant_favorites",
        back_populates="favorites",
    )
    amenity_rows: Mapped[list[PropertyAmenity]] = relationship(
        cascade="all, delete-orphan",
        order_by="PropertyAmenity.amenity",
        lazy="selectin",
    )

    amenities: AssociationProxy[list[Amenity]] = association_proxy(
        "amenity_rows",
        "amenity",
        creator=lambda amenity: PropertyAmenity(amenity=Amenity(amenity)),
    )
