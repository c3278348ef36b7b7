"""Location database model."""

from typing import TYPE_CHECKING

from shapely.geometry import Point as ShapelyPoint
from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.geometry import Point

if TYPE_CHECKING:
    from app.models.property import Property


class Location(Base):
    """Street address and geographic point of a property."""

    __tablename__ = "locations"
    __table_args__ = (Index("ix_locations_coordinates", "coordinates", postgresql_using="gist"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    address: Mapped[str] = mapped_column(String(255))
    city: Mapped[str] = mapped_column(String(100))
    state: Mapped[str] = mapped_column(String(100))
    country: Mapped[str] = mapped_column(String(100))
    postal_code: Mapped[str] = mapped_column(String(20))
    coordinates: Mapped[ShapelyPoint] = mapped_column(Point())  # (longitude, latitude)

    property: Mapped["Property | None"] = relationship(back_populates="location")
