"""Property Pydantic schemas for request/response validation."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from app.models.enums import Amenity, Highlight, PropertyType
from app.models.geometry import point_to_coordinates
from app.schemas.common import CamelModel, Coordinates, Money


class LocationResponse(CamelModel):
    """Location with its geometry converted to a coordinate pair."""

    id: int
    address: str
    city: str
    state: str
    country: str
    postal_code: str
    coordinates: Coordinates

    @field_validator("coordinates", mode="before")
    @classmethod
    def convert_geometry(cls, v: Any) -> Any:
        """Never expose the stored geometry; convert it to longitude/latitude."""
        if isinstance(v, (dict, Coordinates)):
            return v
        return point_to_coordinates(v)


class PropertySummary(CamelModel):
    """Property fields without nested relations."""

    id: int
    name: str
    description: str
    price_per_month: Money
    security_deposit: Money
    application_fee: Money
    photo_urls: list[str]
    amenities: list[Amenity]
    highlights: list[Highlight]
    is_pets_allowed: bool
    is_parking_included: bool
    beds: int
    baths: float
    square_feet: int
    property_type: PropertyType
    posted_date: datetime
    average_rating: float | None = None
    number_of_reviews: int | None = None
    location_id: int
    manager_cognito_id: str

    @field_validator("amenities", mode="before")
    @classmethod
    def materialize_amenities(cls, v: Any) -> Any:
        """Association proxies are iterable but not lists."""
        return list(v) if v is not None else []


class PropertyResponse(PropertySummary):
    """Property with its resolved location."""

    location: LocationResponse


class PropertyCreate(CamelModel):
    """Schema for a manager listing a new property."""

    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    price_per_month: Money = Field(gt=0)
    security_deposit: Money = Field(ge=0)
    application_fee: Money = Field(default=0, ge=0)
    photo_urls: list[str] = []
    amenities: list[Amenity] = []
    highlights: list[Highlight] = []
    is_pets_allowed: bool = False
    is_parking_included: bool = False
    beds: int = Field(ge=0)
    baths: float = Field(ge=0)
    square_feet: int = Field(gt=0)
    property_type: PropertyType

    # Location
    address: str
    city: str
    state: str
    country: str
    postal_code: str
    longitude: float = Field(ge=-180, le=180)
    latitude: float = Field(ge=-90, le=90)

    @field_validator("amenities")
    @classmethod
    def dedupe_amenities(cls, v: list[Amenity]) -> list[Amenity]:
        """Each amenity is stored once per property."""
        return list(dict.fromkeys(v))
