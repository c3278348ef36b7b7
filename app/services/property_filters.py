"""Property search filters.

Search parameters arrive as optional strings. Each parameter that is present
adds exactly one :class:`Predicate` to the builder; absent parameters (and the
``"any"`` sentinel where supported) add nothing. Predicates are plain data
until :func:`compile_predicates` turns them into SQLAlchemy expressions, so
every value reaches the database as a bound parameter.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from sqlalchemy import and_, true
from sqlalchemy.sql.elements import ColumnElement

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.models.enums import Amenity, PropertyType
from app.models.geometry import within_radius
from app.models.lease import Lease
from app.models.location import Location
from app.models.property import Property, PropertyAmenity

logger = get_logger("property_filters")

ANY = "any"


@dataclass(frozen=True)
class Predicate:
    """One filter clause: ``field <op> value``."""

    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class RadiusQuery:
    """Centre and radius (in degrees) of a location search."""

    longitude: float
    latitude: float
    degrees: float


def _present(raw: str | None) -> bool:
    return raw is not None and raw.strip() != ""


def _enabled(raw: str | None) -> bool:
    return _present(raw) and raw.strip().lower() != ANY


def _parse_number(name: str, raw: str) -> float:
    # float() and int() accept digit grouping such as 1_000
    if "_" in raw:
        raise ValidationError(f"Invalid number for {name}: {raw!r}")
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError(f"Invalid number for {name}: {raw!r}") from None
    if not math.isfinite(value):
        raise ValidationError(f"Invalid number for {name}: {raw!r}")
    return value


def _parse_int(name: str, raw: str) -> int:
    if "_" in raw:
        raise ValidationError(f"Invalid integer for {name}: {raw!r}")
    try:
        return int(raw.strip())
    except ValueError:
        raise ValidationError(f"Invalid integer for {name}: {raw!r}") from None


def _split(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _parse_date(raw: str) -> date | None:
    text = raw.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


class PropertyFilterBuilder:
    """Accumulates predicates from optional search parameters."""

    def __init__(
        self,
        radius_km: float | None = None,
        km_per_degree: float | None = None,
    ) -> None:
        self.radius_km = settings.SEARCH_RADIUS_KM if radius_km is None else radius_km
        self.km_per_degree = settings.KM_PER_DEGREE if km_per_degree is None else km_per_degree
        self.predicates: list[Predicate] = []

    def _add(self, field: str, op: str, value: Any) -> "PropertyFilterBuilder":
        self.predicates.append(Predicate(field, op, value))
        return self

    def favorite_ids(self, raw: str | None) -> "PropertyFilterBuilder":
        if _present(raw):
            ids = [_parse_int("favoriteIds", part) for part in _split(raw)]
            self._add("id", "in", tuple(ids))
        return self

    def price_range(self, minimum: str | None, maximum: str | None) -> "PropertyFilterBuilder":
        if _present(minimum):
            self._add("price_per_month", "ge", _parse_number("priceMin", minimum))
        if _present(maximum):
            self._add("price_per_month", "le", _parse_number("priceMax", maximum))
        return self

    def min_beds(self, raw: str | None) -> "PropertyFilterBuilder":
        if _enabled(raw):
            self._add("beds", "ge", _parse_number("beds", raw))
        return self

    def min_baths(self, raw: str | None) -> "PropertyFilterBuilder":
        if _enabled(raw):
            self._add("baths", "ge", _parse_number("baths", raw))
        return self

    def square_feet_range(self, minimum: str | None, maximum: str | None) -> "PropertyFilterBuilder":
        if _present(minimum):
            self._add("square_feet", "ge", _parse_number("squareFeetMin", minimum))
        if _present(maximum):
            self._add("square_feet", "le", _parse_number("squareFeetMax", maximum))
        return self

    def property_type(self, raw: str | None) -> "PropertyFilterBuilder":
        if _enabled(raw):
            try:
                value = PropertyType(raw.strip())
            except ValueError:
                raise ValidationError(f"Unknown propertyType: {raw!r}") from None
            self._add("property_type", "eq", value)
        return self

    def amenities(self, raw: str | None) -> "PropertyFilterBuilder":
        if _enabled(raw):
            try:
                wanted = tuple(dict.fromkeys(Amenity(part) for part in _split(raw)))
            except ValueError:
                raise ValidationError(f"Unknown amenity in: {raw!r}") from None
            if wanted:
                self._add("amenities", "contains_all", wanted)
        return self

    def available_from(self, raw: str | None) -> "PropertyFilterBuilder":
        if _enabled(raw):
            parsed = _parse_date(raw)
            if parsed is None:
                # An unreadable date means "no availability constraint"
                logger.info("Ignoring unparsable availableFrom=%r", raw)
            else:
                self._add("lease_start_date", "any_le", parsed)
        return self

    def near(self, latitude: str | None, longitude: str | None) -> "PropertyFilterBuilder":
        if _present(latitude) and _present(longitude):
            lat = _parse_number("latitude", latitude)
            lng = _parse_number("longitude", longitude)
            if not -90 <= lat <= 90:
                raise ValidationError(f"latitude out of range: {lat}")
            if not -180 <= lng <= 180:
                raise ValidationError(f"longitude out of range: {lng}")
            degrees = self.radius_km / self.km_per_degree
            self._add("coordinates", "within", RadiusQuery(lng, lat, degrees))
        return self

    @classmethod
    def from_params(
        cls,
        *,
        favorite_ids: str | None = None,
        price_min: str | None = None,
        price_max: str | None = None,
        beds: str | None = None,
        baths: str | None = None,
        property_type: str | None = None,
        square_feet_min: str | None = None,
        square_feet_max: str | None = None,
        amenities: str | None = None,
        available_from: str | None = None,
        latitude: str | None = None,
        longitude: str | None = None,
    ) -> "PropertyFilterBuilder":
        """Build from the raw query-string values of a search request."""
        return (
            cls()
            .favorite_ids(favorite_ids)
            .price_range(price_min, price_max)
            .min_beds(beds)
            .min_baths(baths)
            .property_type(property_type)
            .square_feet_range(square_feet_min, square_feet_max)
            .amenities(amenities)
            .available_from(available_from)
            .near(latitude, longitude)
        )

    def build(self) -> list[Predicate]:
        return list(self.predicates)


COLUMNS: dict[str, Any] = {
    "id": Property.id,
    "price_per_month": Property.price_per_month,
    "beds": Property.beds,
    "baths": Property.baths,
    "square_feet": Property.square_feet,
    "property_type": Property.property_type,
}


def _contains_all(value: tuple[Amenity, ...]) -> ColumnElement[bool]:
    return and_(*(Property.amenity_rows.any(PropertyAmenity.amenity == amenity) for amenity in value))


def _any_lease_started_by(value: date) -> ColumnElement[bool]:
    return Property.leases.any(Lease.start_date <= value)


def _within(value: RadiusQuery) -> ColumnElement[bool]:
    return within_radius(Location.coordinates, value.longitude, value.latitude, value.degrees)


SPECIAL_OPS: dict[tuple[str, str], Callable[[Any], ColumnElement[bool]]] = {
    ("amenities", "contains_all"): _contains_all,
    ("lease_start_date", "any_le"): _any_lease_started_by,
    ("coordinates", "within"): _within,
}

COLUMN_OPS: dict[str, Callable[[Any, Any], ColumnElement[bool]]] = {
    "eq": lambda column, value: column == value,
    "ge": lambda column, value: column >= value,
    "le": lambda column, value: column <= value,
    "in": lambda column, value: column.in_(value),
}


def compile_predicate(predicate: Predicate) -> ColumnElement[bool]:
    """Translate one predicate into a SQLAlchemy boolean expression."""
    special = SPECIAL_OPS.get((predicate.field, predicate.op))
    if special is not None:
        return special(predicate.value)
    try:
        column = COLUMNS[predicate.field]
        op = COLUMN_OPS[predicate.op]
    except KeyError:
        raise ValueError(f"Unsupported predicate {predicate.field} {predicate.op}") from None
    return op(column, predicate.value)


def compile_predicates(predicates: list[Predicate]) -> ColumnElement[bool]:
    """AND together all predicates; no predicates matches every property."""
    if not predicates:
        return true()
    return and_(*(compile_predicate(p) for p in predicates))
