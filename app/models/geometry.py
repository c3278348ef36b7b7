"""Point geometry column type and spatial SQL helpers.

Coordinates are stored longitude first (x) and latitude second (y) in SRID 4326.
On PostgreSQL the column is a native PostGIS ``geometry(POINT,4326)``; other
dialects keep the point as WKT text so local databases work without PostGIS.
"""

from typing import Any

from geoalchemy2 import Geometry
from geoalchemy2.elements import WKBElement, WKTElement
from geoalchemy2.shape import to_shape
from shapely import wkt
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import mapping
from sqlalchemy import Boolean, String, func
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement
from sqlalchemy.types import TypeDecorator

SRID = 4326


def as_point(value: Any) -> ShapelyPoint:
    """Coerce a shapely point, WKT string or ``(longitude, latitude)`` pair to a point."""
    if isinstance(value, ShapelyPoint):
        return value
    if isinstance(value, str):
        geom = wkt.loads(value)
        if not isinstance(geom, ShapelyPoint):
            raise ValueError(f"Expected a POINT, got {geom.geom_type}")
        return geom
    longitude, latitude = value
    return ShapelyPoint(float(longitude), float(latitude))


class Point(TypeDecorator):
    """POINT geometry that round-trips as a shapely ``Point``."""

    impl = String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(Geometry(geometry_type="POINT", srid=SRID))
        return dialect.type_descriptor(String(64))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        point = as_point(value)
        if dialect.name == "postgresql":
            return WKTElement(point.wkt, srid=SRID)
        return point.wkt

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, (WKBElement, WKTElement)):
            return to_shape(value)
        return wkt.loads(value)


def point_to_coordinates(point: ShapelyPoint | None) -> dict[str, float] | None:
    """Convert a stored point to ``{"longitude": x, "latitude": y}`` via GeoJSON."""
    if point is None:
        return None
    longitude, latitude = mapping(point)["coordinates"][:2]
    return {"longitude": longitude, "latitude": latitude}


class within_radius(FunctionElement):
    """``within_radius(geom, longitude, latitude, degrees)``: planar distance test in degrees."""

    type = Boolean()
    name = "within_radius"
    inherit_cache = True


@compiles(within_radius, "postgresql")
def _compile_within_radius_postgresql(element, compiler, **kw):
    geom, longitude, latitude, degrees = list(element.clauses)
    origin = func.ST_SetSRID(func.ST_MakePoint(longitude, latitude), SRID)
    return compiler.process(func.ST_DWithin(geom, origin, degrees), **kw)


@compiles(within_radius)
def _compile_within_radius(element, compiler, **kw):
    return compiler.process(func.within_degrees(*element.clauses), **kw)


def _within_degrees(geom_wkt: str | None, longitude: float, latitude: float, degrees: float) -> int | None:
    if geom_wkt is None or longitude is None or latitude is None or degrees is None:
        return None
    distance = wkt.loads(geom_wkt).distance(ShapelyPoint(longitude, latitude))
    return int(distance <= degrees)


def register_sqlite_functions(dbapi_connection) -> None:
    """Make ``within_degrees`` available on a raw SQLite connection."""
    dbapi_connection.create_function("within_degrees", 4, _within_degrees, deterministic=True)
