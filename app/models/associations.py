"""Association tables for many-to-many relationships."""

from sqlalchemy import Column, ForeignKey, Table

from app.core.database import Base

# Many-to-many: Tenant <-> Property (favorites)
tenant_favorites = Table(
    "tenant_favorites",
    Base.metadata,
    Column("tenant_id", ForeignKey("tenants.id", ondelete="CASCADE"), primary_key=True),
    Column("property_id", ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True),
)

# Many-to-many: Tenant <-> Property (current residents)
tenant_properties = Table(
    "tenant_properties",
    Base.metadata,
    Column("tenant_id", ForeignKey("tenants.id", ondelete="CASCADE"), primary_key=True),
    Column("property_id", ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True),
)
