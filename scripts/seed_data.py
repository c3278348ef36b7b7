"""Seed script to populate the database with sample data."""

from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from shapely.geometry import Point

from app.core.config import settings
from app.core.database import Database
from app.core.security import create_access_token
from app.main import app  # noqa: F401  (registers every model on the metadata)
from app.models.application import Application
from app.models.enums import (
    Amenity,
    ApplicationStatus,
    Highlight,
    PaymentStatus,
    PropertyType,
)
from app.models.location import Location
from app.models.manager import Manager
from app.models.payment import Payment
from app.models.property import Property
from app.models.tenant import Tenant
from app.services.lease import new_lease

LISTINGS = [
    {
        "name": "Mission Loft",
        "price": "2800",
        "deposit": "2800",
        "beds": 1,
        "baths": 1.0,
        "square_feet": 750,
        "property_type": PropertyType.APARTMENT,
        "amenities": [Amenity.WASHER_DRYER, Amenity.HIGH_SPEED_INTERNET, Amenity.HARDWOOD_FLOORS],
        "highlights": [Highlight.CLOSE_TO_TRANSIT, Highlight.RECENTLY_RENOVATED],
        "address": "2100 Mission St",
        "city": "San Francisco",
        "state": "CA",
        "postal_code": "94110",
        "coordinates": (-122.4194, 37.7626),
    },
    {
        "name": "Echo Park Bungalow",
        "price": "3400",
        "deposit": "3400",
        "beds": 2,
        "baths": 1.5,
        "square_feet": 1100,
        "property_type": PropertyType.COTTAGE,
        "amenities": [Amenity.PARKING, Amenity.PETS_ALLOWED, Amenity.AIR_CONDITIONING],
        "highlights": [Highlight.QUIET_NEIGHBORHOOD, Highlight.GREAT_VIEW],
        "address": "1500 Echo Park Ave",
        "city": "Los Angeles",
        "state": "CA",
        "postal_code": "90026",
        "coordinates": (-118.2606, 34.0781),
    },
    {
        "name": "Pearl District Villa",
        "price": "5200",
        "deposit": "6000",
        "beds": 4,
        "baths": 3.0,
        "square_feet": 2600,
        "property_type": PropertyType.VILLA,
        "amenities": [Amenity.POOL, Amenity.GYM, Amenity.PARKING, Amenity.DISHWASHER],
        "highlights": [Highlight.GREAT_VIEW, Highlight.SMOKE_FREE],
        "address": "1200 NW Glisan St",
        "city": "Portland",
        "state": "OR",
        "postal_code": "97209",
        "coordinates": (-122.6847, 45.5266),
    },
]


def _property(manager: Manager, listing: dict) -> Property:
    db_property = Property(
        name=listing["name"],
        description=f"{listing['name']} in {listing['city']}.",
        price_per_month=Decimal(listing["price"]),
        security_deposit=Decimal(listing["deposit"]),
        application_fee=Decimal("50"),
        highlights=[h.value for h in listing["highlights"]],
        is_pets_allowed=Amenity.PETS_ALLOWED in listing["amenities"],
        is_parking_included=Amenity.PARKING in listing["amenities"],
        beds=listing["beds"],
        baths=listing["baths"],
        square_feet=listing["square_feet"],
        property_type=listing["property_type"],
        location=Location(
            address=listing["address"],
            city=listing["city"],
            state=listing["state"],
            country="United States",
            postal_code=listing["postal_code"],
            coordinates=Point(*listing["coordinates"]),
        ),
        manager_cognito_id=manager.cognito_id,
    )
    db_property.amenities.extend(listing["amenities"])
    return db_property


def seed_database(database: Database) -> None:
    """Seed the database with sample data."""
    database.create_all()
    with database.session() as db:
        # Check if data already exists
        if db.query(Property).first():
            print("Database already has data. Skipping seed.")
            return

        print("Seeding database...")

        manager = Manager(
            cognito_id="seed-manager",
            name="Morgan Reyes",
            email="morgan@example.com",
            phone_number="555-0100",
        )
        tenants = [
            Tenant(cognito_id="seed-tenant-1", name="Alex Kim", email="alex@example.com", phone_number="555-0101"),
            Tenant(cognito_id="seed-tenant-2", name="Sam Patel", email="sam@example.com", phone_number="555-0102"),
        ]
        db.add(manager)
        db.add_all(tenants)
        db.flush()

        properties = [_property(manager, listing) for listing in LISTINGS]
        db.add_all(properties)
        db.flush()
        for db_property in properties:
            print(f"Created property: {db_property.name} (ID: {db_property.id})")

        # An approved application with a running lease and a few payments
        start = date(date.today().year, 1, 1)
        home = properties[0]
        lease = new_lease(home, tenants[0].cognito_id, today=start)
        db.add(lease)
        db.flush()
        db.add(
            Application(
                status=ApplicationStatus.APPROVED,
                name=tenants[0].name,
                email=tenants[0].email,
                phone_number=tenants[0].phone_number,
                message="Looking for a place close to work.",
                property_id=home.id,
                tenant_cognito_id=tenants[0].cognito_id,
                lease_id=lease.id,
            )
        )
        home.tenants.append(tenants[0])
        for month in range(3):
            due = start + relativedelta(months=month)
            paid = month < 2
            db.add(
                Payment(
                    amount_due=lease.rent,
                    amount_paid=lease.rent if paid else Decimal("0"),
                    due_date=due,
                    payment_date=due if paid else None,
                    payment_status=PaymentStatus.PAID if paid else PaymentStatus.PENDING,
                    lease_id=lease.id,
                )
            )

        # A pending application with its tentative lease
        tentative = new_lease(properties[1], tenants[1].cognito_id)
        db.add(tentative)
        db.flush()
        db.add(
            Application(
                status=ApplicationStatus.PENDING,
                name=tenants[1].name,
                email=tenants[1].email,
                phone_number=tenants[1].phone_number,
                property_id=properties[1].id,
                tenant_cognito_id=tenants[1].cognito_id,
                lease_id=tentative.id,
            )
        )
        tenants[1].favorites.extend(properties[1:])

    print("\nDatabase seeded successfully!")
    print("\nDevelopment tokens (shared-secret mode):")
    print(f"  manager  {create_access_token('seed-manager', 'manager')}")
    for tenant_id in ("seed-tenant-1", "seed-tenant-2"):
        print(f"  {tenant_id}  {create_access_token(tenant_id, 'tenant')}")


if __name__ == "__main__":
    database = Database(settings.DATABASE_URL)
    try:
        seed_database(database)
    finally:
        database.dispose()
