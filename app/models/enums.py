"""Enum definitions shared by models and schemas."""

from enum import Enum

from sqlalchemy import Enum as SAEnum


class PropertyType(str, Enum):
    """Kind of dwelling offered."""

    ROOMS = "Rooms"
    TINYHOUSE = "Tinyhouse"
    APARTMENT = "Apartment"
    VILLA = "Villa"
    TOWNHOUSE = "Townhouse"
    COTTAGE = "Cottage"


class Amenity(str, Enum):
    """Searchable amenities of a property."""

    WASHER_DRYER = "WasherDryer"
    AIR_CONDITIONING = "AirConditioning"
    DISHWASHER = "Dishwasher"
    HIGH_SPEED_INTERNET = "HighSpeedInternet"
    HARDWOOD_FLOORS = "HardwoodFloors"
    WALK_IN_CLOSETS = "WalkInClosets"
    MICROWAVE = "Microwave"
    REFRIGERATOR = "Refrigerator"
    POOL = "Pool"
    GYM = "Gym"
    PARKING = "Parking"
    PETS_ALLOWED = "PetsAllowed"
    WIFI = "WiFi"


class Highlight(str, Enum):
    """Listing highlights shown to tenants (not searchable)."""

    HIGH_SPEED_INTERNET_ACCESS = "HighSpeedInternetAccess"
    WASHER_DRYER = "WasherDryer"
    AIR_CONDITIONING = "AirConditioning"
    HEATING = "Heating"
    SMOKE_FREE = "SmokeFree"
    CABLE_READY = "CableReady"
    SATELLITE_TV = "SatelliteTV"
    DOUBLE_VANITIES = "DoubleVanities"
    TUB_SHOWER = "TubShower"
    INTERCOM = "Intercom"
    SPRINKLER_SYSTEM = "SprinklerSystem"
    RECENTLY_RENOVATED = "RecentlyRenovated"
    CLOSE_TO_TRANSIT = "CloseToTransit"
    GREAT_VIEW = "GreatView"
    QUIET_NEIGHBORHOOD = "QuietNeighborhood"


class ApplicationStatus(str, Enum):
    """Rental application lifecycle: Pending, then Approved or Denied."""

    PENDING = "Pending"
    DENIED = "Denied"
    APPROVED = "Approved"


class PaymentStatus(str, Enum):
    """State of a single rent payment."""

    PENDING = "Pending"
    PAID = "Paid"
    PARTIALLY_PAID = "PartiallyPaid"
    OVERDUE = "Overdue"


def str_enum(enum_cls: type[Enum]) -> SAEnum:
    """Column type that stores an enum by its value as a VARCHAR."""
    return SAEnum(
        enum_cls,
        native_enum=False,
        values_callable=lambda members: [member.value for member in members],
        length=32,
    )
