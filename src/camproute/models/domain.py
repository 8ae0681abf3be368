"""Domain models for trip stops and vehicles."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class WaypointKind(str, Enum):
    START = "start"
    END = "end"
    INTERMEDIATE = "intermediate"
    CAMPSITE = "campsite"
    ACCOMMODATION = "accommodation"

    @classmethod
    def _missing_(cls, value: object) -> Optional["WaypointKind"]:
        # Routes saved by the browser store intermediate stops as "waypoint".
        if isinstance(value, str) and value.lower() == "waypoint":
            return cls.INTERMEDIATE
        return None


class VehicleType(str, Enum):
    MOTORHOME = "motorhome"
    CARAVAN = "caravan"
    CAMPERVAN = "campervan"


class FuelType(str, Enum):
    DIESEL = "diesel"
    PETROL = "petrol"
    LPG = "lpg"
    ELECTRIC = "electric"


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


OVERNIGHT_KINDS = frozenset({WaypointKind.CAMPSITE, WaypointKind.ACCOMMODATION})


@dataclass(frozen=True, slots=True)
class Waypoint:
    """A single stop of a trip. The engine reorders and copies waypoints but never edits them."""

    id: str
    lat: float
    lng: float
    name: str
    kind: WaypointKind = WaypointKind.INTERMEDIATE
    visit_date: Optional[date] = None
    stay_duration_hours: Optional[float] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", WaypointKind(self.kind))

    @property
    def is_overnight_stop(self) -> bool:
        return self.kind in OVERNIGHT_KINDS and self.stay_duration_hours is not None


@dataclass(frozen=True, slots=True)
class VehicleProfile:
    """Physical dimensions of the camper. Only used to derive driving limits and fuel cost."""

    height_m: float
    width_m: float
    length_m: float
    weight_t: float
    vehicle_type: VehicleType = VehicleType.MOTORHOME
    fuel_type: FuelType = FuelType.DIESEL

    def __post_init__(self) -> None:
        object.__setattr__(self, "vehicle_type", VehicleType(self.vehicle_type))
        object.__setattr__(self, "fuel_type", FuelType(self.fuel_type))
