# energywise/utils/devices.py
"""
Household records (rooms and their appliances) and the input checks applied
before they reach the consumption calculator.
"""
import math
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from energywise.errors import InvalidInput

MAX_DAILY_USAGE_HOURS = 24
MIN_POWER_WATTS = 1

# match the column sizes in energywise/models.py
MAX_NAME_LENGTH = 100
MAX_ID_LENGTH = 64


def new_id(prefix):
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


@dataclass
class Appliance:
    """An appliance inside a room. power in watts, daily_usage_hours in [0, 24]."""
    id: str
    name: str
    power: float
    daily_usage_hours: float

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "power": self.power,
            "dailyUsageHours": self.daily_usage_hours,
        }


@dataclass
class Room:
    id: str
    name: str
    appliances: List[Appliance] = field(default_factory=list)

    def find_appliance(self, appliance_id) -> Optional[Appliance]:
        for appliance in self.appliances:
            if appliance.id == appliance_id:
                return appliance
        return None

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "appliances": [a.to_dict() for a in self.appliances],
        }


@dataclass
class HouseholdState:
    """Snapshot persisted by the household store: every room plus the tariff."""
    rooms: List[Room]
    cost_per_kwh: float

    def find_room(self, room_id) -> Optional[Room]:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def to_dict(self) -> Dict:
        return {
            "rooms": [r.to_dict() for r in self.rooms],
            "costPerKWh": self.cost_per_kwh,
        }


def default_state(cost_per_kwh=0.75):
    """Demo household shown before anything has been saved."""
    return HouseholdState(
        rooms=[
            Room(
                id="room-1",
                name="Sala de Estar",
                appliances=[
                    Appliance("app-1", 'TV 60"', 150, 5),
                    Appliance("app-2", "Videogame", 200, 2),
                    Appliance("app-3", "Ar Condicionado", 1500, 8),
                ],
            ),
            Room(
                id="room-2",
                name="Cozinha",
                appliances=[
                    Appliance("app-4", "Geladeira", 100, 24),
                    Appliance("app-5", "Micro-ondas", 1200, 0.5),
                ],
            ),
        ],
        cost_per_kwh=cost_per_kwh,
    )


def _number(value, field_name):
    if isinstance(value, bool) or value is None:
        raise InvalidInput(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise InvalidInput(f"{field_name} must be a finite number")
    return number


def _name(data, field_name="name"):
    name = data.get(field_name)
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput(f"{field_name} is required")
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidInput(f"{field_name} cannot exceed {MAX_NAME_LENGTH} characters")
    return name


def _record_id(data, prefix):
    """Caller-supplied id as a string, or a fresh one when absent."""
    value = data.get("id")
    if value is None or value == "":
        return new_id(prefix)
    if isinstance(value, (bool, dict, list)):
        raise InvalidInput("id must be a string or number")
    value = str(value)
    if len(value) > MAX_ID_LENGTH:
        raise InvalidInput(f"id cannot exceed {MAX_ID_LENGTH} characters")
    return value


def validate_room_payload(data):
    if not isinstance(data, dict):
        raise InvalidInput("expected a JSON object")
    return _name(data)


def validate_appliance_payload(data):
    """
    Check an appliance form/JSON payload and return (name, power, daily_usage_hours).
    Power must be at least 1 W, usage between 0 and 24 hours.
    """
    if not isinstance(data, dict):
        raise InvalidInput("expected a JSON object")
    name = _name(data)
    power = _number(data.get("power"), "power")
    if power < MIN_POWER_WATTS:
        raise InvalidInput("power must be greater than 0")
    hours = _number(data.get("dailyUsageHours"), "dailyUsageHours")
    if hours < 0:
        raise InvalidInput("dailyUsageHours cannot be negative")
    if hours > MAX_DAILY_USAGE_HOURS:
        raise InvalidInput("dailyUsageHours cannot exceed 24 hours")
    return name, power, hours


def parse_tariff(data):
    if not isinstance(data, dict):
        raise InvalidInput("expected a JSON object")
    return _number(data.get("costPerKWh"), "costPerKWh")


def parse_household_payload(data, default_cost_per_kwh=0.75):
    """
    Build a HouseholdState from a {rooms, costPerKWh} document (API body or
    seed file). Every room and appliance goes through the same checks as the
    single-item endpoints; missing ids are generated, repeated ids rejected.
    """
    if not isinstance(data, dict) or not isinstance(data.get("rooms", []), list):
        raise InvalidInput("expected {rooms: [...], costPerKWh: number}")

    rooms = []
    room_ids = set()
    for room_data in data.get("rooms", []):
        room_name = validate_room_payload(room_data)
        room_id = _record_id(room_data, "room")
        if room_id in room_ids:
            raise InvalidInput(f"duplicate room id {room_id}")
        room_ids.add(room_id)

        if not isinstance(room_data.get("appliances", []), list):
            raise InvalidInput("room appliances must be a list")
        appliances = []
        appliance_ids = set()
        for appliance_data in room_data.get("appliances", []):
            name, power, hours = validate_appliance_payload(appliance_data)
            appliance_id = _record_id(appliance_data, "app")
            if appliance_id in appliance_ids:
                raise InvalidInput(f"duplicate appliance id {appliance_id} in room {room_id}")
            appliance_ids.add(appliance_id)
            appliances.append(Appliance(
                id=appliance_id, name=name, power=power, daily_usage_hours=hours,
            ))
        rooms.append(Room(id=room_id, name=room_name, appliances=appliances))

    # only an absent/null tariff falls back; an explicit 0 is kept as 0
    if data.get("costPerKWh") is None:
        cost_per_kwh = default_cost_per_kwh
    else:
        cost_per_kwh = parse_tariff(data)
    return HouseholdState(rooms=rooms, cost_per_kwh=cost_per_kwh)
