# energywise/store.py
import logging

from sqlalchemy.exc import SQLAlchemyError

from energywise.errors import PersistFailed
from energywise.models import ApplianceRecord, HouseholdRecord, RoomRecord
from energywise.utils.devices import Appliance, HouseholdState, Room

logger = logging.getLogger(__name__)


class HouseholdStore:
    """
    Keeps a single household snapshot ({rooms, costPerKWh}) in the database.
    load() returns None until something has been saved.
    """

    def __init__(self, session):
        self.session = session

    def load(self):
        record = self.session.query(HouseholdRecord).order_by(HouseholdRecord.id).first()
        if record is None:
            return None
        return HouseholdState(
            rooms=[
                Room(
                    id=room.room_key,
                    name=room.name,
                    appliances=[
                        Appliance(
                            id=a.appliance_key,
                            name=a.name,
                            power=a.power,
                            daily_usage_hours=a.daily_usage_hours,
                        )
                        for a in room.appliances
                    ],
                )
                for room in record.rooms
            ],
            cost_per_kwh=record.cost_per_kwh,
        )

    def save(self, state):
        try:
            for old in self.session.query(HouseholdRecord).all():
                self.session.delete(old)

            record = HouseholdRecord(cost_per_kwh=state.cost_per_kwh)
            for room_pos, room in enumerate(state.rooms):
                room_record = RoomRecord(room_key=room.id, name=room.name, position=room_pos)
                for app_pos, appliance in enumerate(room.appliances):
                    room_record.appliances.append(ApplianceRecord(
                        appliance_key=appliance.id,
                        name=appliance.name,
                        power=appliance.power,
                        daily_usage_hours=appliance.daily_usage_hours,
                        position=app_pos,
                    ))
                record.rooms.append(room_record)

            self.session.add(record)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Failed to save household: %s", e)
            raise PersistFailed("could not save household data") from e
