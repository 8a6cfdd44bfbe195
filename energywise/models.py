from datetime import datetime
from energywise import db


class HouseholdRecord(db.Model):
    __tablename__ = "households"

    id = db.Column(db.Integer, primary_key=True)
    cost_per_kwh = db.Column(db.Float, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    rooms = db.relationship(
        "RoomRecord",
        backref="household",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="RoomRecord.position",
    )


class RoomRecord(db.Model):
    __tablename__ = "rooms"

    id = db.Column(db.Integer, primary_key=True)
    household_id = db.Column(db.Integer, db.ForeignKey("households.id"), nullable=False)
    room_key = db.Column(db.String(64), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)

    appliances = db.relationship(
        "ApplianceRecord",
        backref="room",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="ApplianceRecord.position",
    )


class ApplianceRecord(db.Model):
    __tablename__ = "appliances"

    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey("rooms.id"), nullable=False)
    appliance_key = db.Column(db.String(64), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    power = db.Column(db.Float, nullable=False)  # watts
    daily_usage_hours = db.Column(db.Float, nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
