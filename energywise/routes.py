# energywise/routes.py
import logging

from flask import Blueprint, Response, current_app, jsonify, request

from energywise import db
from energywise.errors import EnergyWiseError, GenerationFailed, InvalidInput, NotFound
from energywise.store import HouseholdStore
from energywise.utils.analytics import room_breakdown, stat_cards, top_consumers
from energywise.utils.costs import (
    appliance_consumption,
    cost,
    format_currency,
    format_kwh,
    room_consumption,
    total_consumption,
)
from energywise.utils.devices import (
    Appliance,
    Room,
    default_state,
    new_id,
    parse_household_payload,
    parse_tariff,
    validate_appliance_payload,
    validate_room_payload,
)
from energywise.utils.export import export_csv
from energywise.utils.recommendations import SuggestionRequest

logger = logging.getLogger(__name__)

bp = Blueprint("main", __name__)


def get_store():
    return HouseholdStore(db.session)


def get_advisor():
    return current_app.extensions["savings_advisor"]


def load_state():
    """Saved household, or the demo household when nothing was saved yet."""
    state = get_store().load()
    if state is None:
        state = default_state(current_app.config["DEFAULT_COST_PER_KWH"])
    return state


def _get_room(state, room_id):
    room = state.find_room(room_id)
    if room is None:
        raise NotFound(f"room {room_id} not found")
    return room


def _get_appliance(room, appliance_id):
    appliance = room.find_appliance(appliance_id)
    if appliance is None:
        raise NotFound(f"appliance {appliance_id} not found in room {room.id}")
    return appliance


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        raise InvalidInput("request body must be JSON")
    return data


def appliance_view(appliance, cost_per_kwh):
    totals = appliance_consumption(appliance.power, appliance.daily_usage_hours)
    monthly_cost = cost(totals.monthly_kwh, cost_per_kwh)
    data = appliance.to_dict()
    data.update({
        "consumption": totals.to_dict(),
        "monthlyCost": monthly_cost,
        "formatted": {
            "monthlyKWh": format_kwh(totals.monthly_kwh),
            "monthlyCost": format_currency(monthly_cost),
        },
    })
    return data


def room_view(room, cost_per_kwh):
    totals = room_consumption(room.appliances)
    return {
        "id": room.id,
        "name": room.name,
        "appliances": [appliance_view(a, cost_per_kwh) for a in room.appliances],
        "consumption": totals.to_dict(),
        "monthlyCost": cost(totals.monthly_kwh, cost_per_kwh),
    }


@bp.errorhandler(EnergyWiseError)
def handle_energywise_error(error):
    return jsonify(error.to_dict()), error.status_code


# -----------------
# Household
# -----------------
@bp.route("/api/household", methods=["GET"])
def api_household():
    state = load_state()
    return jsonify({
        "status": "success",
        "household": state.to_dict(),
        "rooms": [room_view(r, state.cost_per_kwh) for r in state.rooms],
        "totals": total_consumption(state.rooms).to_dict(),
    })


@bp.route("/api/household", methods=["PUT"])
def api_replace_household():
    """Replace the whole snapshot with a {rooms, costPerKWh} document."""
    state = parse_household_payload(
        _json_body(), default_cost_per_kwh=current_app.config["DEFAULT_COST_PER_KWH"]
    )
    get_store().save(state)
    logger.info("Household replaced: %d rooms", len(state.rooms))
    return jsonify({"status": "success", "household": state.to_dict()})


@bp.route("/api/tariff", methods=["PUT"])
def api_set_tariff():
    cost_per_kwh = parse_tariff(_json_body())
    state = load_state()
    state.cost_per_kwh = cost_per_kwh
    get_store().save(state)
    return jsonify({"status": "success", "costPerKWh": cost_per_kwh})


# -----------------
# Rooms
# -----------------
@bp.route("/api/rooms", methods=["POST"])
def api_add_room():
    name = validate_room_payload(_json_body())
    state = load_state()
    room = Room(id=new_id("room"), name=name)
    state.rooms.append(room)
    get_store().save(state)
    return jsonify({"status": "success", "room": room.to_dict()}), 201


@bp.route("/api/rooms/<room_id>", methods=["PATCH"])
def api_rename_room(room_id):
    name = validate_room_payload(_json_body())
    state = load_state()
    room = _get_room(state, room_id)
    room.name = name
    get_store().save(state)
    return jsonify({"status": "success", "room": room.to_dict()})


@bp.route("/api/rooms/<room_id>", methods=["DELETE"])
def api_delete_room(room_id):
    state = load_state()
    room = _get_room(state, room_id)
    state.rooms.remove(room)
    get_store().save(state)
    return jsonify({"status": "success"})


# -----------------
# Appliances
# -----------------
@bp.route("/api/rooms/<room_id>/appliances", methods=["POST"])
def api_add_appliance(room_id):
    name, power, hours = validate_appliance_payload(_json_body())
    state = load_state()
    room = _get_room(state, room_id)
    appliance = Appliance(id=new_id("app"), name=name, power=power, daily_usage_hours=hours)
    room.appliances.append(appliance)
    get_store().save(state)
    return jsonify({
        "status": "success",
        "appliance": appliance_view(appliance, state.cost_per_kwh),
    }), 201


@bp.route("/api/rooms/<room_id>/appliances/<appliance_id>", methods=["PUT"])
def api_edit_appliance(room_id, appliance_id):
    name, power, hours = validate_appliance_payload(_json_body())
    state = load_state()
    appliance = _get_appliance(_get_room(state, room_id), appliance_id)
    appliance.name = name
    appliance.power = power
    appliance.daily_usage_hours = hours
    get_store().save(state)
    return jsonify({
        "status": "success",
        "appliance": appliance_view(appliance, state.cost_per_kwh),
    })


@bp.route("/api/rooms/<room_id>/appliances/<appliance_id>", methods=["DELETE"])
def api_delete_appliance(room_id, appliance_id):
    state = load_state()
    room = _get_room(state, room_id)
    room.appliances.remove(_get_appliance(room, appliance_id))
    get_store().save(state)
    return jsonify({"status": "success"})


# -----------------
# Dashboard data
# -----------------
@bp.route("/api/consumption", methods=["GET"])
def api_consumption():
    state = load_state()
    totals = total_consumption(state.rooms)
    cards = stat_cards(totals, state.cost_per_kwh)
    for card in cards:
        card["formatted"] = {
            "kwh": format_kwh(card["kwh"]),
            "cost": format_currency(card["cost"]),
        }
    return jsonify({
        "status": "success",
        "costPerKWh": state.cost_per_kwh,
        "totals": totals.to_dict(),
        "cards": cards,
        "rooms": room_breakdown(state.rooms),
        "topConsumers": top_consumers(state.rooms, state.cost_per_kwh),
    })


@bp.route("/api/export.csv", methods=["GET"])
def api_export_csv():
    state = load_state()
    return Response(
        export_csv(state.rooms, state.cost_per_kwh),
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=energywise.csv"},
    )


# -----------------
# Savings suggestion
# -----------------
@bp.route("/api/rooms/<room_id>/appliances/<appliance_id>/suggestion", methods=["POST"])
def api_savings_suggestion(room_id, appliance_id):
    state = load_state()
    appliance = _get_appliance(_get_room(state, room_id), appliance_id)
    suggestion_request = SuggestionRequest.from_appliance(appliance, state.cost_per_kwh)

    try:
        result = get_advisor().suggest(suggestion_request)
    except GenerationFailed as e:
        logger.error("Savings suggestion failed for %s: %s", appliance.name, e.message)
        return jsonify({
            "status": "error",
            "code": e.code,
            "message": "Failed to get savings suggestion from AI.",
        }), e.status_code

    return jsonify({"status": "success", **result.to_dict()})
