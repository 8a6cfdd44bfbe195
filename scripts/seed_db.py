import json
import sys

from energywise import create_app, db
from energywise.store import HouseholdStore
from energywise.utils.costs import format_currency, format_kwh, total_consumption
from energywise.utils.devices import default_state, parse_household_payload


def seed(snapshot_path=None, config_class=None):
    """
    Reset the database and store a household.
    With a path, load a {rooms, costPerKWh} JSON snapshot; otherwise the demo household.
    """
    print("🌱 Seeding database with household data...")

    app = create_app(config_class)
    with app.app_context():
        default_cost = app.config["DEFAULT_COST_PER_KWH"]
        if snapshot_path:
            with open(snapshot_path, "r", encoding="utf-8") as f:
                state = parse_household_payload(json.load(f), default_cost_per_kwh=default_cost)
        else:
            state = default_state(default_cost)

        db.drop_all()
        db.create_all()
        HouseholdStore(db.session).save(state)

        totals = total_consumption(state.rooms)
        print(f"✅ Saved {len(state.rooms)} rooms, "
              f"{sum(len(r.appliances) for r in state.rooms)} appliances")
        print(f"   Monthly: {format_kwh(totals.monthly_kwh)} / "
              f"{format_currency(totals.monthly_kwh * state.cost_per_kwh)}")


if __name__ == "__main__":
    seed(sys.argv[1] if len(sys.argv) > 1 else None)
