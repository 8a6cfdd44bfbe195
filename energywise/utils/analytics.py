# energywise/utils/analytics.py

import pandas as pd

from energywise.utils.costs import (
    appliance_consumption,
    cost,
    room_consumption,
    round2,
)

TABLE_COLUMNS = [
    "room",
    "appliance",
    "power_w",
    "daily_usage_hours",
    "daily_kwh",
    "monthly_kwh",
    "yearly_kwh",
    "monthly_cost",
]


def consumption_frame(rooms, cost_per_kwh):
    """One row per appliance, in room order then appliance order."""
    rows = []
    for room in rooms:
        for appliance in room.appliances:
            totals = appliance_consumption(appliance.power, appliance.daily_usage_hours)
            rows.append({
                "room": room.name,
                "appliance": appliance.name,
                "power_w": appliance.power,
                "daily_usage_hours": appliance.daily_usage_hours,
                "daily_kwh": totals.daily_kwh,
                "monthly_kwh": totals.monthly_kwh,
                "yearly_kwh": totals.yearly_kwh,
                "monthly_cost": cost(totals.monthly_kwh, cost_per_kwh),
            })
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def top_consumers(rooms, cost_per_kwh, limit=5):
    """Appliances with the highest monthly kWh across the household."""
    df = consumption_frame(rooms, cost_per_kwh)
    # stable sort keeps insertion order between ties
    df = df.sort_values("monthly_kwh", ascending=False, kind="mergesort").head(limit)
    return [
        {
            "name": row.appliance,
            "room": row.room,
            "consumption": round2(float(row.monthly_kwh)),
            "monthlyCost": float(row.monthly_cost),
        }
        for row in df.itertuples(index=False)
    ]


def room_breakdown(rooms):
    """Monthly kWh per room for the pie chart. Empty when the household uses nothing."""
    data = [
        {"room": room.name, "consumption": room_consumption(room.appliances).monthly_kwh}
        for room in rooms
    ]
    if sum(d["consumption"] for d in data) == 0:
        return []
    return data


def stat_cards(totals, cost_per_kwh):
    return [
        {"title": "Consumo Diário", "kwh": totals.daily_kwh,
         "cost": cost(totals.daily_kwh, cost_per_kwh)},
        {"title": "Consumo Mensal", "kwh": totals.monthly_kwh,
         "cost": cost(totals.monthly_kwh, cost_per_kwh)},
        {"title": "Consumo Anual", "kwh": totals.yearly_kwh,
         "cost": cost(totals.yearly_kwh, cost_per_kwh)},
    ]
