# energywise/utils/costs.py
"""
Consumption calculator: appliance power and usage -> daily/monthly/yearly kWh,
summed per room and per household, plus cost at a flat tariff.

Nothing here validates or rounds. Out-of-range inputs produce whatever the
arithmetic gives; checks live at the API boundary (utils/devices.py) and
rounding happens only when formatting for display.
"""
from dataclasses import dataclass
from typing import Dict

AVG_DAYS_IN_MONTH = 30.44  # calendar average, not calendar-aware
DAYS_IN_YEAR = 365.25


@dataclass(frozen=True)
class ConsumptionTotals:
    daily_kwh: float = 0.0
    monthly_kwh: float = 0.0
    yearly_kwh: float = 0.0

    def __add__(self, other):
        return ConsumptionTotals(
            daily_kwh=self.daily_kwh + other.daily_kwh,
            monthly_kwh=self.monthly_kwh + other.monthly_kwh,
            yearly_kwh=self.yearly_kwh + other.yearly_kwh,
        )

    def to_dict(self) -> Dict:
        return {
            "dailyKWh": self.daily_kwh,
            "monthlyKWh": self.monthly_kwh,
            "yearlyKWh": self.yearly_kwh,
        }


def appliance_consumption(power_watts, daily_usage_hours):
    """
    Energy used by one appliance.
      daily   = W * h / 1000
      monthly = daily * 30.44
      yearly  = daily * 365.25
    """
    daily_kwh = power_watts * daily_usage_hours / 1000
    return ConsumptionTotals(
        daily_kwh=daily_kwh,
        monthly_kwh=daily_kwh * AVG_DAYS_IN_MONTH,
        yearly_kwh=daily_kwh * DAYS_IN_YEAR,
    )


def room_consumption(appliances):
    """Component-wise sum over a room's appliances. Empty -> all zeros."""
    totals = ConsumptionTotals()
    for appliance in appliances:
        totals = totals + appliance_consumption(appliance.power, appliance.daily_usage_hours)
    return totals


def total_consumption(rooms):
    totals = ConsumptionTotals()
    for room in rooms:
        totals = totals + room_consumption(room.appliances)
    return totals


def cost(kwh, cost_per_kwh):
    # zero and negative tariffs are plain arithmetic here
    return kwh * cost_per_kwh


def format_kwh(kwh):
    return f"{kwh:.2f} kWh"


def format_currency(amount):
    """Brazilian real, pt-BR style: 1234.5 -> 'R$ 1.234,50'."""
    sign = "-" if amount < 0 else ""
    digits = f"{abs(amount):,.2f}"
    digits = digits.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {digits}"


def round2(value):
    return round(value, 2)
