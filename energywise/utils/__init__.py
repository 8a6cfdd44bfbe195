from energywise.utils.costs import (
    ConsumptionTotals,
    appliance_consumption,
    cost,
    format_currency,
    format_kwh,
    room_consumption,
    total_consumption,
)
from energywise.utils.recommendations import (
    SavingsAdvisor,
    SavingsSuggestion,
    SuggestionRequest,
)

__all__ = [
    "ConsumptionTotals",
    "appliance_consumption",
    "cost",
    "format_currency",
    "format_kwh",
    "room_consumption",
    "total_consumption",
    "SavingsAdvisor",
    "SavingsSuggestion",
    "SuggestionRequest",
]
