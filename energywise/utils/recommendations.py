# energywise/utils/recommendations.py
import logging
from dataclasses import dataclass
from typing import Dict

from energywise.errors import GenerationFailed

logger = logging.getLogger(__name__)

# Fixed 30-day month for the savings estimate, distinct from
# costs.AVG_DAYS_IN_MONTH (30.44). Do not unify: it changes displayed savings.
SAVINGS_DAYS_PER_MONTH = 30
MIN_MONTHLY_SAVINGS = 1.0  # R$
REDUCED_HOURS_PER_DAY = 1


@dataclass(frozen=True)
class SuggestionRequest:
    appliance_name: str
    power: float
    daily_usage_hours: float
    cost_per_kwh: float

    @classmethod
    def from_appliance(cls, appliance, cost_per_kwh):
        return cls(
            appliance_name=appliance.name,
            power=appliance.power,
            daily_usage_hours=appliance.daily_usage_hours,
            cost_per_kwh=cost_per_kwh,
        )

    def to_dict(self) -> Dict:
        return {
            "applianceName": self.appliance_name,
            "power": self.power,
            "dailyUsageHours": self.daily_usage_hours,
            "costPerKWh": self.cost_per_kwh,
        }


@dataclass(frozen=True)
class SavingsSuggestion:
    suggestion: str
    applicable: bool

    def to_dict(self) -> Dict:
        return {"suggestion": self.suggestion, "applicable": self.applicable}


NOT_APPLICABLE = SavingsSuggestion(suggestion="", applicable=False)


@dataclass(frozen=True)
class SavingsEstimate:
    daily_kwh: float
    monthly_kwh: float
    monthly_cost: float


def estimate_savings(power_watts, cost_per_kwh):
    """Savings from running an appliance one hour less per day, whatever its current usage."""
    daily_kwh = power_watts * REDUCED_HOURS_PER_DAY / 1000
    monthly_kwh = daily_kwh * SAVINGS_DAYS_PER_MONTH
    return SavingsEstimate(
        daily_kwh=daily_kwh,
        monthly_kwh=monthly_kwh,
        monthly_cost=monthly_kwh * cost_per_kwh,
    )


def is_applicable(daily_usage_hours, estimate):
    if daily_usage_hours <= REDUCED_HOURS_PER_DAY:
        return False
    return estimate.monthly_cost >= MIN_MONTHLY_SAVINGS


class SavingsAdvisor:
    """
    Decides whether cutting an hour of daily use is worth suggesting and, only
    then, asks the text generator to phrase it.

    generator: any object with generate(SuggestionRequest) -> SavingsSuggestion
    that raises GenerationFailed on error (see utils/text_generation.py).
    The advisor holds no state between calls.
    """

    def __init__(self, generator):
        self.generator = generator

    def suggest(self, request):
        estimate = estimate_savings(request.power, request.cost_per_kwh)
        if not is_applicable(request.daily_usage_hours, estimate):
            logger.debug(
                "No suggestion for %s: %.2f h/day, R$ %.4f/month saved",
                request.appliance_name, request.daily_usage_hours, estimate.monthly_cost,
            )
            return NOT_APPLICABLE

        try:
            result = self.generator.generate(request)
        except GenerationFailed:
            logger.error("Text generator failed for %s", request.appliance_name)
            raise
        except Exception as e:
            logger.exception("Text generator raised for %s", request.appliance_name)
            raise GenerationFailed(f"text generator error: {e}") from e

        if not isinstance(result, SavingsSuggestion):
            logger.error("Text generator returned %r for %s", result, request.appliance_name)
            raise GenerationFailed("text generator returned no suggestion")
        return result
