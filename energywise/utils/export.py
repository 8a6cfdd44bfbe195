# energywise/utils/export.py
from energywise.utils.analytics import consumption_frame


def export_csv(rooms, cost_per_kwh):
    """CSV text of the per-appliance consumption table, values rounded to 2 decimals."""
    df = consumption_frame(rooms, cost_per_kwh)
    numeric = ["daily_kwh", "monthly_kwh", "yearly_kwh", "monthly_cost"]
    df[numeric] = df[numeric].astype(float).round(2)
    return df.to_csv(index=False)
