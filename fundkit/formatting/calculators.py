"""
Investment projections for the calculator widgets (SIP, lumpsum, CAGR).

These are estimates shown to investors, not ledger arithmetic: inputs are
floats and rupee outputs are rounded to whole numbers.
"""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ProjectedReturns:
    """Outcome of a what-if projection."""

    future_value: int
    total_investment: float
    estimated_returns: int
    absolute_return: float          # percent of total_investment

    def to_dict(self) -> dict:
        return {
            "futureValue": self.future_value,
            "totalInvestment": self.total_investment,
            "estimatedReturns": self.estimated_returns,
            "absoluteReturn": self.absolute_return,
        }


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_percentage_change(old_value: float, new_value: float) -> float:
    """Change from *old_value* to *new_value* in percent, 2 decimals."""
    if old_value == 0:
        return 100.0 if new_value > 0 else 0.0
    change = (new_value - old_value) / abs(old_value) * 100
    return round(change, 2)


def calculate_sip_returns(
    monthly_investment: float,
    years: float,
    expected_return: float,
) -> ProjectedReturns:
    """
    Future value of a monthly SIP, contributions at the start of each month.

    Args:
        monthly_investment: Instalment amount.
        years: Investment horizon.
        expected_return: Expected annual return in percent.
    """
    monthly_rate = expected_return / 12 / 100
    months = int(round(years * 12))

    if monthly_rate == 0:
        future_value = monthly_investment * months
    else:
        future_value = (
            monthly_investment
            * ((math.pow(1 + monthly_rate, months) - 1) / monthly_rate)
            * (1 + monthly_rate)
        )

    total_investment = monthly_investment * months
    estimated_returns = future_value - total_investment
    absolute_return = estimated_returns / total_investment * 100 if total_investment else 0.0

    return ProjectedReturns(
        future_value=_round_half_up(future_value),
        total_investment=total_investment,
        estimated_returns=_round_half_up(estimated_returns),
        absolute_return=absolute_return,
    )


def calculate_lumpsum_returns(
    investment: float,
    years: float,
    expected_return: float,
) -> ProjectedReturns:
    """Future value of a one-time investment compounded annually."""
    future_value = investment * math.pow(1 + expected_return / 100, years)
    returns = future_value - investment
    absolute_return = returns / investment * 100 if investment else 0.0

    return ProjectedReturns(
        future_value=_round_half_up(future_value),
        total_investment=investment,
        estimated_returns=_round_half_up(returns),
        absolute_return=absolute_return,
    )


def calculate_cagr(beginning_value: float, ending_value: float, years: float) -> float:
    """Compound annual growth rate in percent, 2 decimals. Degenerate input -> 0."""
    if beginning_value <= 0 or years <= 0 or ending_value < 0:
        return 0.0
    cagr = math.pow(ending_value / beginning_value, 1 / years) - 1
    return round(cagr * 100, 2)
