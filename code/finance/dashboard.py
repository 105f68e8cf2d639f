from typing import List, Sequence

from .investment import months_for_years
from .schemas import DashboardSummary, ScenarioParameters
from .simulator import simulate
from .utils import require_finite, require_non_negative, safe_div

DEFAULT_RETURN_RATE = 5.0
HORIZON_YEARS = 30


def average_return(scenario: ScenarioParameters) -> float:
    if not scenario.investments:
        return DEFAULT_RETURN_RATE
    return sum(inv.rate for inv in scenario.investments) / len(scenario.investments)


def _yearly_balances(scenario: ScenarioParameters, horizon_years: int) -> List[float]:
    projection = simulate(
        scenario.initial_amount,
        scenario.monthly_savings,
        average_return(scenario),
        horizon_years * 12,
    )
    balances = [scenario.initial_amount]
    balances.extend(step.balance for step in projection.series if step.period_index % 12 == 0)
    return balances


def summarize_scenarios(
    scenarios: Sequence[ScenarioParameters],
    horizon_years: int = HORIZON_YEARS,
) -> DashboardSummary:
    """Aggregate saved scenarios into the headline dashboard figures.

    Each scenario grows its initial amount plus monthly surplus at the mean rate
    of its investments. A monthly deficit draws the balance down to zero.
    """
    horizon_years = int(require_non_negative(horizon_years, "horizon_years"))
    if not scenarios:
        return DashboardSummary(
            active_scenarios=0,
            net_worth_projection=0.0,
            average_monthly_savings=0.0,
            average_investment_return=0.0,
            net_worth_by_year=tuple(0.0 for _ in range(horizon_years + 1)),
        )

    net_worth = 0.0
    by_year = [0.0] * (horizon_years + 1)
    holdings = 0
    rate_total = 0.0
    for sc in scenarios:
        require_finite(sc.monthly_savings, "monthly_savings")
        projection = simulate(
            sc.initial_amount,
            sc.monthly_savings,
            average_return(sc),
            months_for_years(sc.timeframe_years),
        )
        net_worth += projection.final_balance
        for year, balance in enumerate(_yearly_balances(sc, horizon_years)):
            by_year[year] += balance
        holdings += len(sc.investments)
        rate_total += sum(inv.rate for inv in sc.investments)

    return DashboardSummary(
        active_scenarios=len(scenarios),
        net_worth_projection=net_worth,
        average_monthly_savings=sum(sc.monthly_savings for sc in scenarios) / len(scenarios),
        average_investment_return=safe_div(rate_total, holdings, 0.0),
        net_worth_by_year=tuple(by_year),
    )
