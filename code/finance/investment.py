from typing import Dict, Iterable

from .errors import InvalidInputError
from .schemas import Investment, ProjectionResult
from .simulator import check_horizon, simulate
from .utils import require_finite, require_non_negative


def months_for_years(years: float) -> int:
    if years <= 0:
        return 0
    return int(round(years * 12))


def project_growth(
    initial: float,
    monthly_contribution: float,
    annual_rate_percent: float,
    years: float,
) -> ProjectionResult:
    """Grow a lump sum plus a fixed monthly contribution.

    ``years <= 0`` yields an empty series with the initial amount untouched.
    Negative rates are allowed and model loss scenarios.
    """
    initial = require_non_negative(initial, "initial")
    monthly_contribution = require_non_negative(monthly_contribution, "monthly_contribution")
    years = require_finite(years, "years")

    periods = check_horizon(months_for_years(years), "years")
    projection = simulate(initial, monthly_contribution, annual_rate_percent, periods)
    total_contributions = initial + monthly_contribution * periods
    return ProjectionResult(
        final_balance=projection.final_balance,
        total_interest=projection.final_balance - total_contributions,
        total_contributions=total_contributions,
        series=projection.series,
    )


def project_portfolio(investments: Iterable[Investment], years: float) -> Dict[str, ProjectionResult]:
    out: Dict[str, ProjectionResult] = {}
    for inv in investments:
        if inv.name in out:
            raise InvalidInputError(f"Duplicate investment name: {inv.name}", field="investments")
        out[inv.name] = project_growth(inv.amount, 0.0, inv.rate, years)
    return out
