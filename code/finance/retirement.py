import logging

from .errors import InvalidAgeOrderingError
from .investment import months_for_years, project_growth
from .schemas import RetirementResult
from .simulator import check_horizon, first_depleted_period, simulate
from .utils import require_finite, require_non_negative

logger = logging.getLogger(__name__)


def real_return(annual_return_percent: float, inflation_percent: float) -> float:
    return annual_return_percent - inflation_percent


def plan_retirement(
    current_age: float,
    retirement_age: float,
    life_expectancy: float,
    current_savings: float,
    monthly_savings: float,
    monthly_expenses_in_retirement: float,
    annual_return_percent: float,
    inflation_percent: float,
) -> RetirementResult:
    """Accumulate until retirement, then draw down at the inflation-adjusted return.

    The drawdown balance is floored at zero, so ``depletion_period`` is the first
    month the savings are exhausted and the plan is sustainable only when money is
    left at life expectancy.
    """
    current_age = require_finite(current_age, "current_age")
    retirement_age = require_finite(retirement_age, "retirement_age")
    life_expectancy = require_finite(life_expectancy, "life_expectancy")
    monthly_expenses_in_retirement = require_non_negative(
        monthly_expenses_in_retirement, "monthly_expenses_in_retirement"
    )
    annual_return_percent = require_finite(annual_return_percent, "annual_return_percent")
    inflation_percent = require_finite(inflation_percent, "inflation_percent")

    if not current_age < retirement_age < life_expectancy:
        raise InvalidAgeOrderingError(current_age, retirement_age, life_expectancy)
    check_horizon(months_for_years(retirement_age - current_age), "retirement_age")
    retirement_months = check_horizon(months_for_years(life_expectancy - retirement_age), "life_expectancy")

    accumulation = project_growth(
        current_savings,
        monthly_savings,
        annual_return_percent,
        retirement_age - current_age,
    )

    rate = real_return(annual_return_percent, inflation_percent)
    drawdown = simulate(
        accumulation.final_balance,
        -monthly_expenses_in_retirement,
        rate,
        retirement_months,
    )

    depletion_period = first_depleted_period(drawdown.series)
    sustainable = drawdown.final_balance > 0
    years_of_income = (
        depletion_period / 12.0 if depletion_period is not None else retirement_months / 12.0
    )
    logger.debug(
        "retirement plan: savings=%.2f sustainable=%s depletion_period=%s",
        accumulation.final_balance,
        sustainable,
        depletion_period,
    )
    return RetirementResult(
        accumulation=accumulation,
        drawdown=drawdown,
        sustainable=sustainable,
        depletion_period=depletion_period,
        real_return_rate=rate,
        years_of_income=years_of_income,
    )
