# finance/simulator.py
"""Month-stepped balance simulator shared by every calculator.

Each period applies the periodic delta first and then compounds interest on the
resulting balance. A positive delta is a contribution; a negative delta is a
withdrawal or loan payment, capped at the current balance so the balance never
drops below zero. Balances are accumulated in full precision; callers round at
their output boundary.
"""
import logging
from typing import Iterable, Iterator, Optional, Sequence

from .errors import InvalidInputError, NonConvergentError
from .schemas import ProjectionResult, SimulationStep
from .utils import require_finite, require_non_negative

logger = logging.getLogger(__name__)

# Roughly 100 years of monthly periods.
MAX_PERIODS = 1200
MAX_YEARS = MAX_PERIODS // 12
# At -1200% a year the monthly rate is -100% and the balance is wiped out in one step.
MIN_ANNUAL_RATE = -1200.0


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100.0 / 12.0


def _validate(principal: float, periodic_delta: float, annual_rate_percent: float) -> None:
    require_non_negative(principal, "principal")
    require_finite(periodic_delta, "periodic_delta")
    rate = require_finite(annual_rate_percent, "annual_rate_percent")
    if rate <= MIN_ANNUAL_RATE:
        raise InvalidInputError(
            f"annual_rate_percent must be greater than {MIN_ANNUAL_RATE:g}.", field="annual_rate_percent"
        )


def check_horizon(periods: int, field: str = "periods") -> int:
    if periods > MAX_PERIODS:
        raise InvalidInputError(
            f"{field} must not exceed {MAX_PERIODS} months ({MAX_YEARS} years).", field=field
        )
    return periods


def iter_steps(
    principal: float,
    periodic_delta: float,
    annual_rate_percent: float,
    periods: Optional[int] = None,
) -> Iterator[SimulationStep]:
    """Yield one SimulationStep per month.

    With ``periods=None`` the generator runs until the balance reaches zero and
    stops silently at MAX_PERIODS; ``simulate`` turns that into NonConvergentError.
    """
    rate = monthly_rate(annual_rate_percent)
    limit = MAX_PERIODS if periods is None else periods
    balance = float(principal)
    for period in range(1, limit + 1):
        if periodic_delta >= 0:
            payment = periodic_delta
        else:
            payment = -min(-periodic_delta, max(balance, 0.0))
        balance += payment
        interest = balance * rate
        balance += interest
        yield SimulationStep(
            period_index=period,
            balance=balance,
            period_interest=interest,
            period_payment=payment,
        )
        if periods is None and balance <= 0:
            return


class Simulation:
    """Restartable view over a simulation; every iteration starts from the principal."""

    def __init__(
        self,
        principal: float,
        periodic_delta: float,
        annual_rate_percent: float,
        periods: Optional[int] = None,
    ):
        _validate(principal, periodic_delta, annual_rate_percent)
        if periods is not None:
            periods = int(periods)
        if periods is not None:
            if periods < 0:
                raise InvalidInputError("periods must not be negative.", field="periods")
            check_horizon(periods)
        if periods is None and periodic_delta >= 0:
            raise InvalidInputError(
                "An open-ended simulation needs a withdrawal or payment (negative delta).",
                field="periodic_delta",
            )
        self.principal = float(principal)
        self.periodic_delta = float(periodic_delta)
        self.annual_rate_percent = float(annual_rate_percent)
        self.periods = periods

    def __iter__(self) -> Iterator[SimulationStep]:
        return iter_steps(self.principal, self.periodic_delta, self.annual_rate_percent, self.periods)

    def run(self) -> ProjectionResult:
        series = tuple(self)
        final_balance = series[-1].balance if series else self.principal
        if self.periods is None and final_balance > 0:
            logger.debug("simulation did not converge after %d periods", len(series))
            raise NonConvergentError(MAX_PERIODS, final_balance)
        return summarize(self.principal, series)


def summarize(principal: float, series: Sequence[SimulationStep]) -> ProjectionResult:
    series = tuple(series)
    total_interest = sum(step.period_interest for step in series)
    total_contributions = principal + sum(step.period_payment for step in series)
    final_balance = series[-1].balance if series else principal
    return ProjectionResult(
        final_balance=final_balance,
        total_interest=total_interest,
        total_contributions=total_contributions,
        series=series,
    )


def simulate(
    principal: float,
    periodic_delta: float,
    annual_rate_percent: float,
    periods: Optional[int] = None,
) -> ProjectionResult:
    return Simulation(principal, periodic_delta, annual_rate_percent, periods).run()


def first_depleted_period(series: Iterable[SimulationStep]) -> Optional[int]:
    return next((step.period_index for step in series if step.balance <= 0), None)
