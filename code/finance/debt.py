import logging
from typing import List

from .errors import PaymentBelowMinimumError
from .schemas import DebtPayoffResult, PaymentStrategy, ProjectionResult
from .simulator import monthly_rate, simulate
from .utils import format_currency, require_non_negative, require_positive

logger = logging.getLogger(__name__)

EXTRA_PAYMENT_PERCENT = 10.0


def minimum_interest_payment(balance: float, annual_interest_percent: float) -> float:
    return balance * monthly_rate(annual_interest_percent)


def _amortize(balance: float, annual_interest_percent: float, monthly_payment: float) -> ProjectionResult:
    return simulate(balance, -monthly_payment, annual_interest_percent, periods=None)


def _total_paid(projection: ProjectionResult) -> float:
    return -sum(step.period_payment for step in projection.series)


def evaluate_strategies(
    balance: float,
    annual_interest_percent: float,
    monthly_payment: float,
    baseline: ProjectionResult,
    extra_percent: float = EXTRA_PAYMENT_PERCENT,
) -> List[PaymentStrategy]:
    strategies: List[PaymentStrategy] = []
    additional = round(monthly_payment * extra_percent / 100.0, 2)
    if additional <= 0:
        return strategies
    alternative = _amortize(balance, annual_interest_percent, monthly_payment + additional)
    months_saved = baseline.periods - alternative.periods
    if months_saved > 0:
        strategies.append(
            PaymentStrategy(
                description=f"Paying an extra {format_currency(additional)} per month",
                monthly_payment=monthly_payment + additional,
                months_saved=months_saved,
                interest_saved=baseline.total_interest - alternative.total_interest,
            )
        )
    return strategies


def plan_payoff(balance: float, annual_interest_percent: float, monthly_payment: float) -> DebtPayoffResult:
    balance = require_non_negative(balance, "balance")
    annual_interest_percent = require_non_negative(annual_interest_percent, "annual_interest_percent")
    monthly_payment = require_positive(monthly_payment, "monthly_payment")

    minimum = minimum_interest_payment(balance, annual_interest_percent)
    if annual_interest_percent > 0 and monthly_payment <= minimum:
        raise PaymentBelowMinimumError(monthly_payment, minimum)

    if balance == 0:
        return DebtPayoffResult(
            months_to_payoff=0,
            total_interest_paid=0.0,
            total_paid=0.0,
            minimum_payment=minimum,
        )

    baseline = _amortize(balance, annual_interest_percent, monthly_payment)
    strategies = evaluate_strategies(balance, annual_interest_percent, monthly_payment, baseline)
    logger.debug("debt payoff in %d months, %d strategies", baseline.periods, len(strategies))
    return DebtPayoffResult(
        months_to_payoff=baseline.periods,
        total_interest_paid=baseline.total_interest,
        total_paid=_total_paid(baseline),
        minimum_payment=minimum,
        series=baseline.series,
        strategies=tuple(strategies),
    )
