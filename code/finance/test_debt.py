import pytest

from finance.debt import minimum_interest_payment, plan_payoff
from finance.errors import InvalidInputError, NonConvergentError, PaymentBelowMinimumError


def test_reference_debt_converges():
    result = plan_payoff(1000, 12, 100)
    assert result.months_to_payoff == 11
    assert len(result.series) == result.months_to_payoff
    assert result.series[-1].balance == 0
    assert result.total_paid == pytest.approx(1000 + result.total_interest_paid)
    assert result.total_interest_paid == pytest.approx(47.94, abs=0.01)


def test_extra_payment_strategy_reported():
    result = plan_payoff(1000, 12, 100)
    assert len(result.strategies) == 1
    strategy = result.strategies[0]
    assert strategy.description == "Paying an extra $10.00 per month"
    assert strategy.monthly_payment == pytest.approx(110)
    assert strategy.months_saved == 1
    assert strategy.interest_saved > 0


def test_no_strategy_when_extra_saves_no_months():
    # Ten payments of 100 and of 110 both finish in ten months at 0%.
    result = plan_payoff(1000, 0, 100)
    assert result.months_to_payoff == 10
    assert result.total_interest_paid == 0
    assert result.strategies == ()


def test_payment_below_minimum():
    with pytest.raises(PaymentBelowMinimumError) as excinfo:
        plan_payoff(1000, 24, 15)
    assert excinfo.value.minimum_payment == pytest.approx(20)
    assert excinfo.value.context() == {"minimumPayment": 20.0}


def test_payment_equal_to_interest_is_below_minimum():
    minimum = minimum_interest_payment(1000, 24)
    assert minimum == pytest.approx(20)
    with pytest.raises(PaymentBelowMinimumError):
        plan_payoff(1000, 24, minimum)


def test_non_convergent_after_safety_bound():
    with pytest.raises(NonConvergentError):
        plan_payoff(1000, 0, 0.5)


def test_non_convergent_with_interest_above_minimum_payment():
    # 84 a month clears the 8.33 of interest but barely dents a million.
    assert minimum_interest_payment(1_000_000, 0.01) < 84
    with pytest.raises(NonConvergentError) as excinfo:
        plan_payoff(1_000_000, 0.01, 84)
    assert excinfo.value.max_periods == 1200
    assert excinfo.value.remaining_balance > 800_000


def test_zero_balance_is_already_paid():
    result = plan_payoff(0, 18, 50)
    assert result.months_to_payoff == 0
    assert result.series == ()
    assert result.total_paid == 0


def test_last_payment_is_capped():
    result = plan_payoff(250, 0, 100)
    assert [s.period_payment for s in result.series] == [-100, -100, -50]
    assert result.total_paid == 250


@pytest.mark.parametrize("payment", [0, -10])
def test_non_positive_payment_rejected(payment):
    with pytest.raises(InvalidInputError):
        plan_payoff(1000, 5, payment)
