import pytest

from finance.errors import InvalidInputError
from finance.investment import months_for_years, project_growth, project_portfolio
from finance.schemas import Investment


@pytest.mark.parametrize("years", [0, -1, -0.5])
def test_non_positive_years_returns_initial(years):
    result = project_growth(2500, 100, 7, years)
    assert result.series == ()
    assert result.final_balance == 2500
    assert result.total_interest == 0


def test_zero_rate_only_accumulates_contributions():
    result = project_growth(1000, 100, 0, 1)
    assert len(result.series) == 12
    assert result.final_balance == pytest.approx(2200)
    assert result.total_contributions == pytest.approx(2200)
    assert result.total_interest == pytest.approx(0)


def test_interest_is_balance_above_contributions():
    result = project_growth(10000, 500, 7, 10)
    assert result.total_contributions == pytest.approx(10000 + 500 * 120)
    assert result.total_interest == pytest.approx(result.final_balance - result.total_contributions)
    assert result.total_interest > 0


def test_negative_rate_models_losses():
    result = project_growth(1000, 0, -10, 1)
    assert result.final_balance < 1000
    assert result.total_interest < 0


def test_negative_contribution_rejected():
    with pytest.raises(InvalidInputError):
        project_growth(1000, -50, 5, 1)


def test_months_for_years_rounds_fractional_years():
    assert months_for_years(1.5) == 18
    assert months_for_years(0) == 0


def test_project_portfolio_per_holding():
    holdings = [Investment("Index fund", 10000, 6), Investment("Bonds", 5000, 3)]
    out = project_portfolio(holdings, 5)
    assert set(out) == {"Index fund", "Bonds"}
    assert out["Index fund"].final_balance > 10000
    assert out["Bonds"].total_contributions == 5000


def test_project_portfolio_rejects_duplicate_names():
    with pytest.raises(InvalidInputError):
        project_portfolio([Investment("A", 1, 1), Investment("A", 2, 2)], 1)


def test_minus_100_percent_rate_is_allowed():
    result = project_growth(1000, 0, -100, 1)
    assert 0 < result.final_balance < 1000


@pytest.mark.parametrize("years", [101, 1e7])
def test_rejects_horizon_beyond_100_years(years):
    with pytest.raises(InvalidInputError) as excinfo:
        project_growth(1000, 100, 5, years)
    assert excinfo.value.field == "years"
