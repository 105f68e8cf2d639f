import copy

import pytest
from fastapi.testclient import TestClient

from app.core.sample_payloads import (
    SAMPLE_BUDGET_REQUEST,
    SAMPLE_INVESTMENT_REQUEST,
    SAMPLE_RETIREMENT_REQUEST,
    SAMPLE_SCENARIO,
)
from app.main import app, store

client = TestClient(app)


@pytest.fixture(autouse=True)
def empty_store():
    store.clear()
    yield
    store.clear()


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_investment_growth_sample():
    resp = client.post("/api/calculations/investment-growth", json=SAMPLE_INVESTMENT_REQUEST)
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["series"]) == 240
    assert [p["month"] for p in body["yearlyData"]][:3] == [1, 12, 24]
    assert body["yearlyData"][-1]["month"] == 240
    assert body["yearlyData"][-1]["year"] == 20
    assert body["totalContributions"] == 10000 + 500 * 240
    assert body["finalBalance"] == round(body["finalBalance"], 2)
    assert body["finalBalance"] == body["series"][-1]["balance"]


def test_investment_growth_zero_years():
    payload = dict(SAMPLE_INVESTMENT_REQUEST, years=0)
    body = client.post("/api/calculations/investment-growth", json=payload).json()
    assert body["series"] == []
    assert body["yearlyData"] == []
    assert body["finalBalance"] == payload["initialAmount"]


def test_missing_field_is_400():
    payload = dict(SAMPLE_INVESTMENT_REQUEST)
    del payload["years"]
    resp = client.post("/api/calculations/investment-growth", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "invalid_input"
    assert any(e["field"] == "years" for e in body["errors"])


@pytest.mark.parametrize("raw", ['"abc"', "NaN", "Infinity", "null"])
def test_non_numeric_is_400(raw):
    content = (
        '{"initialAmount": %s, "monthlyContribution": 100, "annualReturnRate": 5, "years": 10}' % raw
    )
    resp = client.post(
        "/api/calculations/investment-growth",
        content=content,
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_input"


def test_retirement_sample():
    resp = client.post("/api/calculations/retirement-projection", json=SAMPLE_RETIREMENT_REQUEST)
    assert resp.status_code == 200
    body = resp.json()
    assert body["sustainable"] is True
    assert body["depletionPeriod"] is None
    assert len(body["drawdown"]["series"]) == 300
    assert body["retirementSavings"] == body["accumulation"]["finalBalance"]
    assert body["realReturnRate"] == 4


def test_retirement_bad_ages():
    payload = dict(SAMPLE_RETIREMENT_REQUEST, retirementAge=95)
    resp = client.post("/api/calculations/retirement-projection", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "invalid_age_ordering"
    assert body["lifeExpectancy"] == 90


def test_debt_payoff_reference():
    resp = client.post(
        "/api/calculations/debt-payoff",
        json={"debtAmount": 1000, "interestRate": 12, "monthlyPayment": 100},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["monthsToPayoff"] == 11
    assert body["series"][-1]["balance"] == 0
    assert body["totalPaid"] == pytest.approx(1000 + body["totalInterestPaid"], abs=0.01)
    assert body["strategies"][0]["monthsSaved"] == 1
    assert body["strategies"][0]["description"] == "Paying an extra $10.00 per month"


def test_debt_payment_below_minimum():
    resp = client.post(
        "/api/calculations/debt-payoff",
        json={"debtAmount": 1000, "interestRate": 24, "monthlyPayment": 15},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "payment_below_minimum"
    assert body["minimumPayment"] == 20
    assert "$20.00" in body["message"]


def test_debt_non_convergent():
    resp = client.post(
        "/api/calculations/debt-payoff",
        json={"debtAmount": 1000, "interestRate": 0, "monthlyPayment": 0.5},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "non_convergent"
    assert body["maxPeriods"] == 1200


def test_budget_50_30_20():
    payload = {
        "monthlyIncome": 1000,
        "expenses": [{"category": "Housing", "amount": 500}, {"category": "Dining", "amount": 300}],
        "savingsGoalPercent": 20,
    }
    resp = client.post("/api/calculations/budget-analysis", json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["healthScore"] == 100
    assert body["distribution"]["needs"] == {"amount": 500, "percentage": 50, "recommendedPercentage": 50}
    assert body["distribution"]["savings"]["amount"] == 200
    assert len(body["recommendations"]) == 3
    assert body["meetingSavingsGoal"] is True


def test_budget_sample_with_goals():
    resp = client.post("/api/calculations/budget-analysis", json=SAMPLE_BUDGET_REQUEST)
    assert resp.status_code == 200
    body = resp.json()
    assert 0 <= body["healthScore"] <= 100
    assert [g["status"] for g in body["goals"]] == ["on_track", "on_track"]
    assert [c["category"] for c in body["expenseBreakdown"]][0] == "Housing"


def test_budget_unreachable_goal():
    payload = copy.deepcopy(SAMPLE_BUDGET_REQUEST)
    payload["goals"] = [{"name": "Boat", "targetAmount": 20000, "currentAmount": 0, "allocationPercent": 0}]
    body = client.post("/api/calculations/budget-analysis", json=payload).json()
    assert body["goals"][0]["monthsToTarget"] is None
    assert body["goals"][0]["status"] == "unreachable"


def test_scenario_crud():
    created = client.post("/api/scenarios", json=SAMPLE_SCENARIO)
    assert created.status_code == 201
    scenario = created.json()
    sid = scenario["id"]
    assert scenario["createdAt"] == scenario["updatedAt"]
    assert scenario["timeframeYears"] == 10

    assert client.get(f"/api/scenarios/{sid}").json()["name"] == "Baseline"
    assert [s["id"] for s in client.get("/api/scenarios").json()] == [sid]

    updated = client.put(f"/api/scenarios/{sid}", json={"monthlyExpenses": 3000})
    assert updated.status_code == 200
    assert updated.json()["monthlyExpenses"] == 3000
    assert updated.json()["name"] == "Baseline"
    assert updated.json()["id"] == sid

    assert client.delete(f"/api/scenarios/{sid}").json() == {"message": "Scenario deleted successfully"}
    missing = client.get(f"/api/scenarios/{sid}")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Scenario not found", "code": "not_found"}
    assert client.delete(f"/api/scenarios/{sid}").status_code == 404
    assert client.put(f"/api/scenarios/{sid}", json={"name": "x"}).status_code == 404


def test_scenario_defaults():
    body = client.post("/api/scenarios", json={"name": "Minimal"}).json()
    assert body["inflationRate"] == 2
    assert body["timeframeYears"] == 10
    assert body["investments"] == []


def test_dashboard():
    empty = client.get("/api/scenarios/dashboard").json()
    assert empty["activeScenarios"] == 0

    client.post("/api/scenarios", json=SAMPLE_SCENARIO)
    body = client.get("/api/scenarios/dashboard").json()
    assert body["activeScenarios"] == 1
    assert body["averageMonthlySavings"] == 1800
    assert body["averageInvestmentReturn"] == 5.5
    assert len(body["netWorthByYear"]) == 31
    assert body["netWorthByYear"][0] == 12000
    assert body["netWorthProjection"] > 12000


def test_unknown_route_uses_error_shape():
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


def test_deep_negative_rate_scenario_keeps_dashboard_working():
    payload = dict(SAMPLE_SCENARIO, investments=[{"name": "Crash", "amount": 1000, "rate": -150}])
    assert client.post("/api/scenarios", json=payload).status_code == 201
    resp = client.get("/api/scenarios/dashboard")
    assert resp.status_code == 200
    assert resp.json()["averageInvestmentReturn"] == -150


def test_scenario_rate_that_wipes_out_a_month_is_rejected():
    payload = dict(SAMPLE_SCENARIO, investments=[{"name": "Crash", "amount": 1000, "rate": -1500}])
    resp = client.post("/api/scenarios", json=payload)
    assert resp.status_code == 400
    assert any(e["field"] == "investments.0.rate" for e in resp.json()["errors"])

    sid = client.post("/api/scenarios", json=SAMPLE_SCENARIO).json()["id"]
    resp = client.put(f"/api/scenarios/{sid}", json={"investments": payload["investments"]})
    assert resp.status_code == 400
    assert client.get("/api/scenarios/dashboard").status_code == 200


def test_investment_growth_minus_100_percent():
    payload = dict(SAMPLE_INVESTMENT_REQUEST, annualReturnRate=-100, years=1)
    resp = client.post("/api/calculations/investment-growth", json=payload)
    assert resp.status_code == 200
    assert 0 < resp.json()["finalBalance"] < payload["initialAmount"] + 12 * payload["monthlyContribution"]


def test_horizon_beyond_100_years_is_rejected():
    payload = dict(SAMPLE_INVESTMENT_REQUEST, years=1e7)
    resp = client.post("/api/calculations/investment-growth", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {
        "message": "years must not exceed 1200 months (100 years).",
        "code": "invalid_input",
        "field": "years",
    }

    payload = dict(SAMPLE_RETIREMENT_REQUEST, lifeExpectancy=1e6)
    resp = client.post("/api/calculations/retirement-projection", json=payload)
    assert resp.status_code == 400
    assert resp.json()["field"] == "life_expectancy"

    resp = client.post("/api/scenarios", json=dict(SAMPLE_SCENARIO, timeframeYears=500))
    assert resp.status_code == 400


def test_scenario_holdings():
    sid = client.post("/api/scenarios", json=SAMPLE_SCENARIO).json()["id"]
    resp = client.get(f"/api/scenarios/{sid}/holdings")
    assert resp.status_code == 200
    holdings = resp.json()
    assert [h["name"] for h in holdings] == ["Index fund", "High-yield savings"]
    index_fund = holdings[0]
    assert index_fund["finalBalance"] > index_fund["amount"]
    assert index_fund["totalInterest"] == pytest.approx(index_fund["finalBalance"] - 8000, abs=0.01)
    assert index_fund["yearlyData"][-1]["month"] == 120


def test_scenario_holdings_missing_and_duplicates():
    assert client.get("/api/scenarios/nope/holdings").json() == {
        "message": "Scenario not found",
        "code": "not_found",
    }
    twice = [{"name": "Fund", "amount": 1, "rate": 5}, {"name": "Fund", "amount": 2, "rate": 3}]
    resp = client.post("/api/scenarios", json=dict(SAMPLE_SCENARIO, investments=twice))
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "investments"
