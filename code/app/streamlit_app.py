# streamlit_app.py
import os
import sys
from typing import Any, Dict, List

import streamlit as st

# Streamlit runs this file as a script; put the code root on sys.path so `app` imports work.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app.client import finance_client  # noqa: E402
from app.client.finance_client import FinanceApiError  # noqa: E402
from app.core.sample_payloads import (  # noqa: E402
    SAMPLE_BUDGET_REQUEST,
    SAMPLE_DEBT_REQUEST,
    SAMPLE_INVESTMENT_REQUEST,
    SAMPLE_RETIREMENT_REQUEST,
    SAMPLE_SCENARIO,
)


def format_currency(value: float) -> str:
    return f"${value:,.0f}"


def run_calculation(name: str, payload: Dict[str, Any]):
    try:
        return finance_client.calculate(name, payload)
    except FinanceApiError as e:
        st.error(str(e))
        return None


def balance_chart(points: List[Dict[str, Any]], label: str = "balance"):
    if points:
        st.line_chart({label: [p["balance"] for p in points]})


st.set_page_config(page_title="Personal Finance Simulator", layout="wide")
st.title("Personal Finance Simulator")

with st.sidebar:
    st.header("API")
    st.caption(f"Backend: {finance_client.FINANCE_API_URL}")
    if finance_client.check_api_online():
        st.success("Connected")
    else:
        st.warning("Backend not reachable. Start it with `uvicorn app.main:app`.")

tab_invest, tab_retire, tab_debt, tab_budget, tab_scenarios = st.tabs(
    ["Investment growth", "Retirement", "Debt payoff", "Budget", "Scenarios"]
)

with tab_invest:
    with st.form("investment"):
        s = SAMPLE_INVESTMENT_REQUEST
        initial = st.number_input("Initial amount", min_value=0.0, value=float(s["initialAmount"]))
        monthly = st.number_input("Monthly contribution", min_value=0.0, value=float(s["monthlyContribution"]))
        rate = st.number_input("Annual return (%)", value=float(s["annualReturnRate"]))
        years = st.number_input("Years", min_value=0, value=int(s["years"]))
        submitted = st.form_submit_button("Calculate")
    if submitted:
        result = run_calculation("investment-growth", {
            "initialAmount": initial, "monthlyContribution": monthly, "annualReturnRate": rate, "years": years,
        })
        if result:
            c1, c2, c3 = st.columns(3)
            c1.metric("Final balance", format_currency(result["finalBalance"]))
            c2.metric("Total contributions", format_currency(result["totalContributions"]))
            c3.metric("Total interest", format_currency(result["totalInterest"]))
            balance_chart(result["yearlyData"])

with tab_retire:
    with st.form("retirement"):
        s = SAMPLE_RETIREMENT_REQUEST
        c1, c2, c3 = st.columns(3)
        current_age = c1.number_input("Current age", min_value=0, value=s["currentAge"])
        retirement_age = c2.number_input("Retirement age", min_value=0, value=s["retirementAge"])
        life_expectancy = c3.number_input("Life expectancy", min_value=0, value=s["lifeExpectancy"])
        savings = st.number_input("Current savings", min_value=0.0, value=float(s["currentSavings"]))
        monthly_savings = st.number_input("Monthly savings", min_value=0.0, value=float(s["monthlySavings"]))
        expenses = st.number_input(
            "Monthly expenses in retirement", min_value=0.0, value=float(s["monthlyExpensesInRetirement"])
        )
        annual_return = st.number_input("Annual return (%)", value=float(s["annualReturnRate"]))
        inflation = st.number_input("Inflation (%)", value=float(s["inflationRate"]))
        submitted = st.form_submit_button("Project")
    if submitted:
        result = run_calculation("retirement-projection", {
            "currentAge": current_age,
            "retirementAge": retirement_age,
            "lifeExpectancy": life_expectancy,
            "currentSavings": savings,
            "monthlySavings": monthly_savings,
            "monthlyExpensesInRetirement": expenses,
            "annualReturnRate": annual_return,
            "inflationRate": inflation,
        })
        if result:
            c1, c2 = st.columns(2)
            c1.metric("Savings at retirement", format_currency(result["retirementSavings"]))
            c2.metric("Balance at life expectancy", format_currency(result["finalBalance"]))
            if result["sustainable"]:
                st.success("Your retirement plan is sustainable!")
            else:
                st.error(f"Your savings may run out {result['yearsOfIncome']:.1f} years into retirement.")
            points = result["accumulation"]["yearlyData"] + result["drawdown"]["yearlyData"]
            balance_chart(points)

with tab_debt:
    with st.form("debt"):
        s = SAMPLE_DEBT_REQUEST
        amount = st.number_input("Debt amount", min_value=0.0, value=float(s["debtAmount"]))
        interest = st.number_input("Interest rate (%)", min_value=0.0, value=float(s["interestRate"]))
        payment = st.number_input("Monthly payment", min_value=0.0, value=float(s["monthlyPayment"]))
        submitted = st.form_submit_button("Calculate payoff")
    if submitted:
        result = run_calculation("debt-payoff", {
            "debtAmount": amount, "interestRate": interest, "monthlyPayment": payment,
        })
        if result:
            c1, c2, c3 = st.columns(3)
            c1.metric("Months to payoff", result["monthsToPayoff"])
            c2.metric("Total interest", format_currency(result["totalInterestPaid"]))
            c3.metric("Total paid", format_currency(result["totalPaid"]))
            balance_chart(result["series"])
            for strategy in result["strategies"]:
                st.info(
                    f"{strategy['description']}: saves {strategy['monthsSaved']} months "
                    f"and {format_currency(strategy['interestSaved'])} in interest."
                )

with tab_budget:
    st.caption("Edit the expense table and run the analysis.")
    with st.form("budget"):
        income = st.number_input("Monthly income", min_value=0.0, value=float(SAMPLE_BUDGET_REQUEST["monthlyIncome"]))
        goal = st.number_input("Savings goal (%)", min_value=0.0, max_value=100.0,
                               value=float(SAMPLE_BUDGET_REQUEST["savingsGoalPercent"]))
        expenses = st.data_editor(SAMPLE_BUDGET_REQUEST["expenses"], num_rows="dynamic", key="expenses")
        submitted = st.form_submit_button("Analyze")
    if submitted:
        rows = expenses.to_dict("records") if hasattr(expenses, "to_dict") else list(expenses)
        payload = dict(SAMPLE_BUDGET_REQUEST, monthlyIncome=income, savingsGoalPercent=goal,
                       expenses=[e for e in rows if e.get("category") and e.get("amount") is not None])
        result = run_calculation("budget-analysis", payload)
        if result:
            c1, c2, c3 = st.columns(3)
            c1.metric("Health score", f"{result['healthScore']}/100")
            c2.metric("Savings rate", f"{result['savingsRate']:.1f}%")
            c3.metric("Savings gap", format_currency(result["savingsGap"]))
            st.bar_chart(result["expenseBreakdown"], x="category", y="amount")
            for rec in result["recommendations"]:
                st.markdown(f"- **{rec['priority'].upper()}** ({rec['category']}): {rec['text']}")
            with st.expander("Goals"):
                st.json(result["goals"])

with tab_scenarios:
    try:
        scenarios = finance_client.list_scenarios()
        summary = finance_client.dashboard()
    except FinanceApiError as e:
        st.error(str(e))
        scenarios, summary = [], None

    if summary:
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Active scenarios", summary["activeScenarios"])
        c2.metric("Net worth projection", format_currency(summary["netWorthProjection"]))
        c3.metric("Avg monthly savings", format_currency(summary["averageMonthlySavings"]))
        c4.metric("Avg investment return", f"{summary['averageInvestmentReturn']:.1f}%")
        st.line_chart({"net worth": summary["netWorthByYear"]})

    for sc in scenarios:
        with st.expander(sc["name"]):
            st.json(sc)
            if sc["investments"]:
                try:
                    holdings = finance_client.scenario_holdings(sc["id"])
                except FinanceApiError as e:
                    st.error(str(e))
                else:
                    st.table([
                        {"holding": h["name"], "rate": h["rate"], "final balance": format_currency(h["finalBalance"])}
                        for h in holdings
                    ])
            if st.button("Delete", key=f"delete-{sc['id']}"):
                finance_client.delete_scenario(sc["id"])
                st.rerun()

    if st.button("Add sample scenario"):
        try:
            finance_client.create_scenario(SAMPLE_SCENARIO)
        except FinanceApiError as e:
            st.error(str(e))
        else:
            st.rerun()
