import logging
from typing import List

from finance import budget, debt, investment, retirement
from finance.schemas import Expense, Investment, ProjectionResult, SavingsGoal
from finance.utils import round_money

from .models import (
    BucketOut,
    BudgetRequest,
    BudgetResponse,
    CategoryOut,
    DebtPayoffRequest,
    DebtPayoffResponse,
    Distribution,
    ExpenseItem,
    GoalOut,
    HoldingProjection,
    InvestmentGrowthRequest,
    Projection,
    RecommendationOut,
    RetirementRequest,
    RetirementResponse,
    Scenario,
    Strategy,
)
from .tools import sample_series, step_out, year_point

logger = logging.getLogger(__name__)


def _projection(result: ProjectionResult) -> Projection:
    return Projection(
        final_balance=round_money(result.final_balance),
        total_interest=round_money(result.total_interest),
        total_contributions=round_money(result.total_contributions),
        series=[step_out(s) for s in result.series],
        yearly_data=[year_point(s) for s in sample_series(result.series)],
    )


def _expenses(items: List[ExpenseItem]) -> List[Expense]:
    return [Expense(category=e.category, amount=e.amount) for e in items]


def run_investment_growth(payload: InvestmentGrowthRequest) -> Projection:
    result = investment.project_growth(
        payload.initial_amount,
        payload.monthly_contribution,
        payload.annual_return_rate,
        payload.years,
    )
    logger.info("investment growth: %d periods, final balance %.2f", result.periods, result.final_balance)
    return _projection(result)


def run_retirement_projection(payload: RetirementRequest) -> RetirementResponse:
    result = retirement.plan_retirement(
        payload.current_age,
        payload.retirement_age,
        payload.life_expectancy,
        payload.current_savings,
        payload.monthly_savings,
        payload.monthly_expenses_in_retirement,
        payload.annual_return_rate,
        payload.inflation_rate,
    )
    logger.info(
        "retirement projection: savings %.2f, sustainable=%s, depletion_period=%s",
        result.retirement_savings,
        result.sustainable,
        result.depletion_period,
    )
    return RetirementResponse(
        accumulation=_projection(result.accumulation),
        drawdown=_projection(result.drawdown),
        sustainable=result.sustainable,
        depletion_period=result.depletion_period,
        retirement_savings=round_money(result.retirement_savings),
        final_balance=round_money(result.drawdown.final_balance),
        real_return_rate=round_money(result.real_return_rate),
        years_of_income=round_money(result.years_of_income),
    )


def run_debt_payoff(payload: DebtPayoffRequest) -> DebtPayoffResponse:
    result = debt.plan_payoff(payload.debt_amount, payload.interest_rate, payload.monthly_payment)
    logger.info("debt payoff: %d months, interest %.2f", result.months_to_payoff, result.total_interest_paid)
    return DebtPayoffResponse(
        months_to_payoff=result.months_to_payoff,
        years_to_payoff=round_money(result.years_to_payoff),
        total_interest_paid=round_money(result.total_interest_paid),
        total_paid=round_money(result.total_paid),
        minimum_payment=round_money(result.minimum_payment),
        series=[step_out(s) for s in result.series],
        strategies=[
            Strategy(
                description=s.description,
                monthly_payment=round_money(s.monthly_payment),
                months_saved=s.months_saved,
                interest_saved=round_money(s.interest_saved),
            )
            for s in result.strategies
        ],
    )


def run_budget_analysis(payload: BudgetRequest) -> BudgetResponse:
    result = budget.analyze(
        payload.monthly_income,
        _expenses(payload.expenses),
        payload.savings_goal_percent,
        fixed_expenses=_expenses(payload.fixed_expenses),
        variable_expenses=_expenses(payload.variable_expenses),
        goals=[
            SavingsGoal(
                name=g.name,
                target_amount=g.target_amount,
                current_amount=g.current_amount,
                allocation_percent=g.allocation_percent,
            )
            for g in payload.goals
        ],
    )
    logger.info("budget analysis: health score %d, %d recommendations", result.health_score, len(result.recommendations))

    def bucket(name: str) -> BucketOut:
        share = result.distribution[name]
        return BucketOut(
            amount=round_money(share.amount),
            percentage=round_money(share.percentage),
            recommended_percentage=share.recommended_percentage,
        )

    return BudgetResponse(
        income=round_money(result.income),
        total_expenses=round_money(result.total_expenses),
        current_savings=round_money(result.current_savings),
        savings_rate=round_money(result.savings_rate),
        savings_goal=round_money(result.savings_goal),
        savings_gap=round_money(result.savings_gap),
        meeting_savings_goal=result.meeting_savings_goal,
        distribution=Distribution(needs=bucket("needs"), wants=bucket("wants"), savings=bucket("savings")),
        health_score=result.health_score,
        recommendations=[
            RecommendationOut(category=r.category, priority=r.priority, text=r.text)
            for r in result.recommendations
        ],
        expense_breakdown=[
            CategoryOut(category=c.category, amount=round_money(c.amount), percentage=round_money(c.percentage))
            for c in result.expense_breakdown
        ],
        goals=[
            GoalOut(
                name=g.name,
                target_amount=round_money(g.target_amount),
                current_amount=round_money(g.current_amount),
                allocation_percent=g.allocation_percent,
                progress=round_money(g.progress),
                months_to_target=g.months_to_target,
                status=g.status,
            )
            for g in result.goals
        ],
    )


def run_scenario_holdings(scenario: Scenario) -> List[HoldingProjection]:
    holdings = [Investment(name=i.name, amount=i.amount, rate=i.rate) for i in scenario.investments]
    projections = investment.project_portfolio(holdings, scenario.timeframe_years)
    logger.info("scenario %s: projected %d holdings", scenario.id, len(projections))
    return [
        HoldingProjection(
            name=h.name,
            amount=round_money(h.amount),
            rate=h.rate,
            final_balance=round_money(projections[h.name].final_balance),
            total_interest=round_money(projections[h.name].total_interest),
            yearly_data=[year_point(s) for s in sample_series(projections[h.name].series)],
        )
        for h in holdings
    ]
