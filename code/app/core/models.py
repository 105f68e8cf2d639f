from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from finance.simulator import MAX_YEARS, MIN_ANNUAL_RATE

from .config import DEFAULT_INFLATION_RATE, DEFAULT_TIMEFRAME_YEARS


class CamelModel(BaseModel):
    # JSON bodies use camelCase; NaN/Infinity are rejected at the boundary.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


# --- requests ---------------------------------------------------------------


class InvestmentGrowthRequest(CamelModel):
    initial_amount: float = Field(ge=0)
    monthly_contribution: float = Field(ge=0)
    annual_return_rate: float
    years: float


class RetirementRequest(CamelModel):
    current_age: float = Field(ge=0)
    retirement_age: float = Field(ge=0)
    life_expectancy: float = Field(ge=0)
    current_savings: float = Field(ge=0)
    monthly_savings: float = Field(ge=0)
    monthly_expenses_in_retirement: float = Field(ge=0)
    annual_return_rate: float
    inflation_rate: float


class DebtPayoffRequest(CamelModel):
    debt_amount: float = Field(ge=0)
    interest_rate: float = Field(ge=0)
    monthly_payment: float


class ExpenseItem(CamelModel):
    category: str
    amount: float = Field(ge=0)


class GoalItem(CamelModel):
    name: str
    target_amount: float = Field(gt=0)
    current_amount: float = Field(ge=0, default=0.0)
    allocation_percent: float = Field(ge=0, le=100, default=0.0)


class BudgetRequest(CamelModel):
    monthly_income: float = Field(gt=0)
    expenses: List[ExpenseItem]
    savings_goal_percent: float = Field(ge=0, le=100)
    fixed_expenses: List[ExpenseItem] = []
    variable_expenses: List[ExpenseItem] = []
    goals: List[GoalItem] = []


class InvestmentItem(CamelModel):
    name: str
    amount: float = Field(ge=0)
    rate: float = Field(gt=MIN_ANNUAL_RATE)


def _unique_names(items: Optional[List[InvestmentItem]]) -> Optional[List[InvestmentItem]]:
    if items:
        names = [i.name for i in items]
        if len(set(names)) != len(names):
            raise ValueError("Investment names must be unique.")
    return items


class ScenarioIn(CamelModel):
    name: str = Field(min_length=1)
    description: str = ""
    initial_amount: float = Field(ge=0, default=0.0)
    monthly_income: float = Field(ge=0, default=0.0)
    monthly_expenses: float = Field(ge=0, default=0.0)
    investments: List[InvestmentItem] = []
    savings_rate: float = 0.0
    inflation_rate: float = DEFAULT_INFLATION_RATE
    timeframe_years: float = Field(ge=0, le=MAX_YEARS, default=DEFAULT_TIMEFRAME_YEARS)

    @field_validator("investments")
    @classmethod
    def unique_investment_names(cls, value):
        return _unique_names(value)


class ScenarioUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    initial_amount: Optional[float] = Field(default=None, ge=0)
    monthly_income: Optional[float] = Field(default=None, ge=0)
    monthly_expenses: Optional[float] = Field(default=None, ge=0)
    investments: Optional[List[InvestmentItem]] = None
    savings_rate: Optional[float] = None
    inflation_rate: Optional[float] = None
    timeframe_years: Optional[float] = Field(default=None, ge=0, le=MAX_YEARS)

    @field_validator("investments")
    @classmethod
    def unique_investment_names(cls, value):
        return _unique_names(value)


# --- responses --------------------------------------------------------------


class Step(CamelModel):
    period_index: int
    balance: float
    period_interest: float
    period_payment: float


class YearPoint(CamelModel):
    month: int
    year: int
    balance: float
    interest: float


class Projection(CamelModel):
    final_balance: float
    total_interest: float
    total_contributions: float
    series: List[Step]
    yearly_data: List[YearPoint]


class RetirementResponse(CamelModel):
    accumulation: Projection
    drawdown: Projection
    sustainable: bool
    depletion_period: Optional[int]
    retirement_savings: float
    final_balance: float
    real_return_rate: float
    years_of_income: float


class Strategy(CamelModel):
    description: str
    monthly_payment: float
    months_saved: int
    interest_saved: float


class DebtPayoffResponse(CamelModel):
    months_to_payoff: int
    years_to_payoff: float
    total_interest_paid: float
    total_paid: float
    minimum_payment: float
    series: List[Step]
    strategies: List[Strategy]


class BucketOut(CamelModel):
    amount: float
    percentage: float
    recommended_percentage: float


class Distribution(CamelModel):
    needs: BucketOut
    wants: BucketOut
    savings: BucketOut


class RecommendationOut(CamelModel):
    category: str
    priority: str
    text: str


class CategoryOut(CamelModel):
    category: str
    amount: float
    percentage: float


class GoalOut(CamelModel):
    name: str
    target_amount: float
    current_amount: float
    allocation_percent: float
    progress: float
    months_to_target: Optional[int]
    status: str


class BudgetResponse(CamelModel):
    income: float
    total_expenses: float
    current_savings: float
    savings_rate: float
    savings_goal: float
    savings_gap: float
    meeting_savings_goal: bool
    distribution: Distribution
    health_score: int = Field(ge=0, le=100)
    recommendations: List[RecommendationOut]
    expense_breakdown: List[CategoryOut]
    goals: List[GoalOut]


class Scenario(ScenarioIn):
    id: str
    created_at: datetime
    updated_at: datetime


class DashboardResponse(CamelModel):
    active_scenarios: int
    net_worth_projection: float
    average_monthly_savings: float
    average_investment_return: float
    net_worth_by_year: List[float]


class HoldingProjection(CamelModel):
    name: str
    amount: float
    rate: float
    final_balance: float
    total_interest: float
    yearly_data: List[YearPoint]
