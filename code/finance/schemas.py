from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

# Engine outputs are frozen dataclasses; the app layer rounds and serializes them.


@dataclass(frozen=True)
class Investment:
    name: str
    amount: float
    rate: float


@dataclass(frozen=True)
class ScenarioParameters:
    initial_amount: float = 0.0
    monthly_income: float = 0.0
    monthly_expenses: float = 0.0
    investments: Tuple[Investment, ...] = ()
    savings_rate: float = 0.0
    inflation_rate: float = 2.0
    timeframe_years: float = 10.0

    @property
    def monthly_savings(self) -> float:
        return self.monthly_income - self.monthly_expenses


@dataclass(frozen=True)
class SimulationStep:
    period_index: int
    balance: float
    period_interest: float
    period_payment: float


@dataclass(frozen=True)
class ProjectionResult:
    final_balance: float
    total_interest: float
    total_contributions: float
    series: Tuple[SimulationStep, ...] = ()

    @property
    def periods(self) -> int:
        return len(self.series)


@dataclass(frozen=True)
class RetirementResult:
    accumulation: ProjectionResult
    drawdown: ProjectionResult
    sustainable: bool
    depletion_period: Optional[int]
    real_return_rate: float
    years_of_income: float

    @property
    def retirement_savings(self) -> float:
        return self.accumulation.final_balance


@dataclass(frozen=True)
class PaymentStrategy:
    description: str
    monthly_payment: float
    months_saved: int
    interest_saved: float


@dataclass(frozen=True)
class DebtPayoffResult:
    months_to_payoff: int
    total_interest_paid: float
    total_paid: float
    minimum_payment: float
    series: Tuple[SimulationStep, ...] = ()
    strategies: Tuple[PaymentStrategy, ...] = ()

    @property
    def years_to_payoff(self) -> float:
        return self.months_to_payoff / 12.0


@dataclass(frozen=True)
class Expense:
    category: str
    amount: float


@dataclass(frozen=True)
class SavingsGoal:
    name: str
    target_amount: float
    current_amount: float = 0.0
    allocation_percent: float = 0.0


@dataclass(frozen=True)
class BucketShare:
    amount: float
    percentage: float
    recommended_percentage: float


@dataclass(frozen=True)
class CategoryShare:
    category: str
    amount: float
    percentage: float


@dataclass(frozen=True)
class Recommendation:
    category: str
    priority: str
    text: str


@dataclass(frozen=True)
class GoalProgress:
    name: str
    target_amount: float
    current_amount: float
    allocation_percent: float
    progress: float
    months_to_target: Optional[int]
    status: str

    @property
    def reachable(self) -> bool:
        return self.months_to_target is not None


@dataclass(frozen=True)
class BudgetResult:
    income: float
    total_expenses: float
    current_savings: float
    savings_rate: float
    savings_goal: float
    savings_gap: float
    meeting_savings_goal: bool
    distribution: Dict[str, BucketShare]
    health_score: int
    recommendations: Tuple[Recommendation, ...] = ()
    expense_breakdown: Tuple[CategoryShare, ...] = ()
    goals: Tuple[GoalProgress, ...] = ()


@dataclass(frozen=True)
class DashboardSummary:
    active_scenarios: int
    net_worth_projection: float
    average_monthly_savings: float
    average_investment_return: float
    net_worth_by_year: Tuple[float, ...] = field(default_factory=tuple)
