import math
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .schemas import (
    BucketShare,
    BudgetResult,
    CategoryShare,
    Expense,
    GoalProgress,
    Recommendation,
    SavingsGoal,
)
from .utils import clamp, format_currency, percent_of, require_finite, require_non_negative, require_positive

NEEDS_TARGET = 50.0
WANTS_TARGET = 30.0
SAVINGS_TARGET = 20.0
CATEGORY_LIMIT = 30.0

HEALTH_WEIGHTS = {"needs": 0.4, "wants": 0.3, "savings": 0.3}
MIN_RECOMMENDATIONS = 3


class Bucket(str, Enum):
    NEEDS = "needs"
    WANTS = "wants"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


CATEGORY_BUCKETS: Dict[str, Bucket] = {
    "housing": Bucket.NEEDS,
    "utilities": Bucket.NEEDS,
    "insurance": Bucket.NEEDS,
    "debtpayments": Bucket.NEEDS,
}


def normalize_category(value: str) -> str:
    if not value:
        return ""
    cleaned = value.strip().lower()
    for ch in (" ", "_", "-"):
        cleaned = cleaned.replace(ch, "")
    return cleaned


def classify_category(category: str) -> Bucket:
    return CATEGORY_BUCKETS.get(normalize_category(category), Bucket.WANTS)


def _amounts(expenses: Iterable[Expense], name: str) -> List[Expense]:
    out = []
    for exp in expenses:
        require_non_negative(exp.amount, f"{name}.amount")
        out.append(exp)
    return out


def split_needs_wants(
    expenses: Sequence[Expense],
    fixed_expenses: Sequence[Expense],
    variable_expenses: Sequence[Expense],
) -> Tuple[float, float]:
    if fixed_expenses or variable_expenses:
        return sum(e.amount for e in fixed_expenses), sum(e.amount for e in variable_expenses)
    needs = sum(e.amount for e in expenses if classify_category(e.category) is Bucket.NEEDS)
    wants = sum(e.amount for e in expenses if classify_category(e.category) is Bucket.WANTS)
    return needs, wants


def _over_target_score(percentage: float, target: float) -> float:
    excess = max(percentage - target, 0.0)
    return clamp(100.0 - 100.0 * excess / target, 0.0, 100.0)


def _under_target_score(percentage: float, target: float) -> float:
    shortfall = max(target - percentage, 0.0)
    return clamp(100.0 - 100.0 * shortfall / target, 0.0, 100.0)


def compute_health_score(needs_pct: float, wants_pct: float, savings_pct: float) -> int:
    score = (
        HEALTH_WEIGHTS["needs"] * _over_target_score(needs_pct, NEEDS_TARGET)
        + HEALTH_WEIGHTS["wants"] * _over_target_score(wants_pct, WANTS_TARGET)
        + HEALTH_WEIGHTS["savings"] * _under_target_score(savings_pct, SAVINGS_TARGET)
    )
    return int(round(clamp(score, 0.0, 100.0)))


def expense_breakdown(expenses: Iterable[Expense], income: float) -> List[CategoryShare]:
    totals: Dict[str, float] = {}
    for exp in expenses:
        totals[exp.category] = totals.get(exp.category, 0.0) + exp.amount
    return [
        CategoryShare(category=cat, amount=amount, percentage=percent_of(amount, income))
        for cat, amount in totals.items()
    ]


def goal_progress(goal: SavingsGoal, monthly_savings: float) -> GoalProgress:
    target = require_positive(goal.target_amount, "goals.target_amount")
    current = require_non_negative(goal.current_amount, "goals.current_amount")
    allocation = require_finite(goal.allocation_percent, "goals.allocation_percent")

    progress = percent_of(current, target)
    remaining = target - current
    months: Optional[int]
    if remaining <= 0:
        months, status = 0, "met"
    else:
        monthly_allocation = monthly_savings * allocation / 100.0
        if monthly_allocation <= 0:
            months, status = None, "unreachable"
        else:
            months, status = math.ceil(remaining / monthly_allocation), "on_track"
    return GoalProgress(
        name=goal.name,
        target_amount=target,
        current_amount=current,
        allocation_percent=allocation,
        progress=progress,
        months_to_target=months,
        status=status,
    )


def _rule_recommendations(
    needs_pct: float,
    wants_pct: float,
    savings_pct: float,
    breakdown: Sequence[CategoryShare],
) -> List[Recommendation]:
    recs: List[Recommendation] = []
    if needs_pct > NEEDS_TARGET:
        recs.append(Recommendation(
            category=Bucket.NEEDS.value,
            priority=Priority.HIGH.value,
            text=f"Essential expenses take {needs_pct:.1f}% of income. Aim for {NEEDS_TARGET:.0f}% "
                 "or less by renegotiating fixed costs such as rent, insurance or loan terms.",
        ))
    if wants_pct > WANTS_TARGET:
        recs.append(Recommendation(
            category=Bucket.WANTS.value,
            priority=Priority.MEDIUM.value,
            text=f"Discretionary spending is {wants_pct:.1f}% of income. Trim it toward "
                 f"{WANTS_TARGET:.0f}% to free up cash for savings.",
        ))
    if savings_pct < SAVINGS_TARGET:
        priority = Priority.HIGH if savings_pct < SAVINGS_TARGET / 2 else Priority.MEDIUM
        recs.append(Recommendation(
            category="savings",
            priority=priority.value,
            text=f"You are saving {savings_pct:.1f}% of income. Work toward at least "
                 f"{SAVINGS_TARGET:.0f}%.",
        ))
    for share in breakdown:
        if share.percentage > CATEGORY_LIMIT:
            recs.append(Recommendation(
                category=share.category,
                priority=Priority.MEDIUM.value,
                text=f"{share.category} alone uses {share.percentage:.1f}% of income. "
                     f"Look for ways to bring it under {CATEGORY_LIMIT:.0f}%.",
            ))
    return recs


def _filler_recommendations(savings_gap: float, savings_goal_percent: float, total_expenses: float) -> List[Recommendation]:
    if savings_gap > 0:
        gap_text = (
            f"Save {format_currency(savings_gap)} more each month to reach your "
            f"{savings_goal_percent:g}% savings goal."
        )
    else:
        gap_text = (
            f"You are meeting your {savings_goal_percent:g}% savings goal. Consider raising it "
            "or directing the surplus to investments."
        )
    return [
        Recommendation(category="savings", priority=Priority.LOW.value, text=gap_text),
        Recommendation(
            category="emergency_fund",
            priority=Priority.LOW.value,
            text=f"Keep an emergency fund of 3-6 months of expenses "
                 f"({format_currency(total_expenses * 3)} to {format_currency(total_expenses * 6)}).",
        ),
        Recommendation(
            category="savings",
            priority=Priority.LOW.value,
            text="Automate a transfer to savings on payday so saving happens before spending.",
        ),
    ]


def analyze(
    monthly_income: float,
    expenses: Sequence[Expense],
    savings_goal_percent: float,
    fixed_expenses: Sequence[Expense] = (),
    variable_expenses: Sequence[Expense] = (),
    goals: Sequence[SavingsGoal] = (),
) -> BudgetResult:
    """Score a monthly budget against the 50/30/20 rule.

    Needs and wants come from the explicit fixed/variable lists when either is
    given, otherwise from classifying ``expenses`` by category. Savings is
    whatever income is left after ``expenses``.
    """
    income = require_positive(monthly_income, "monthly_income")
    savings_goal_percent = require_finite(savings_goal_percent, "savings_goal_percent")
    expenses = _amounts(expenses, "expenses")
    fixed_expenses = _amounts(fixed_expenses, "fixed_expenses")
    variable_expenses = _amounts(variable_expenses, "variable_expenses")

    total_expenses = sum(e.amount for e in expenses)
    current_savings = income - total_expenses
    savings_rate = percent_of(current_savings, income)

    savings_goal = income * savings_goal_percent / 100.0
    savings_gap = savings_goal - current_savings

    needs, wants = split_needs_wants(expenses, fixed_expenses, variable_expenses)
    needs_pct = percent_of(needs, income)
    wants_pct = percent_of(wants, income)
    distribution = {
        "needs": BucketShare(amount=needs, percentage=needs_pct, recommended_percentage=NEEDS_TARGET),
        "wants": BucketShare(amount=wants, percentage=wants_pct, recommended_percentage=WANTS_TARGET),
        "savings": BucketShare(amount=current_savings, percentage=savings_rate, recommended_percentage=SAVINGS_TARGET),
    }

    breakdown = expense_breakdown(expenses, income)
    recommendations = _rule_recommendations(needs_pct, wants_pct, savings_rate, breakdown)
    fillers = iter(_filler_recommendations(savings_gap, savings_goal_percent, total_expenses))
    while len(recommendations) < MIN_RECOMMENDATIONS:
        filler = next(fillers, None)
        if filler is None:
            break
        recommendations.append(filler)

    return BudgetResult(
        income=income,
        total_expenses=total_expenses,
        current_savings=current_savings,
        savings_rate=savings_rate,
        savings_goal=savings_goal,
        savings_gap=savings_gap,
        meeting_savings_goal=current_savings >= savings_goal,
        distribution=distribution,
        health_score=compute_health_score(needs_pct, wants_pct, savings_rate),
        recommendations=tuple(recommendations),
        expense_breakdown=tuple(breakdown),
        goals=tuple(goal_progress(g, current_savings) for g in goals),
    )
