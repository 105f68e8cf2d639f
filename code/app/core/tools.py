import math
from typing import List, Sequence

from finance.schemas import SimulationStep
from finance.utils import round_money

from .config import SERIES_SAMPLE_MONTHS
from .models import Step, YearPoint


def sample_series(series: Sequence[SimulationStep], every: int = SERIES_SAMPLE_MONTHS) -> List[SimulationStep]:
    """Keep the first step, every ``every``-th step and the last step."""
    if not series:
        return []
    last = series[-1].period_index
    return [
        s for s in series
        if s.period_index == 1 or s.period_index % every == 0 or s.period_index == last
    ]


def step_out(step: SimulationStep) -> Step:
    return Step(
        period_index=step.period_index,
        balance=round_money(step.balance),
        period_interest=round_money(step.period_interest),
        period_payment=round_money(step.period_payment),
    )


def year_point(step: SimulationStep) -> YearPoint:
    return YearPoint(
        month=step.period_index,
        year=math.ceil(step.period_index / 12),
        balance=round_money(step.balance),
        interest=round_money(step.period_interest),
    )


def money_list(values: Sequence[float]) -> List[float]:
    return [round_money(v) for v in values]
