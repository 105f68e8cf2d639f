import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from finance.dashboard import summarize_scenarios
from finance.schemas import DashboardSummary, Investment, ScenarioParameters

from .config import DASHBOARD_HORIZON_YEARS
from .models import Scenario, ScenarioIn, ScenarioUpdate

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def to_parameters(scenario: ScenarioIn) -> ScenarioParameters:
    return ScenarioParameters(
        initial_amount=scenario.initial_amount,
        monthly_income=scenario.monthly_income,
        monthly_expenses=scenario.monthly_expenses,
        investments=tuple(Investment(name=i.name, amount=i.amount, rate=i.rate) for i in scenario.investments),
        savings_rate=scenario.savings_rate,
        inflation_rate=scenario.inflation_rate,
        timeframe_years=scenario.timeframe_years,
    )


class ScenarioStore:
    """Process-local scenario records keyed by generated id."""

    def __init__(self):
        self._items: Dict[str, Scenario] = {}
        self._lock = threading.Lock()

    def list(self) -> List[Scenario]:
        with self._lock:
            return list(self._items.values())

    def get(self, scenario_id: str) -> Optional[Scenario]:
        with self._lock:
            return self._items.get(scenario_id)

    def create(self, payload: ScenarioIn) -> Scenario:
        now = _now()
        scenario = Scenario(id=uuid.uuid4().hex, created_at=now, updated_at=now, **payload.model_dump())
        with self._lock:
            self._items[scenario.id] = scenario
        logger.info("created scenario %s (%s)", scenario.id, scenario.name)
        return scenario

    def update(self, scenario_id: str, payload: ScenarioUpdate) -> Optional[Scenario]:
        with self._lock:
            current = self._items.get(scenario_id)
            if current is None:
                return None
            changes = payload.model_dump(exclude_unset=True, exclude_none=True)
            data = {**current.model_dump(), **changes, "id": scenario_id, "updated_at": _now()}
            updated = Scenario.model_validate(data)
            self._items[scenario_id] = updated
        logger.info("updated scenario %s fields=%s", scenario_id, sorted(changes))
        return updated

    def delete(self, scenario_id: str) -> bool:
        with self._lock:
            removed = self._items.pop(scenario_id, None)
        if removed is not None:
            logger.info("deleted scenario %s", scenario_id)
        return removed is not None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def dashboard(self, horizon_years: int = DASHBOARD_HORIZON_YEARS) -> DashboardSummary:
        return summarize_scenarios([to_parameters(s) for s in self.list()], horizon_years=horizon_years)
