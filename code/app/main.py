import logging
from typing import List

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from finance.errors import FinanceError
from finance.utils import round_money

from app.core.config import API_TITLE, LOG_FORMAT, LOG_LEVEL
from app.core.models import (
    BudgetRequest,
    BudgetResponse,
    DashboardResponse,
    DebtPayoffRequest,
    DebtPayoffResponse,
    HoldingProjection,
    InvestmentGrowthRequest,
    Projection,
    RetirementRequest,
    RetirementResponse,
    Scenario,
    ScenarioIn,
    ScenarioUpdate,
)
from app.core.pipeline import (
    run_budget_analysis,
    run_debt_payoff,
    run_investment_growth,
    run_retirement_projection,
    run_scenario_holdings,
)
from app.core.scenarios import ScenarioStore
from app.core.tools import money_list

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(title=API_TITLE)
store = ScenarioStore()


@app.exception_handler(FinanceError)
async def finance_error_handler(request: Request, exc: FinanceError):
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=400, content={"message": exc.message, "code": exc.code, **exc.context()})


HTTP_ERROR_CODES = {404: "not_found", 405: "method_not_allowed"}


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    code = HTTP_ERROR_CODES.get(exc.status_code, "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail), "code": code},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning("%s %s invalid input: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid input. All values must be finite numbers.", "code": "invalid_input", "errors": errors},
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/calculations/investment-growth", response_model=Projection)
def investment_growth(payload: InvestmentGrowthRequest):
    return run_investment_growth(payload)


@app.post("/api/calculations/retirement-projection", response_model=RetirementResponse)
def retirement_projection(payload: RetirementRequest):
    return run_retirement_projection(payload)


@app.post("/api/calculations/debt-payoff", response_model=DebtPayoffResponse)
def debt_payoff(payload: DebtPayoffRequest):
    return run_debt_payoff(payload)


@app.post("/api/calculations/budget-analysis", response_model=BudgetResponse)
def budget_analysis(payload: BudgetRequest):
    return run_budget_analysis(payload)


@app.get("/api/scenarios", response_model=List[Scenario])
def list_scenarios():
    return store.list()


@app.get("/api/scenarios/dashboard", response_model=DashboardResponse)
def scenarios_dashboard():
    summary = store.dashboard()
    return DashboardResponse(
        active_scenarios=summary.active_scenarios,
        net_worth_projection=round_money(summary.net_worth_projection),
        average_monthly_savings=round_money(summary.average_monthly_savings),
        average_investment_return=round_money(summary.average_investment_return),
        net_worth_by_year=money_list(summary.net_worth_by_year),
    )


@app.get("/api/scenarios/{scenario_id}", response_model=Scenario)
def get_scenario(scenario_id: str):
    scenario = store.get(scenario_id)
    if scenario is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return scenario


@app.get("/api/scenarios/{scenario_id}/holdings", response_model=List[HoldingProjection])
def scenario_holdings(scenario_id: str):
    scenario = store.get(scenario_id)
    if scenario is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return run_scenario_holdings(scenario)


@app.post("/api/scenarios", response_model=Scenario, status_code=201)
def create_scenario(payload: ScenarioIn):
    return store.create(payload)


@app.put("/api/scenarios/{scenario_id}", response_model=Scenario)
def update_scenario(scenario_id: str, payload: ScenarioUpdate):
    scenario = store.update(scenario_id, payload)
    if scenario is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return scenario


@app.delete("/api/scenarios/{scenario_id}")
def delete_scenario(scenario_id: str):
    if not store.delete(scenario_id):
        raise HTTPException(status_code=404, detail="Scenario not found")
    return {"message": "Scenario deleted successfully"}
