import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse, urlunparse

import requests

FINANCE_API_URL = os.getenv("FINANCE_API_URL", "http://127.0.0.1:8000")
FINANCE_API_TIMEOUT = float(os.getenv("FINANCE_API_TIMEOUT", "10"))
FINANCE_HEALTH_TIMEOUT = float(os.getenv("FINANCE_HEALTH_TIMEOUT", "1.0"))

CALCULATIONS = ("investment-growth", "retirement-projection", "debt-payoff", "budget-analysis")

logger = logging.getLogger(__name__)


class FinanceApiError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload or {}


def _base_url() -> str:
    parsed = urlparse(FINANCE_API_URL)
    path = parsed.path.rstrip("/")
    if path.endswith("/api"):
        path = path[: -len("/api")]
    base = parsed._replace(path=path, params="", query="", fragment="")
    return urlunparse(base)


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or body)
    return str(body)


def _request(method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
    url = f"{_base_url()}{path}"
    try:
        resp = requests.request(method, url, json=json, timeout=FINANCE_API_TIMEOUT)
    except requests.RequestException as exc:
        raise FinanceApiError(f"Finance API is unreachable at {url}: {exc}") from exc
    if not resp.ok:
        message = _error_message(resp)
        logger.warning("%s %s failed with %s: %s", method, path, resp.status_code, message)
        try:
            payload = resp.json()
        except ValueError:
            payload = {}
        raise FinanceApiError(message, status_code=resp.status_code, payload=payload if isinstance(payload, dict) else {})
    return resp.json()


def check_api_online(timeout: Optional[float] = None) -> bool:
    health_timeout = timeout if timeout is not None else FINANCE_HEALTH_TIMEOUT
    try:
        resp = requests.get(f"{_base_url()}/health", timeout=health_timeout)
    except requests.RequestException:
        return False
    return resp.ok


def calculate(name: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    if name not in CALCULATIONS:
        raise ValueError(f"Unknown calculation: {name}")
    return _request("POST", f"/api/calculations/{name}", json=payload)


def list_scenarios() -> List[Dict[str, Any]]:
    return _request("GET", "/api/scenarios")


def create_scenario(payload: Dict[str, Any]) -> Dict[str, Any]:
    return _request("POST", "/api/scenarios", json=payload)


def update_scenario(scenario_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    return _request("PUT", f"/api/scenarios/{scenario_id}", json=payload)


def delete_scenario(scenario_id: str) -> Dict[str, Any]:
    return _request("DELETE", f"/api/scenarios/{scenario_id}")


def scenario_holdings(scenario_id: str) -> List[Dict[str, Any]]:
    return _request("GET", f"/api/scenarios/{scenario_id}/holdings")


def dashboard() -> Dict[str, Any]:
    return _request("GET", "/api/scenarios/dashboard")
