import math
from typing import Any, Optional

from .errors import InvalidInputError


def safe_div(a: float, b: float, default: Optional[float] = None) -> Optional[float]:
    if b == 0:
        return default
    return a / b


def round_money(value: float, ndigits: int = 2) -> float:
    # Presentation boundary only; the engine keeps full precision.
    rounded = round(value, ndigits)
    return 0.0 if rounded == 0 else rounded


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))


def format_currency(value: float) -> str:
    return f"${value:,.2f}"


def require_finite(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{name} must be a number.", field=name)
    number = float(value)
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be a finite number.", field=name)
    return number


def require_non_negative(value: Any, name: str) -> float:
    number = require_finite(value, name)
    if number < 0:
        raise InvalidInputError(f"{name} must not be negative.", field=name)
    return number


def require_positive(value: Any, name: str) -> float:
    number = require_finite(value, name)
    if number <= 0:
        raise InvalidInputError(f"{name} must be greater than zero.", field=name)
    return number


def percent_of(amount: float, whole: float) -> float:
    # Multiply first so round targets (300 of 1000) come out exact.
    return amount * 100.0 / whole
