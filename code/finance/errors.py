from typing import Any, Dict


class FinanceError(Exception):
    """Base class for every failure raised by the projection engine."""

    code = "finance_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def context(self) -> Dict[str, Any]:
        return {}


class InvalidInputError(FinanceError, ValueError):
    code = "invalid_input"

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field

    def context(self) -> Dict[str, Any]:
        return {"field": self.field} if self.field else {}


class InvalidAgeOrderingError(FinanceError):
    code = "invalid_age_ordering"

    def __init__(self, current_age: float, retirement_age: float, life_expectancy: float):
        super().__init__(
            "Ages must satisfy current age < retirement age < life expectancy "
            f"(got {current_age:g}, {retirement_age:g}, {life_expectancy:g})."
        )
        self.current_age = current_age
        self.retirement_age = retirement_age
        self.life_expectancy = life_expectancy

    def context(self) -> Dict[str, Any]:
        return {
            "currentAge": self.current_age,
            "retirementAge": self.retirement_age,
            "lifeExpectancy": self.life_expectancy,
        }


class PaymentBelowMinimumError(FinanceError):
    code = "payment_below_minimum"

    def __init__(self, monthly_payment: float, minimum_payment: float):
        super().__init__(
            "Monthly payment must be greater than minimum interest payment of "
            f"${minimum_payment:,.2f}"
        )
        self.monthly_payment = monthly_payment
        self.minimum_payment = minimum_payment

    def context(self) -> Dict[str, Any]:
        return {"minimumPayment": round(self.minimum_payment, 2)}


class NonConvergentError(FinanceError):
    code = "non_convergent"

    def __init__(self, max_periods: int, remaining_balance: float):
        super().__init__(
            "With the current payment amount, the balance is not paid off within "
            f"{max_periods} months. Please increase your monthly payment."
        )
        self.max_periods = max_periods
        self.remaining_balance = remaining_balance

    def context(self) -> Dict[str, Any]:
        return {"maxPeriods": self.max_periods, "remainingBalance": round(self.remaining_balance, 2)}
