SAMPLE_INVESTMENT_REQUEST = {
    "initialAmount": 10000,
    "monthlyContribution": 500,
    "annualReturnRate": 7,
    "years": 20,
}

SAMPLE_RETIREMENT_REQUEST = {
    "currentAge": 30,
    "retirementAge": 65,
    "lifeExpectancy": 90,
    "currentSavings": 50000,
    "monthlySavings": 500,
    "monthlyExpensesInRetirement": 2000,
    "annualReturnRate": 7,
    "inflationRate": 3,
}

SAMPLE_DEBT_REQUEST = {
    "debtAmount": 15000,
    "interestRate": 18.9,
    "monthlyPayment": 450,
}

SAMPLE_BUDGET_REQUEST = {
    "monthlyIncome": 5200,
    "expenses": [
        {"category": "Housing", "amount": 1600},
        {"category": "Utilities", "amount": 220},
        {"category": "Insurance", "amount": 180},
        {"category": "Food", "amount": 650},
        {"category": "Entertainment", "amount": 300},
        {"category": "Transportation", "amount": 400},
    ],
    "savingsGoalPercent": 20,
    "goals": [
        {"name": "Emergency fund", "targetAmount": 15000, "currentAmount": 4000, "allocationPercent": 60},
        {"name": "Vacation", "targetAmount": 3000, "currentAmount": 500, "allocationPercent": 40},
    ],
}

SAMPLE_SCENARIO = {
    "name": "Baseline",
    "description": "Current salary and spending",
    "initialAmount": 12000,
    "monthlyIncome": 5200,
    "monthlyExpenses": 3400,
    "investments": [
        {"name": "Index fund", "amount": 8000, "rate": 7},
        {"name": "High-yield savings", "amount": 4000, "rate": 4},
    ],
    "savingsRate": 20,
    "inflationRate": 2.5,
    "timeframeYears": 10,
}
