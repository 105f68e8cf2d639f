import os

from finance.simulator import MAX_YEARS

API_TITLE = os.getenv("API_TITLE", "Personal Finance Simulator API")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s %(levelname)s %(name)s: %(message)s")

# Months between points of the yearly display series.
SERIES_SAMPLE_MONTHS = max(1, int(os.getenv("SERIES_SAMPLE_MONTHS", "12")))
DASHBOARD_HORIZON_YEARS = min(MAX_YEARS, max(0, int(os.getenv("DASHBOARD_HORIZON_YEARS", "30"))))

DEFAULT_INFLATION_RATE = float(os.getenv("DEFAULT_INFLATION_RATE", "2"))
DEFAULT_TIMEFRAME_YEARS = min(float(MAX_YEARS), float(os.getenv("DEFAULT_TIMEFRAME_YEARS", "10")))
