"""
Default parameters for the education-vs-work opportunity cost calculator.

All monetary values are plain numbers (no currency). Rates are percents,
so 7.0 means 7% per annum.
"""

# ── Analysis horizon ─────────────────────────────────────────────────
DEFAULT_YEARS = 30           # years projected forward
DEFAULT_MARKET_RATE = 7.0    # annual compounding rate, percent

# ── Option A: start working now ─────────────────────────────────────
DEFAULT_OPTION_A = {
    "name": "Work now",
    "initial_salary": 50_000,
    "salary_growth_rate": 3.0,
    "tuition_cost": 0,
    "tuition_years": 0,
    "years_delay": 0,
}

# ── Option B: further education first ───────────────────────────────
DEFAULT_OPTION_B = {
    "name": "Graduate school",
    "initial_salary": 80_000,
    "salary_growth_rate": 4.0,
    "tuition_cost": 40_000,
    "tuition_years": 2,
    "years_delay": 0,
}

# ── Ledger descriptions ─────────────────────────────────────────────
DESC_TUITION = "Tuition"
DESC_SALARY = "Salary"
DESC_STUDYING = "Studying"
DESC_WAITING = "Waiting"

# ── Shareable query string ──────────────────────────────────────────
# Per-option keys are prefixed with "a_" / "b_".
QUERY_YEARS = "years"
QUERY_RATE = "rate"
QUERY_OPTION_KEYS = {
    "name": "name",
    "initial_salary": "salary",
    "salary_growth_rate": "growth",
    "tuition_cost": "tuition",
    "tuition_years": "tuition_years",
    "years_delay": "delay",
}

# ── Output ───────────────────────────────────────────────────────────
REPORT_PATH = "opportunity_cost_report.pdf"
WEB_HOST = "127.0.0.1"
WEB_PORT = 5000
