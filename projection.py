"""
Financial projection engine for the education-vs-work opportunity cost
calculator.

Compares two paths (e.g. "work now" vs "further education") over a fixed
horizon. Each path is projected two ways:
  a) closed-form future value: every yearly cash flow compounded forward
     to the end of the horizon on its own
  b) running balance: cash flows accumulate year by year and interest only
     accrues while the balance is positive (debt does not compound)

The two methods generally give different numbers for the same inputs.
Both are exposed on purpose; the summary uses (a), the ledger and charts
use (b).

Every function here is pure. Nothing is cached between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

import config as cfg


# ─── Data Classes ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class OptionModel:
    """Parameters for one financial path."""

    name: str                    # display only
    initial_salary: float        # salary in the first working year
    salary_growth_rate: float    # percent, applied from the second working year
    tuition_cost: float          # cost per tuition year
    tuition_years: int           # years 1..tuition_years incur tuition_cost
    years_delay: int             # idle years before work can start

    @property
    def start_year(self) -> int:
        """Last year before salary begins."""
        return self.years_delay + self.tuition_years

    @classmethod
    def from_defaults(cls, defaults: dict) -> "OptionModel":
        return cls(**defaults)


@dataclass(frozen=True)
class GlobalParameters:
    """Parameters shared by both options."""

    years: int            # analysis horizon
    market_rate: float    # percent, annual compounding


@dataclass(frozen=True)
class CashFlowYear:
    year: int
    value: float


@dataclass(frozen=True)
class BalanceYear:
    year: int
    value: float


@dataclass(frozen=True)
class BreakdownYear:
    """One row of the year-by-year ledger."""

    year: int
    net_worth: float
    value_without_interest: float
    interest_gain_loss: float
    cash_flow_gain_loss: float
    total_gain_loss: float
    description: str


@dataclass(frozen=True)
class Comparison:
    future_value_a: float
    future_value_b: float
    opportunity_cost: float    # positive = option A ends ahead
    percentage_diff: float


@dataclass(frozen=True)
class ProjectionResults:
    """Every data product for one pair of options."""

    option_a: OptionModel
    option_b: OptionModel
    params: GlobalParameters

    schedule_a: Tuple[CashFlowYear, ...]
    schedule_b: Tuple[CashFlowYear, ...]
    cumulative_a: Tuple[BalanceYear, ...]
    cumulative_b: Tuple[BalanceYear, ...]
    breakdown_a: Tuple[BreakdownYear, ...]
    breakdown_b: Tuple[BreakdownYear, ...]
    comparison: Comparison


# ─── Cash Flow Derivation ─────────────────────────────────────────────

def _salary_in_year(option: OptionModel, year: int) -> float:
    """Salary for a working year. The first working year gets no growth."""
    years_worked = max(0, year - option.start_year - 1)
    growth = np.power(1 + option.salary_growth_rate / 100, years_worked, dtype=float)
    return option.initial_salary * float(growth)


def cash_flow_for_year(option: OptionModel, year: int) -> Tuple[float, str]:
    """Signed cash flow and ledger description for a single year.

    Tuition takes precedence (years 1..tuition_years), salary starts after
    ``start_year``. Anything in between is idle: "Waiting" while still
    inside the delay, "Studying" after it.
    """
    if year <= option.tuition_years:
        return -option.tuition_cost, cfg.DESC_TUITION
    if year > option.start_year:
        return _salary_in_year(option, year), cfg.DESC_SALARY
    if year <= option.years_delay:
        return 0.0, cfg.DESC_WAITING
    return 0.0, cfg.DESC_STUDYING


def schedule_of(option: OptionModel, years: int) -> Tuple[CashFlowYear, ...]:
    """Per-year signed cash flow, 1-indexed, one entry per year."""
    return tuple(
        CashFlowYear(year=y, value=cash_flow_for_year(option, y)[0])
        for y in range(1, years + 1)
    )


def schedule_array(option: OptionModel, years: int) -> np.ndarray:
    """Cash flows as a float array of shape (years,). Index 0 = year 1."""
    return np.array([cf.value for cf in schedule_of(option, years)], dtype=float)


# ─── Closed-Form Future Value ─────────────────────────────────────────

def future_value(option: OptionModel, years: int, market_rate: float) -> float:
    """Sum of every cash flow compounded forward to the end of ``years``.

    Each flow is compounded independently, so a negative cumulative
    position still grows at the market rate. Tuition years are taken as
    given even when they run past the horizon.
    """
    growth = 1 + market_rate / 100
    fv = 0.0

    tuition_years = np.arange(1, option.tuition_years + 1, dtype=float)
    if tuition_years.size:
        fv -= option.tuition_cost * float(np.sum(growth ** (years - tuition_years + 1)))

    start = option.start_year
    work_years = np.arange(start + 1, years + 1, dtype=float)
    if work_years.size:
        years_worked = np.maximum(0.0, work_years - start - 1)
        salaries = option.initial_salary * (1 + option.salary_growth_rate / 100) ** years_worked
        fv += float(np.sum(salaries * growth ** (years - work_years + 1)))

    return fv


# ─── Running-Balance Projection ───────────────────────────────────────

def _apply_interest(preliminary: float, year: int, growth: float) -> float:
    """Grow a positive balance. Year 1 and non-positive balances do not grow."""
    if year > 1 and preliminary > 0:
        return preliminary * growth
    return preliminary


def cumulative_series(
    option: OptionModel,
    years: int,
    market_rate: float,
) -> Tuple[BalanceYear, ...]:
    """Running balance year by year with asymmetric interest.

    The year's cash flow is added first, then the balance grows by the
    market rate only if it is strictly positive.
    """
    growth = 1 + market_rate / 100
    balance = 0.0
    series = []
    for cf in schedule_of(option, years):
        balance = _apply_interest(balance + cf.value, cf.year, growth)
        series.append(BalanceYear(year=cf.year, value=balance))
    return tuple(series)


# ─── Year-by-Year Ledger ──────────────────────────────────────────────

def breakdown_of(
    option: OptionModel,
    years: int,
    market_rate: float,
) -> Tuple[BreakdownYear, ...]:
    """Full ledger: net worth, interest-free total and the gain split.

    Uses the same running-balance rule as :func:`cumulative_series`, so the
    ``net_worth`` column matches it element for element.
    """
    growth = 1 + market_rate / 100
    rows = []
    net_worth = 0.0
    without_interest = 0.0

    for y in range(1, years + 1):
        cash_flow, description = cash_flow_for_year(option, y)
        without_interest += cash_flow

        preliminary = net_worth + cash_flow
        net_worth = _apply_interest(preliminary, y, growth)
        interest = net_worth - preliminary

        rows.append(BreakdownYear(
            year=y,
            net_worth=net_worth,
            value_without_interest=without_interest,
            interest_gain_loss=interest,
            cash_flow_gain_loss=cash_flow,
            total_gain_loss=cash_flow + interest,
            description=description,
        ))

    return tuple(rows)


# ─── Comparison ───────────────────────────────────────────────────────

def compare(
    a: OptionModel,
    b: OptionModel,
    years: int,
    market_rate: float,
) -> Comparison:
    """Opportunity cost of choosing ``a`` over ``b`` (closed-form values)."""
    fv_a = future_value(a, years, market_rate)
    fv_b = future_value(b, years, market_rate)
    opportunity_cost = fv_a - fv_b
    if fv_b == 0:
        percentage_diff = 0.0
    else:
        percentage_diff = opportunity_cost / abs(fv_b) * 100
    return Comparison(
        future_value_a=fv_a,
        future_value_b=fv_b,
        opportunity_cost=opportunity_cost,
        percentage_diff=percentage_diff,
    )


def run_projection(
    a: OptionModel,
    b: OptionModel,
    params: GlobalParameters,
) -> ProjectionResults:
    """Compute every data product for both options."""
    years, rate = params.years, params.market_rate
    return ProjectionResults(
        option_a=a,
        option_b=b,
        params=params,
        schedule_a=schedule_of(a, years),
        schedule_b=schedule_of(b, years),
        cumulative_a=cumulative_series(a, years, rate),
        cumulative_b=cumulative_series(b, years, rate),
        breakdown_a=breakdown_of(a, years, rate),
        breakdown_b=breakdown_of(b, years, rate),
        comparison=compare(a, b, years, rate),
    )


def breakeven_year(results: ProjectionResults) -> Optional[int]:
    """First year option A's running balance catches up with option B's.

    Only counts a crossing: A must have been strictly behind in an earlier
    year. Returns None if that never happens within the horizon.
    """
    was_behind = False
    for a_row, b_row in zip(results.cumulative_a, results.cumulative_b):
        if a_row.value < b_row.value:
            was_behind = True
        elif was_behind:
            return a_row.year
    return None


# ─── Quick Single-Period Comparison ───────────────────────────────────

@dataclass(frozen=True)
class QuickOption:
    """A one-off cost that returns a fixed amount after ``months``."""

    name: str
    cost: float
    returned: float
    months: float


@dataclass(frozen=True)
class QuickComparison:
    net_value_a: float
    net_value_b: float
    roi_a: float
    roi_b: float
    opportunity_cost: float


def net_value(cost: float, returned: float) -> float:
    return returned - cost


def annualized_roi(cost: float, returned: float, months: float) -> float:
    """Simple ROI scaled to twelve months, in percent. Zero cost or time gives 0."""
    if cost == 0 or months == 0:
        return 0.0
    return (returned - cost) / cost * (12 / months) * 100


def quick_compare(a: QuickOption, b: QuickOption) -> QuickComparison:
    nv_a = net_value(a.cost, a.returned)
    nv_b = net_value(b.cost, b.returned)
    return QuickComparison(
        net_value_a=nv_a,
        net_value_b=nv_b,
        roi_a=annualized_roi(a.cost, a.returned, a.months),
        roi_b=annualized_roi(b.cost, b.returned, b.months),
        opportunity_cost=nv_a - nv_b,
    )
