"""
CLI interface and shared display-data computation for the
education-vs-work opportunity cost calculator.
"""

from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional

import config as cfg
from params import (
    OptionField,
    decode_query,
    encode_query,
    parse_int,
    parse_number,
    update_option,
)
from projection import (
    BreakdownYear,
    GlobalParameters,
    OptionModel,
    ProjectionResults,
    QuickOption,
    breakeven_year,
    quick_compare,
    run_projection,
)
import report


# ═══════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════

def fmt(val: float, decimals: int = 0) -> str:
    """Format number as $X,XXX (negative as -$X,XXX)."""
    sign = "-" if val < 0 else ""
    return f"{sign}${abs(val):,.{decimals}f}"


def pct(val: float, decimals: int = 1) -> str:
    return f"{val:.{decimals}f}%"


# ═══════════════════════════════════════════════════════════════════
# Input collection (CLI)
# ═══════════════════════════════════════════════════════════════════

def _prompt_number(label: str, default: Any) -> float:
    """Empty input keeps the default; anything unparseable counts as 0."""
    raw = input(f"  {label} [{default}]: ").strip()
    if not raw:
        return parse_number(default)
    return parse_number(raw)


def _prompt_int(label: str, default: int) -> int:
    raw = input(f"  {label} [{default}]: ").strip()
    if not raw:
        return default
    return parse_int(raw)


def _prompt_text(label: str, default: str) -> str:
    raw = input(f"  {label} [{default}]: ").strip()
    return raw or default


def _prompt_option(title: str, option: OptionModel) -> OptionModel:
    print(f"\n  {title}")
    prompts = [
        (OptionField.NAME, "Name", _prompt_text),
        (OptionField.INITIAL_SALARY, "Starting salary", _prompt_number),
        (OptionField.SALARY_GROWTH_RATE, "Salary growth %/yr", _prompt_number),
        (OptionField.TUITION_COST, "Tuition cost per year", _prompt_number),
        (OptionField.TUITION_YEARS, "Years of tuition", _prompt_int),
        (OptionField.YEARS_DELAY, "Years before starting", _prompt_int),
    ]
    for field, label, prompt in prompts:
        value = prompt(label, getattr(option, field.value))
        option = update_option(option, field, value)
    return option


def collect_inputs(
    a: OptionModel,
    b: OptionModel,
    params: GlobalParameters,
) -> tuple[OptionModel, OptionModel, GlobalParameters]:
    """Prompt the user for both options and the shared parameters."""
    print("\n  Enter your details (press Enter for defaults):")

    a = _prompt_option("OPTION A", a)
    b = _prompt_option("OPTION B", b)

    print("\n  SHARED")
    years = _prompt_int("Years to project", params.years)
    rate = _prompt_number("Market return %/yr", params.market_rate)

    return a, b, GlobalParameters(years=years, market_rate=rate)


# ═══════════════════════════════════════════════════════════════════
# Shared display-data computation (used by CLI and web app)
# ═══════════════════════════════════════════════════════════════════

def _final_value(series) -> float:
    return series[-1].value if series else 0.0


def compute_display_data(results: ProjectionResults) -> Dict[str, Any]:
    """Extract every metric needed for the output sections."""
    a, b, params = results.option_a, results.option_b, results.params
    c = results.comparison

    if c.opportunity_cost > 0:
        winner = "a"
    elif c.opportunity_cost < 0:
        winner = "b"
    else:
        winner = "tie"

    a_tuition = sum(-cf.value for cf in results.schedule_a if cf.value < 0)
    b_tuition = sum(-cf.value for cf in results.schedule_b if cf.value < 0)
    a_earned = sum(cf.value for cf in results.schedule_a if cf.value > 0)
    b_earned = sum(cf.value for cf in results.schedule_b if cf.value > 0)

    return {
        # Inputs echo
        "a_name": a.name,
        "b_name": b.name,
        "years": params.years,
        "market_rate": params.market_rate,
        "a_start_year": a.start_year,
        "b_start_year": b.start_year,
        # Closed-form
        "a_fv": c.future_value_a,
        "b_fv": c.future_value_b,
        "opportunity_cost": c.opportunity_cost,
        "percentage_diff": c.percentage_diff,
        # Running balance
        "a_net_worth": _final_value(results.cumulative_a),
        "b_net_worth": _final_value(results.cumulative_b),
        "a_interest": sum(r.interest_gain_loss for r in results.breakdown_a),
        "b_interest": sum(r.interest_gain_loss for r in results.breakdown_b),
        # Undiscounted totals
        "a_tuition_total": a_tuition,
        "b_tuition_total": b_tuition,
        "a_earned_total": a_earned,
        "b_earned_total": b_earned,
        # Verdict
        "winner": winner,
        "winner_name": {"a": a.name, "b": b.name}.get(winner),
        "adv_abs": abs(c.opportunity_cost),
        "breakeven_year": breakeven_year(results),
        "share_query": encode_query(a, b, params),
    }


def generate_verdict_text(d: Dict[str, Any]) -> str:
    """Build a 1-2 sentence plain-English verdict."""
    years = d["years"]
    rate = pct(d["market_rate"])

    if d["winner"] == "tie":
        return (
            f"After {years} years at {rate}, {d['a_name']} and {d['b_name']} "
            f"end up with the same future value."
        )

    if d["winner"] == "a":
        winner, loser = d["a_name"], d["b_name"]
    else:
        winner, loser = d["b_name"], d["a_name"]

    text = (
        f"{winner} is ahead of {loser} by {fmt(d['adv_abs'])} "
        f"({pct(abs(d['percentage_diff']))}) after {years} years at {rate}."
    )
    if d["breakeven_year"] is not None:
        text += (
            f" {d['a_name']} catches up with {d['b_name']} in year "
            f"{d['breakeven_year']} on a running-balance basis."
        )
    return text


def export_text(d: Dict[str, Any], url: Optional[str] = None) -> str:
    """Plain-text summary suitable for copying to the clipboard."""
    link = f"{url}?{d['share_query']}" if url else d["share_query"]
    lines = [
        "Opportunity Cost Analysis",
        f"Horizon: {d['years']} years at {pct(d['market_rate'])}",
        "",
        f"{d['a_name']}: future value {fmt(d['a_fv'])}, "
        f"running balance {fmt(d['a_net_worth'])}",
        f"{d['b_name']}: future value {fmt(d['b_fv'])}, "
        f"running balance {fmt(d['b_net_worth'])}",
        "",
        f"Choosing {d['a_name']} over {d['b_name']}: "
        f"{fmt(d['opportunity_cost'])} ({pct(d['percentage_diff'])})",
        generate_verdict_text(d),
        "",
        f"Share: {link}",
    ]
    return "\n".join(lines)


# ═══════════════════════════════════════════════════════════════════
# Box-drawing CLI output
# ═══════════════════════════════════════════════════════════════════

W = 78  # box width (characters)


def _box_top(title: str) -> str:
    inner = W - 2
    return (
        f"╔{'═' * inner}╗\n"
        f"║  {title:<{inner - 2}}║\n"
        f"╠{'═' * inner}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"║  {text:<{inner}}║"


def _box_row(label: str, value: str, lw: int = 38) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{'═' * (W - 2)}╝"


def _print_section(title: str, rows: List[str]) -> None:
    """Print a titled box with content rows."""
    print(_box_top(title))
    for r in rows:
        print(r)
    print(_box_bottom())
    print()


def _wrap(text: str, width: int = W - 6) -> List[str]:
    lines = []
    line = ""
    for word in text.split():
        if len(line) + len(word) + 1 <= width:
            line = f"{line} {word}" if line else word
        else:
            lines.append(line)
            line = word
    if line:
        lines.append(line)
    return lines


# ═══════════════════════════════════════════════════════════════════
# CLI Section Printers
# ═══════════════════════════════════════════════════════════════════

def _print_inputs(results: ProjectionResults) -> None:
    rows = [
        _box_row("Years projected", str(results.params.years)),
        _box_row("Market return", pct(results.params.market_rate)),
        _box_line(),
    ]
    for option in (results.option_a, results.option_b):
        rows.append(_box_line(option.name))
        rows.append(_box_row("  Starting salary", fmt(option.initial_salary)))
        rows.append(_box_row("  Salary growth", pct(option.salary_growth_rate)))
        rows.append(_box_row(
            "  Tuition",
            f"{fmt(option.tuition_cost)} x {option.tuition_years} yr",
        ))
        rows.append(_box_row("  Years before starting", str(option.years_delay)))
    _print_section("YOUR OPTIONS", rows)


def _print_option(d: Dict[str, Any], key: str) -> None:
    rows = [
        _box_row("Future value (closed form)", fmt(d[f"{key}_fv"])),
        _box_row("Net worth (running balance)", fmt(d[f"{key}_net_worth"])),
        _box_row("  of which interest", fmt(d[f"{key}_interest"])),
        _box_line(),
        _box_row("Total tuition paid", fmt(d[f"{key}_tuition_total"])),
        _box_row("Total salary earned", fmt(d[f"{key}_earned_total"])),
        _box_row("Salary starts in year", str(d[f"{key}_start_year"] + 1)),
    ]
    _print_section(f"OPTION {key.upper()} — {d[f'{key}_name'].upper()}", rows)


def _print_verdict(d: Dict[str, Any]) -> None:
    if d["winner"] == "tie":
        winner_label = "BOTH OPTIONS EQUAL"
    else:
        winner_label = f"{d['winner_name'].upper()} WINS"

    rows = [
        _box_row("Winner", winner_label),
        _box_row("Opportunity cost (A - B)", fmt(d["opportunity_cost"])),
        _box_row("Difference vs B", pct(d["percentage_diff"])),
        _box_line(),
    ]
    rows.extend(_box_line(line) for line in _wrap(generate_verdict_text(d)))
    _print_section("THE VERDICT", rows)


def _ledger_rows(breakdown: tuple[BreakdownYear, ...]) -> List[str]:
    h = (
        f"{'Yr':>3}  {'Type':<9}{'Cash flow':>12}{'Interest':>11}"
        f"{'No interest':>13}{'Net worth':>13}"
    )
    rows = [_box_line(h), _box_line("─" * (W - 6))]
    for r in breakdown:
        rows.append(_box_line(
            f"{r.year:>3}  {r.description:<9}"
            f"{fmt(r.cash_flow_gain_loss):>12}"
            f"{fmt(r.interest_gain_loss):>11}"
            f"{fmt(r.value_without_interest):>13}"
            f"{fmt(r.net_worth):>13}"
        ))
    return rows


def _print_ledgers(results: ProjectionResults) -> None:
    for option, breakdown in (
        (results.option_a, results.breakdown_a),
        (results.option_b, results.breakdown_b),
    ):
        _print_section(f"YEAR BY YEAR — {option.name.upper()}", _ledger_rows(breakdown))


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry points
# ═══════════════════════════════════════════════════════════════════

def run_cli(query: Optional[str] = None, pdf_path: Optional[str] = cfg.REPORT_PATH) -> None:
    """Run the full CLI workflow.

    With ``query`` the inputs come from a share string and no prompts
    are shown.
    """
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError):
        pass
    print()
    print("=" * W)
    print("  Opportunity Cost Calculator: Education vs Work")
    print("=" * W)

    a, b, params = decode_query(query or "")
    if query is None:
        a, b, params = collect_inputs(a, b, params)

    results = run_projection(a, b, params)
    d = compute_display_data(results)

    print()
    _print_inputs(results)
    _print_option(d, "a")
    _print_option(d, "b")
    _print_verdict(d)
    _print_ledgers(results)

    if pdf_path:
        print("  Generating PDF report...")
        path = report.generate_pdf(results, d, generate_verdict_text(d), pdf_path)
        print(f"  Saved to {path}\n")

    print("  Share these inputs:")
    print(f"    python main.py --cli --share '{d['share_query']}'\n")


def run_quick_cli() -> None:
    """Single-period comparison: cost now, amount returned after N months."""
    print()
    print("=" * W)
    print("  Quick Comparison: Net Value and Annualized ROI")
    print("=" * W)

    quick = []
    for label in ("Option A", "Option B"):
        print(f"\n  {label.upper()}")
        quick.append(QuickOption(
            name=_prompt_text("Name", label),
            cost=_prompt_number("Initial cost", 0),
            returned=_prompt_number("Expected return", 0),
            months=_prompt_number("Time period (months)", 1),
        ))
    a, b = quick
    q = quick_compare(a, b)

    rows = [
        _box_row(f"{a.name} net value", fmt(q.net_value_a, 2)),
        _box_row(f"{a.name} annualized ROI", pct(q.roi_a, 2)),
        _box_row(f"{b.name} net value", fmt(q.net_value_b, 2)),
        _box_row(f"{b.name} annualized ROI", pct(q.roi_b, 2)),
        _box_line(),
        _box_row(f"Choosing {a.name} over {b.name}", fmt(q.opportunity_cost, 2)),
    ]
    if q.opportunity_cost > 0:
        rows.append(_box_line(f"{a.name} is better by {fmt(q.opportunity_cost, 2)}"))
    elif q.opportunity_cost < 0:
        rows.append(_box_line(f"{b.name} is better by {fmt(-q.opportunity_cost, 2)}"))
    else:
        rows.append(_box_line("Both options have equal value"))
    print()
    _print_section("OPPORTUNITY COST ANALYSIS", rows)


if __name__ == "__main__":
    run_cli()
