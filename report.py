"""
PDF report generation and reusable chart rendering for the
opportunity cost calculator.

Provides:
  - Four-page PDF report (generate_pdf)
  - Base64-encoded chart images for web embedding (get_web_charts)
  - Individual page renderers reusable by both CLI and web
"""

from __future__ import annotations

import base64
import io
from typing import Any, Dict, List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.ticker import FuncFormatter
import numpy as np

from projection import ProjectionResults

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

BG = "#0a101f"
CARD = "#131b2e"
TEXT = "#f1f5f9"
TEXT2 = "#cbd5e1"
INDIGO = "#818cf8"
EMERALD = "#34d399"
AMBER = "#fbbf24"
RED = "#f87171"
SLATE = "#94a3b8"
BORDER = "#1e293b"

A4W, A4H = 8.27, 11.69
WEB_W, WEB_H = 10, 6


# ═══════════════════════════════════════════════════════════════════
# Axis formatters
# ═══════════════════════════════════════════════════════════════════

def _usd_fmt(x, _):
    sign = "-" if x < 0 else ""
    x = abs(x)
    if x >= 1e6:
        return f"{sign}${x / 1e6:.1f}M"
    if x >= 1e3:
        return f"{sign}${x / 1e3:.0f}k"
    return f"{sign}${x:.0f}"


USD_FMT = FuncFormatter(_usd_fmt)


# ═══════════════════════════════════════════════════════════════════
# Style helpers
# ═══════════════════════════════════════════════════════════════════

def _style(fig, *axes):
    """Apply dark theme to figure and all axes."""
    fig.patch.set_facecolor(BG)
    for ax in axes:
        ax.set_facecolor(CARD)
        ax.tick_params(colors=TEXT, labelsize=8)
        ax.xaxis.label.set_color(TEXT)
        ax.yaxis.label.set_color(TEXT)
        ax.title.set_color(TEXT)
        for spine in ax.spines.values():
            spine.set_color(BORDER)
        ax.grid(True, alpha=0.15, color=SLATE)


def _legend(ax, loc="upper left"):
    ax.legend(loc=loc, fontsize=8, facecolor=CARD, edgecolor=BORDER, labelcolor=TEXT)


def _values(series) -> np.ndarray:
    return np.array([row.value for row in series], dtype=float)


# ═══════════════════════════════════════════════════════════════════
# Page 1 — Summary (text only, dark background)
# ═══════════════════════════════════════════════════════════════════

def _page1_summary(results: ProjectionResults, d: Dict,
                   verdict_text: str) -> plt.Figure:
    # cli imports this module at load time
    from cli import fmt, pct

    fig = plt.figure(figsize=(A4W, A4H))
    fig.patch.set_facecolor(BG)

    fig.text(0.50, 0.93, "Opportunity Cost Analysis",
             ha="center", fontsize=18, color=TEXT, fontweight="bold")
    fig.text(0.50, 0.91, f"{d['a_name']} vs {d['b_name']}",
             ha="center", fontsize=11, color=TEXT2)

    y = 0.85
    fig.text(0.08, y, "PARAMETERS", fontsize=10, color=AMBER, fontweight="bold")
    y -= 0.03
    fig.text(0.08, y, f"Horizon: {d['years']} years    "
             f"Market return: {pct(d['market_rate'])}", fontsize=9, color=TEXT)

    for option, color in ((results.option_a, INDIGO), (results.option_b, EMERALD)):
        y -= 0.04
        fig.text(0.08, y, option.name, fontsize=10, color=color, fontweight="bold")
        y -= 0.025
        fig.text(0.10, y,
                 f"Salary {fmt(option.initial_salary)} growing {pct(option.salary_growth_rate)}  |  "
                 f"Tuition {fmt(option.tuition_cost)} x {option.tuition_years} yr  |  "
                 f"Delay {option.years_delay} yr",
                 fontsize=8.5, color=TEXT2)

    y -= 0.06
    fig.text(0.08, y, "RESULTS", fontsize=10, color=AMBER, fontweight="bold")
    rows = [
        ("Future value (closed form)", fmt(d["a_fv"]), fmt(d["b_fv"])),
        ("Net worth (running balance)", fmt(d["a_net_worth"]), fmt(d["b_net_worth"])),
        ("Interest earned", fmt(d["a_interest"]), fmt(d["b_interest"])),
        ("Total tuition paid", fmt(d["a_tuition_total"]), fmt(d["b_tuition_total"])),
        ("Total salary earned", fmt(d["a_earned_total"]), fmt(d["b_earned_total"])),
    ]
    y -= 0.03
    fig.text(0.50, y, d["a_name"], fontsize=8.5, color=INDIGO, ha="right")
    fig.text(0.80, y, d["b_name"], fontsize=8.5, color=EMERALD, ha="right")
    for label, a_val, b_val in rows:
        y -= 0.025
        fig.text(0.08, y, label, fontsize=9, color=TEXT2)
        fig.text(0.50, y, a_val, fontsize=9, color=TEXT, ha="right")
        fig.text(0.80, y, b_val, fontsize=9, color=TEXT, ha="right")

    y -= 0.05
    fig.text(0.08, y, "VERDICT", fontsize=10, color=AMBER, fontweight="bold")
    y -= 0.03
    fig.text(0.08, y,
             f"Opportunity cost (A - B): {fmt(d['opportunity_cost'])} "
             f"({pct(d['percentage_diff'])})",
             fontsize=10, color=TEXT, fontweight="bold")
    y -= 0.03
    fig.text(0.08, y, verdict_text, fontsize=9, color=TEXT2, wrap=True,
             va="top")

    fig.text(0.50, 0.04,
             "Closed-form values compound every cash flow to the horizon; "
             "running balances only earn interest while positive.",
             ha="center", fontsize=7, color=SLATE)
    return fig


# ═══════════════════════════════════════════════════════════════════
# Page 2 — Net Worth Comparison (the key chart)
# ═══════════════════════════════════════════════════════════════════

def _chart_net_worth(results: ProjectionResults,
                     figsize=(A4W, A4H * 0.6)) -> plt.Figure:
    years = np.array([row.year for row in results.cumulative_a])
    a_nw = _values(results.cumulative_a)
    b_nw = _values(results.cumulative_b)
    a_plain = np.array([r.value_without_interest for r in results.breakdown_a])
    b_plain = np.array([r.value_without_interest for r in results.breakdown_b])

    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)

    ax.plot(years, a_nw, color=INDIGO, linewidth=2.2, label=results.option_a.name)
    ax.plot(years, b_nw, color=EMERALD, linewidth=2.2, label=results.option_b.name)
    ax.plot(years, a_plain, color=INDIGO, linewidth=1, linestyle="--", alpha=0.6,
            label=f"{results.option_a.name} (no interest)")
    ax.plot(years, b_plain, color=EMERALD, linewidth=1, linestyle="--", alpha=0.6,
            label=f"{results.option_b.name} (no interest)")
    ax.axhline(0, color=SLATE, linewidth=0.8, alpha=0.5)

    ax.yaxis.set_major_formatter(USD_FMT)
    ax.set_xlabel("Year")
    ax.set_ylabel("Net Worth")
    ax.set_title("Net Worth Over Time", fontsize=14, pad=15)
    _legend(ax)

    if len(years) == 0:
        return fig

    # Annotate final gap
    gap = a_nw[-1] - b_nw[-1]
    winner_color = INDIGO if gap > 0 else EMERALD
    ax.annotate(
        f"${abs(gap):,.0f} difference",
        xy=(years[-1], (a_nw[-1] + b_nw[-1]) / 2), fontsize=11,
        color=winner_color, fontweight="bold", ha="right",
        xytext=(-15, 0), textcoords="offset points",
        bbox=dict(boxstyle="round,pad=0.3", facecolor=BG,
                  edgecolor=winner_color, alpha=0.9),
    )

    # Crossover where B overtakes A
    cross_mask = (b_nw[:-1] <= a_nw[:-1]) & (b_nw[1:] > a_nw[1:])
    cross_idxs = np.where(cross_mask)[0]
    if len(cross_idxs) > 0:
        ci = cross_idxs[0] + 1
        ax.annotate(
            f"{results.option_b.name} overtakes\nin year {years[ci]}",
            xy=(years[ci], b_nw[ci]), fontsize=9, color=EMERALD,
            xytext=(10, 20), textcoords="offset points",
            arrowprops=dict(arrowstyle="->", color=EMERALD, lw=1.2),
            bbox=dict(boxstyle="round,pad=0.3", facecolor=BG,
                      edgecolor=EMERALD, alpha=0.9),
        )
    return fig


# ═══════════════════════════════════════════════════════════════════
# Page 3 — Cash Flow Schedule (grouped bars)
# ═══════════════════════════════════════════════════════════════════

def _chart_cash_flows(results: ProjectionResults,
                      figsize=(A4W, A4H * 0.5)) -> plt.Figure:
    years = np.array([cf.year for cf in results.schedule_a])
    a_cf = _values(results.schedule_a)
    b_cf = _values(results.schedule_b)

    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)

    width = 0.4
    ax.bar(years - width / 2, a_cf, width, color=INDIGO, label=results.option_a.name)
    ax.bar(years + width / 2, b_cf, width, color=EMERALD, label=results.option_b.name)
    ax.axhline(0, color=SLATE, linewidth=0.8, alpha=0.5)

    ax.yaxis.set_major_formatter(USD_FMT)
    ax.set_xlabel("Year")
    ax.set_ylabel("Cash Flow")
    ax.set_title("Yearly Cash Flow (tuition negative, salary positive)",
                 fontsize=11, pad=10)
    _legend(ax)
    return fig


# ═══════════════════════════════════════════════════════════════════
# Page 4 — Gain/Loss Breakdown (stacked bars per option)
# ═══════════════════════════════════════════════════════════════════

def _chart_breakdown(results: ProjectionResults,
                     figsize=(A4W, A4H)) -> plt.Figure:
    fig, axes = plt.subplots(2, 1, figsize=figsize, constrained_layout=True)
    _style(fig, *axes)

    for ax, option, breakdown, color in (
        (axes[0], results.option_a, results.breakdown_a, INDIGO),
        (axes[1], results.option_b, results.breakdown_b, EMERALD),
    ):
        years = np.array([r.year for r in breakdown])
        cash = np.array([r.cash_flow_gain_loss for r in breakdown])
        interest = np.array([r.interest_gain_loss for r in breakdown])

        ax.bar(years, cash, color=[RED if v < 0 else color for v in cash],
               label="Cash flow")
        ax.bar(years, interest, bottom=np.maximum(cash, 0), color=AMBER,
               alpha=0.85, label="Interest")
        ax.axhline(0, color=SLATE, linewidth=0.8, alpha=0.5)
        ax.yaxis.set_major_formatter(USD_FMT)
        ax.set_xlabel("Year")
        ax.set_ylabel("Gain / Loss")
        ax.set_title(f"{option.name}: Where Each Year's Change Comes From",
                     fontsize=11, pad=10)
        _legend(ax)

    return fig


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def figure_to_base64(fig: plt.Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(),
                dpi=150, bbox_inches="tight")
    buf.seek(0)
    b64 = base64.b64encode(buf.read()).decode()
    buf.close()
    return b64


def generate_pdf(
    results: ProjectionResults,
    d: Dict[str, Any],
    verdict_text: str,
    path: str = "opportunity_cost_report.pdf",
) -> str:
    """Generate the full PDF report. Returns the file path."""
    pages = [
        _page1_summary(results, d, verdict_text),
        _chart_net_worth(results),
        _chart_cash_flows(results),
        _chart_breakdown(results),
    ]

    with PdfPages(path) as pdf:
        for fig in pages:
            pdf.savefig(fig, facecolor=fig.get_facecolor())
    for fig in pages:
        plt.close(fig)
    return path


def get_web_charts(results: ProjectionResults) -> List[str]:
    """Return base64-encoded PNG chart images for web embedding.

    Returns 3 charts:
      [0] Net Worth Over Time  (running balance, the hero chart)
      [1] Yearly Cash Flow     (grouped bars)
      [2] Gain/Loss Breakdown  (cash flow vs interest per year)
    """
    chart_figs = [
        _chart_net_worth(results, figsize=(WEB_W, WEB_H)),
        _chart_cash_flows(results, figsize=(WEB_W, WEB_H - 1)),
        _chart_breakdown(results, figsize=(WEB_W, WEB_H + 3)),
    ]

    images = [figure_to_base64(f) for f in chart_figs]
    for f in chart_figs:
        plt.close(f)
    return images
