"""
Flask web application for the opportunity cost calculator.

Single-file app using render_template_string.  Run via ``python main.py``
which starts the dev server on localhost:5000.

Form fields use the same names as the shareable query string, so a
GET link with parameters reproduces a POSTed result.
"""

from __future__ import annotations

import dataclasses
import os
from typing import Any, Dict, Mapping

from flask import Flask, Response, jsonify, render_template_string, request, send_file

import config as cfg
from cli import (
    compute_display_data,
    export_text,
    fmt,
    generate_verdict_text,
    pct,
)
from params import decode_query, has_parameters
from projection import GlobalParameters, OptionModel, ProjectionResults, run_projection
import report

app = Flask(__name__)


# ═══════════════════════════════════════════════════════════════════
# Form parsing
# ═══════════════════════════════════════════════════════════════════

def parse_form(form: Mapping[str, Any]) -> ProjectionResults:
    """Parse form or query values and run the projection."""
    a, b, params = decode_query(form)
    results = run_projection(a, b, params)
    app.logger.info(
        "Projection: %s vs %s over %d years at %.2f%% -> opportunity cost %.2f",
        a.name, b.name, params.years, params.market_rate,
        results.comparison.opportunity_cost,
    )
    return results


def _field_text(val: Any) -> str:
    if isinstance(val, str):
        return val
    if float(val).is_integer():
        return str(int(val))
    return str(val)


def _form_values(a: OptionModel, b: OptionModel, params: GlobalParameters) -> Dict[str, str]:
    """Echo the parsed inputs back into the form fields."""
    values = {
        cfg.QUERY_YEARS: _field_text(params.years),
        cfg.QUERY_RATE: _field_text(params.market_rate),
    }
    for prefix, option in (("a_", a), ("b_", b)):
        for attr, key in cfg.QUERY_OPTION_KEYS.items():
            values[prefix + key] = _field_text(getattr(option, attr))
    return values


# ═══════════════════════════════════════════════════════════════════
# HTML Template
# ═══════════════════════════════════════════════════════════════════

HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Opportunity Cost Calculator: Education vs Work</title>
<style>
  *{margin:0;padding:0;box-sizing:border-box}
  :root{
    --bg-deep:#050816;
    --bg-surface:rgba(15,23,42,0.55);
    --bg-input:rgba(8,11,22,0.85);
    --border-subtle:rgba(99,102,241,0.1);
    --text-primary:#f1f5f9;
    --text-secondary:#94a3b8;
    --indigo:#818cf8;
    --emerald:#34d399;
    --amber:#fbbf24;
    --red:#f87171;
    --radius-lg:16px;
    --radius-md:10px;
  }
  body{
    background:var(--bg-deep);color:var(--text-primary);
    font-family:system-ui,-apple-system,sans-serif;line-height:1.6;
  }
  .container{max-width:1140px;margin:0 auto;padding:2rem 1.5rem}
  .hero{text-align:center;padding:1.5rem 0 2rem}
  .hero h1{font-size:clamp(1.5rem,4vw,2.3rem);font-weight:800;letter-spacing:-.03em}
  .hero-sub{color:var(--text-secondary);margin-top:.5rem;font-size:.92rem}
  .card{
    background:var(--bg-surface);border:1px solid var(--border-subtle);
    border-radius:var(--radius-lg);padding:1.6rem;margin-bottom:1.4rem;
  }
  h2{font-size:1.1rem;font-weight:700;margin-bottom:1rem}
  .options{display:grid;grid-template-columns:repeat(auto-fit,minmax(300px,1fr));gap:1.4rem}
  .form-group{display:flex;flex-direction:column;margin-bottom:.8rem}
  .form-group label{font-size:.78rem;color:var(--text-secondary);margin-bottom:.25rem}
  .form-group input{
    background:var(--bg-input);border:1px solid rgba(71,85,105,.35);
    border-radius:var(--radius-md);color:var(--text-primary);
    padding:.55rem .8rem;font-size:.88rem;font-family:inherit;
  }
  .a-title{color:var(--indigo)} .b-title{color:var(--emerald)}
  .btn{
    background:linear-gradient(135deg,#6366f1,#8b5cf6);color:#fff;border:none;
    border-radius:var(--radius-md);padding:.75rem 2rem;font-size:.95rem;
    font-weight:600;cursor:pointer;
  }
  .stats{display:grid;grid-template-columns:repeat(auto-fit,minmax(220px,1fr));gap:1rem}
  .stat{background:var(--bg-input);border-radius:var(--radius-md);padding:1rem}
  .stat-label{font-size:.75rem;color:var(--text-secondary);text-transform:uppercase;letter-spacing:.05em}
  .stat-value{font-size:1.4rem;font-weight:700}
  .positive{color:var(--emerald)} .negative{color:var(--red)}
  .verdict{font-size:1rem;color:var(--text-primary);margin-top:1rem}
  .chart img{width:100%;border-radius:var(--radius-md);margin-bottom:1rem}
  table{width:100%;border-collapse:collapse;font-size:.82rem}
  th,td{padding:.35rem .5rem;text-align:right;border-bottom:1px solid rgba(71,85,105,.25)}
  th:first-child,td:first-child,th:nth-child(2),td:nth-child(2){text-align:left}
  th{color:var(--text-secondary);font-weight:600}
  .share{display:flex;gap:.6rem;flex-wrap:wrap;align-items:center}
  .share input{flex:1;min-width:260px}
  a{color:var(--indigo)}
</style>
</head>
<body>
<div class="container">

<div class="hero">
  <h1>Opportunity Cost Calculator</h1>
  <p class="hero-sub">Compare two career paths by projecting every year's tuition and salary forward at a market return.</p>
</div>

<form method="post" action="/">
<div class="options">
  {% for key, title_cls in [('a', 'a-title'), ('b', 'b-title')] %}
  <div class="card">
    <h2 class="{{ title_cls }}">Option {{ key|upper }}</h2>
    <div class="form-group"><label>Name</label>
      <input type="text" name="{{ key }}_name" value="{{ form.get(key ~ '_name', '') }}"></div>
    <div class="form-group"><label>Starting salary ($)</label>
      <input type="text" name="{{ key }}_salary" value="{{ form.get(key ~ '_salary', '') }}"></div>
    <div class="form-group"><label>Salary growth (%/yr)</label>
      <input type="text" name="{{ key }}_growth" value="{{ form.get(key ~ '_growth', '') }}"></div>
    <div class="form-group"><label>Tuition per year ($)</label>
      <input type="text" name="{{ key }}_tuition" value="{{ form.get(key ~ '_tuition', '') }}"></div>
    <div class="form-group"><label>Years of tuition</label>
      <input type="text" name="{{ key }}_tuition_years" value="{{ form.get(key ~ '_tuition_years', '') }}"></div>
    <div class="form-group"><label>Years before starting</label>
      <input type="text" name="{{ key }}_delay" value="{{ form.get(key ~ '_delay', '') }}"></div>
  </div>
  {% endfor %}
</div>

<div class="card">
  <h2>Shared Assumptions</h2>
  <div class="options">
    <div class="form-group"><label>Years to project</label>
      <input type="text" name="years" value="{{ form.get('years', '') }}"></div>
    <div class="form-group"><label>Market return (%/yr)</label>
      <input type="text" name="rate" value="{{ form.get('rate', '') }}"></div>
  </div>
  <button type="submit" class="btn">Calculate</button>
</div>
</form>

{% if d %}
<div class="card">
  <h2>Opportunity Cost Analysis</h2>
  <div class="stats">
    <div class="stat">
      <div class="stat-label">{{ d.a_name }} future value</div>
      <div class="stat-value">{{ fmt(d.a_fv) }}</div>
    </div>
    <div class="stat">
      <div class="stat-label">{{ d.b_name }} future value</div>
      <div class="stat-value">{{ fmt(d.b_fv) }}</div>
    </div>
    <div class="stat">
      <div class="stat-label">Choosing {{ d.a_name }} over {{ d.b_name }}</div>
      <div class="stat-value {{ 'positive' if d.opportunity_cost >= 0 else 'negative' }}">
        {{ fmt(d.opportunity_cost) }} ({{ pct(d.percentage_diff) }})</div>
    </div>
  </div>
  <p class="verdict">{{ verdict_text }}</p>
</div>

<div class="card">
  <h2>Share</h2>
  <div class="share">
    <input type="text" id="share-link" readonly value="{{ share_url }}">
    <button type="button" class="btn" id="copy-btn">Copy link</button>
    <a href="/export.txt?{{ d.share_query }}">Plain-text summary</a>
    <a href="/download-pdf">Download PDF</a>
  </div>
</div>

<div class="card chart">
  <h2>Charts</h2>
  {% for img in charts %}
  <img src="data:image/png;base64,{{ img }}" alt="chart {{ loop.index }}">
  {% endfor %}
</div>

{% for option, rows in ledgers %}
<div class="card">
  <h2>Year by Year: {{ option.name }}</h2>
  <table>
    <tr><th>Year</th><th>Type</th><th>Cash flow</th><th>Interest</th>
        <th>Total change</th><th>No interest</th><th>Net worth</th></tr>
    {% for r in rows %}
    <tr>
      <td>{{ r.year }}</td><td>{{ r.description }}</td>
      <td class="{{ 'negative' if r.cash_flow_gain_loss < 0 else '' }}">{{ fmt(r.cash_flow_gain_loss) }}</td>
      <td>{{ fmt(r.interest_gain_loss) }}</td>
      <td>{{ fmt(r.total_gain_loss) }}</td>
      <td>{{ fmt(r.value_without_interest) }}</td>
      <td class="{{ 'negative' if r.net_worth < 0 else '' }}">{{ fmt(r.net_worth) }}</td>
    </tr>
    {% endfor %}
  </table>
</div>
{% endfor %}
{% endif %}

</div>
<script>
(function(){
  var btn=document.getElementById('copy-btn');
  var link=document.getElementById('share-link');
  if(!btn||!link) return;
  btn.addEventListener('click',function(){
    navigator.clipboard.writeText(link.value).then(function(){
      btn.textContent='Copied';
      setTimeout(function(){btn.textContent='Copy link'},1500);
    });
  });
})();
</script>
</body>
</html>
"""


def _render(results: ProjectionResults | None) -> str:
    if results is None:
        a, b, params = decode_query("")
        return render_template_string(
            HTML_TEMPLATE,
            form=_form_values(a, b, params),
            d=None,
            charts=[],
            ledgers=[],
            verdict_text="",
            share_url="",
            fmt=fmt,
            pct=pct,
        )

    d = compute_display_data(results)
    verdict_text = generate_verdict_text(d)
    chart_images = report.get_web_charts(results)

    # Save PDF for download
    report.generate_pdf(results, d, verdict_text, cfg.REPORT_PATH)

    return render_template_string(
        HTML_TEMPLATE,
        form=_form_values(results.option_a, results.option_b, results.params),
        d=d,
        charts=chart_images,
        ledgers=[
            (results.option_a, results.breakdown_a),
            (results.option_b, results.breakdown_b),
        ],
        verdict_text=verdict_text,
        share_url=f"{request.url_root}?{d['share_query']}",
        fmt=fmt,
        pct=pct,
    )


# ═══════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════

@app.route("/", methods=["GET", "POST"])
def index():
    if request.method == "GET":
        # Shared links carry the parameters in the query string
        if has_parameters(request.args):
            return _render(parse_form(request.args))
        return _render(None)

    return _render(parse_form(request.form))


@app.route("/api/projection")
def api_projection():
    """JSON of every data product for the query-string parameters."""
    results = parse_form(request.args)
    d = compute_display_data(results)
    return jsonify({
        "projection": dataclasses.asdict(results),
        "summary": d,
        "verdict": generate_verdict_text(d),
    })


@app.route("/export.txt")
def export_txt():
    results = parse_form(request.args)
    d = compute_display_data(results)
    text = export_text(d, url=request.url_root)
    return Response(text, mimetype="text/plain")


@app.route("/download-pdf")
def download_pdf():
    if os.path.exists(cfg.REPORT_PATH):
        return send_file(
            os.path.abspath(cfg.REPORT_PATH),
            as_attachment=True,
            download_name="opportunity_cost_report.pdf",
        )
    return "No report generated yet. Run a calculation first.", 404


# ═══════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════

def run_web(debug: bool = True) -> None:
    """Start the Flask development server and open browser."""
    import webbrowser
    import threading

    url = f"http://{cfg.WEB_HOST}:{cfg.WEB_PORT}"
    print(f"Starting web app at {url}")
    threading.Timer(1.0, lambda: webbrowser.open(url)).start()
    app.run(host=cfg.WEB_HOST, port=cfg.WEB_PORT, debug=debug)


if __name__ == "__main__":
    run_web()
