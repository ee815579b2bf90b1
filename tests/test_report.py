"""Tests for chart rendering and the PDF report."""
import base64

from cli import compute_display_data, generate_verdict_text
from projection import GlobalParameters, run_projection
import report


PNG_MAGIC = b"\x89PNG"


class TestWebCharts:
    def test_three_png_images(self, work_now, grad_school, params):
        results = run_projection(work_now, grad_school, params)
        images = report.get_web_charts(results)
        assert len(images) == 3
        for img in images:
            assert base64.b64decode(img).startswith(PNG_MAGIC)

    def test_zero_horizon_renders(self, work_now, grad_school):
        results = run_projection(work_now, grad_school, GlobalParameters(0, 7))
        assert len(report.get_web_charts(results)) == 3


class TestGeneratePdf:
    def test_writes_file(self, tmp_path, work_now, grad_school, params):
        results = run_projection(work_now, grad_school, params)
        d = compute_display_data(results)
        path = tmp_path / "out.pdf"
        returned = report.generate_pdf(results, d, generate_verdict_text(d), str(path))
        assert returned == str(path)
        assert path.read_bytes().startswith(b"%PDF")


class TestUsdFormatter:
    def test_scales(self):
        assert report._usd_fmt(1_500_000, None) == "$1.5M"
        assert report._usd_fmt(-25_000, None) == "-$25k"
        assert report._usd_fmt(250, None) == "$250"
