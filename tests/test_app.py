"""Tests for the Flask routes."""
import pytest

import config as cfg
from app import app


SHARE = (
    "years=3&rate=0"
    "&a_name=Work&a_salary=75000&a_growth=0&a_tuition=0&a_tuition_years=0&a_delay=0"
    "&b_name=School&b_salary=0&b_growth=0&b_tuition=50000&b_tuition_years=1&b_delay=0"
)


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(cfg, "REPORT_PATH", str(tmp_path / "report.pdf"))
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


class TestIndex:
    def test_blank_form_has_defaults(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        html = resp.get_data(as_text=True)
        assert "Opportunity Cost Calculator" in html
        assert 'value="Graduate school"' in html
        assert "Year by Year" not in html

    def test_shared_link_computes(self, client):
        resp = client.get(f"/?{SHARE}")
        html = resp.get_data(as_text=True)
        assert resp.status_code == 200
        assert "$225,000" in html
        assert "Year by Year: School" in html
        assert "data:image/png;base64," in html

    def test_post_computes_and_saves_pdf(self, client):
        resp = client.post("/", data={"years": "5", "a_salary": "not a number"})
        assert resp.status_code == 200
        assert 'name="a_salary" value="0"' in resp.get_data(as_text=True)
        assert client.get("/download-pdf").status_code == 200


class TestApi:
    def test_projection_json(self, client):
        data = client.get(f"/api/projection?{SHARE}").get_json()
        summary = data["summary"]
        assert summary["a_fv"] == pytest.approx(225_000)
        assert summary["b_fv"] == pytest.approx(-50_000)
        assert summary["winner"] == "a"
        projection = data["projection"]
        assert [cf["value"] for cf in projection["schedule_a"]] == [75_000, 75_000, 75_000]
        assert projection["breakdown_b"][0]["description"] == "Tuition"
        assert projection["comparison"]["opportunity_cost"] == pytest.approx(275_000)

    def test_export_text(self, client):
        resp = client.get(f"/export.txt?{SHARE}")
        assert resp.mimetype == "text/plain"
        text = resp.get_data(as_text=True)
        assert "Choosing Work over School" in text
        assert "http://localhost/?" in text


class TestDownload:
    def test_missing_report_is_404(self, client):
        resp = client.get("/download-pdf")
        assert resp.status_code == 404
