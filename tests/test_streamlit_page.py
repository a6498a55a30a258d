"""The Streamlit page, run headless through AppTest against the stub backend."""
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from biostats.config import settings

APP_PATH = Path(__file__).parent.parent / "src" / "biostats" / "ui" / "app.py"


@pytest.fixture
def page(stats_client, monkeypatch):
    monkeypatch.setattr(settings, "STATS_DISPLAY_TZ", "UTC")
    monkeypatch.setattr(settings, "STATS_SHOW_ERRORS", False)
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.session_state["stats_api_client"] = stats_client
    return at


def test_first_run_renders_snapshot(page, backend):
    page.run()

    assert not page.exception
    assert page.title[0].value == "The bioBakery Lab"
    assert any(
        m.value == "**Last Updated:** Jan 15, 2024, 10:30:00 AM" for m in page.markdown
    )
    assert [s.value for s in page.subheader] == ["DockerHub", "Conda", "Bioconductor"]

    docker, conda = (df.value for df in page.dataframe)
    assert docker.values.tolist() == [["biobakery/metaphlan", "1200"], ["biobakery/humann", "500"]]
    assert conda.values.tolist() == [["humann", "300"]]
    assert page.info[0].value == "No Bioconductor stats available."
    assert backend.call_names() == ["fetch"]


def test_initial_load_runs_once_per_session(page, backend):
    page.run()
    page.run()
    assert backend.call_names() == ["fetch"]


def test_update_button_recomputes_then_fetches(page, backend):
    page.run()
    page.button[0].click().run()

    assert not page.exception
    assert backend.call_names() == ["fetch", "recompute", "fetch"]


def test_failures_are_silent_by_default(page, backend):
    backend.fetch_status = 500
    page.run()

    assert not page.exception
    assert len(page.error) == 0
    assert any(m.value == "**Last Updated:** Unknown" for m in page.markdown)
    assert len(page.dataframe) == 0


def test_error_banner_when_enabled(page, backend, monkeypatch):
    monkeypatch.setattr(settings, "STATS_SHOW_ERRORS", True)
    page.run()
    backend.recompute_status = 502
    page.button[0].click().run()

    errors = [e.value for e in page.error]
    assert len(errors) == 1
    assert errors[0].startswith("Updating stats from API failed: [502]")
    # The follow-up fetch still succeeded, so the tables stay populated.
    assert len(page.dataframe) == 2


def test_missing_base_url_stops_page(monkeypatch):
    monkeypatch.setattr(settings, "STATS_API_BASE_URL", None)
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()

    assert not at.exception
    assert "STATS_API_BASE_URL is not set" in at.error[0].value
    assert len(at.button) == 0


def test_bad_display_tz_stops_page(page, monkeypatch, backend):
    monkeypatch.setattr(settings, "STATS_DISPLAY_TZ", "Mars/Base")
    page.run()

    assert not page.exception
    assert "STATS_DISPLAY_TZ is not a known time zone" in page.error[0].value
    assert backend.call_names() == []
