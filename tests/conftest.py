"""Shared test fixtures.

The statistics backend is out of scope for this repo; ``StubBackend`` is a
minimal FastAPI stand-in with the two endpoints the dashboard calls.

Fixtures:
  backend       — the stub, with mutable payload / failure switches.
  stats_client  — StatsClient talking to the stub through TestClient.
"""
import os
from typing import Any

import pytest
from fastapi import FastAPI, HTTPException


def pytest_configure(config):
    """Keep a developer's .env or shell from leaking into settings."""
    os.environ.pop("STATS_API_BASE_URL", None)
    os.environ.setdefault("STATS_DISPLAY_TZ", "UTC")


SCENARIO_PAYLOAD: dict[str, Any] = {
    "stats": {
        "docker": {
            "biobakery/humann": {"pull_count": 500},
            "biobakery/metaphlan": {"pull_count": 1200},
        },
        "conda": {"conda": {"humann": 300}},
        "bioconductor": {"bioconductor": {}},
    },
    "last_update": "2024-01-15T10:30:00Z",
}


class StubBackend:
    def __init__(self) -> None:
        self.payload: Any = SCENARIO_PAYLOAD
        self.fetch_status = 200
        self.recompute_status = 200
        self.calls: list[tuple[str, dict]] = []
        self.app = self._build_app()

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        @app.get("/fetch-stats-from-file")
        def fetch_stats_from_file(file_type: str = "json"):
            self.calls.append(("fetch", {"file_type": file_type}))
            if self.fetch_status != 200:
                raise HTTPException(status_code=self.fetch_status, detail="stats file unreadable")
            return self.payload

        @app.get("/update-stats-from-api")
        def update_stats_from_api(file_type: str = "json"):
            self.calls.append(("recompute", {"file_type": file_type}))
            if self.recompute_status != 200:
                raise HTTPException(status_code=self.recompute_status, detail="upstream registry down")
            return {"message": "Stats updated"}

        return app

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def backend():
    return StubBackend()


@pytest.fixture
def stats_client(backend):
    from fastapi.testclient import TestClient
    from biostats.ui.api_client import StatsClient

    with TestClient(backend.app) as http:
        yield StatsClient("http://testserver", http_client=http)
