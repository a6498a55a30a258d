"""Typed HTTP client for the statistics backend.

Only imports from ``biostats.api.schemas`` for payloads.
Instantiate via ``get_client()`` which caches per Streamlit session.
"""
from __future__ import annotations

from typing import Any

import httpx
import streamlit as st
from pydantic import ValidationError

from biostats.api.schemas.stats import StatsFileResponse
from biostats.config import Settings, settings
from biostats.domain.exceptions import APIError, PayloadError, RemoteCallError

FETCH_PATH = "/fetch-stats-from-file"
RECOMPUTE_PATH = "/update-stats-from-api"


class StatsClient:
    """One method per backend endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        file_type: str = "json",
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url
        self.file_type = file_type
        self._client = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "StatsClient":
        """Build a client from *config*; raises ``ConfigurationError`` if no base URL."""
        return cls(
            config.require_api_base_url(),
            file_type=config.STATS_FILE_TYPE,
            timeout=config.STATS_HTTP_TIMEOUT,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            detail = resp.json().get("detail", resp.text)
        except Exception:
            detail = resp.text
        raise APIError(resp.status_code, str(detail))

    def _get(self, path: str) -> httpx.Response:
        try:
            resp = self._client.get(path, params={"file_type": self.file_type})
        except httpx.HTTPError as exc:
            raise RemoteCallError(f"GET {path} failed: {exc}") from exc
        self._raise_for_status(resp)
        return resp

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def fetch_snapshot(self) -> StatsFileResponse:
        """Read the latest persisted snapshot."""
        resp = self._get(FETCH_PATH)
        try:
            return StatsFileResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise PayloadError(f"Malformed response from {FETCH_PATH}: {exc}") from exc

    def trigger_recompute(self) -> Any:
        """Ask the backend to recompute and persist a fresh snapshot.

        The response body carries no contract; it is returned as-is when it is
        JSON and ``None`` otherwise.
        """
        resp = self._get(RECOMPUTE_PATH)
        try:
            return resp.json()
        except ValueError:
            return None

    def close(self) -> None:
        self._client.close()


# ------------------------------------------------------------------
# Streamlit helper — one client per session
# ------------------------------------------------------------------

def get_client() -> StatsClient:
    """Return a cached ``StatsClient`` for the current Streamlit session."""
    if "stats_api_client" not in st.session_state:
        st.session_state["stats_api_client"] = StatsClient.from_settings()
    return st.session_state["stats_api_client"]
