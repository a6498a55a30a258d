"""Dashboard view state and the two user-facing operations.

Framework-agnostic: the Streamlit page and the CLI both drive a
``DashboardController``. Remote failures are logged and returned as a failed
``RemoteResult``; view state keeps its last good value.
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Generic, Iterator, TypeVar

from biostats.api.schemas.stats import StatsFileResponse
from biostats.domain.exceptions import RemoteCallError
from biostats.domain.stats import Category, CategoryRow, category_rows, format_timestamp
from biostats.logging import logger
from biostats.ui.api_client import StatsClient

T = TypeVar("T")


@dataclass(frozen=True)
class RemoteResult(Generic[T]):
    ok: bool
    value: T | None = None
    error: RemoteCallError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "RemoteResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: RemoteCallError) -> "RemoteResult[T]":
        return cls(ok=False, error=error)


@dataclass
class DashboardState:
    """View-local state for one dashboard session.

    ``loading`` is true only while a remote call is in flight. The Streamlit
    page blocks its own rerun for that time and shows ``st.spinner`` instead,
    so the flag is for callers that observe the state during a call.
    """

    stats: dict[str, Any] | None = None
    last_update: datetime | None = None
    loading: bool = False
    # Bumped on every successful fetch; lets callers detect a replaced snapshot.
    revision: int = 0


class DashboardController:
    def __init__(self, client: StatsClient, state: DashboardState | None = None) -> None:
        self.client = client
        self.state = state if state is not None else DashboardState()

    @contextmanager
    def _loading(self) -> Iterator[None]:
        self.state.loading = True
        try:
            yield
        finally:
            self.state.loading = False

    def fetch_snapshot(self) -> RemoteResult[StatsFileResponse]:
        """Load the persisted snapshot into state. State is untouched on failure."""
        with self._loading():
            try:
                response = self.client.fetch_snapshot()
            except RemoteCallError as exc:
                logger.error(f"Error fetching stats from file: {exc}")
                return RemoteResult.failure(exc)

        self.state.stats = response.stats.model_dump()
        self.state.last_update = response.last_update
        self.state.revision += 1
        return RemoteResult.success(response)

    def trigger_recompute(self) -> RemoteResult[Any]:
        with self._loading():
            try:
                body = self.client.trigger_recompute()
            except RemoteCallError as exc:
                logger.error(f"Error updating stats from API: {exc}")
                return RemoteResult.failure(exc)
        return RemoteResult.success(body)

    def initial_load(self) -> RemoteResult[StatsFileResponse]:
        return self.fetch_snapshot()

    def refresh(self) -> tuple[RemoteResult[Any], RemoteResult[StatsFileResponse]]:
        """Recompute, then fetch exactly once whatever the recompute outcome."""
        recompute = self.trigger_recompute()
        if recompute.ok:
            logger.info("Backend recompute finished; reloading snapshot")
        return recompute, self.fetch_snapshot()

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    def tables(self) -> list[tuple[Category, list[CategoryRow]]]:
        return category_rows(self.state.stats)

    def last_update_text(self, tz: tzinfo | str = "UTC") -> str:
        return format_timestamp(self.state.last_update, tz)
