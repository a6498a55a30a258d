import subprocess
import sys
from pathlib import Path

import typer

from biostats.config import settings
from biostats.domain.exceptions import ConfigurationError
from biostats.logging import logger, get_run_id
from biostats.ui.api_client import StatsClient
from biostats.ui.dashboard import DashboardController

app = typer.Typer(no_args_is_help=True)


@app.callback()
def main():
    """
    bioBakery Stats CLI.
    """
    pass


def _build_controller() -> DashboardController:
    try:
        settings.require_display_tz()
        client = StatsClient.from_settings(settings)
    except ConfigurationError as e:
        print(f"❌ {e.message}")
        raise typer.Exit(code=1)
    return DashboardController(client)


def _print_tables(controller: DashboardController) -> None:
    print(f"\nLast Updated: {controller.last_update_text(settings.require_display_tz())}")
    for category, rows in controller.tables():
        print(f"\n[{category.title}]")
        if not rows:
            print("  (no entries)")
            continue
        width = max(len(row.name) for row in rows)
        print(f"  {category.name_label:<{width}}  {category.count_label}")
        for row in rows:
            print(f"  {row.name:<{width}}  {row.display_count}")


@app.command(name="doctor")
def doctor():
    """
    Check configuration and backend reachability.
    """
    logger.info("Running doctor check...")

    failures: list[str] = []
    passed = 0

    print("\n🩺 bioBakery Stats Doctor\n")

    # ── Check 1: Environment ────────────────────────────────────────────────
    print("[Environment]")
    print(f"  Python: {sys.version.split()[0]}")
    print(f"  Run ID: {get_run_id()}")
    passed += 1

    # ── Check 2: Base URL ───────────────────────────────────────────────────
    print("\n[Configuration]")
    base_url = None
    try:
        base_url = settings.require_api_base_url()
        print(f"  STATS_API_BASE_URL:  ✅ {base_url}")
        passed += 1
    except ConfigurationError as e:
        print("  STATS_API_BASE_URL:  ❌ Invalid")
        failures.append(e.message)

    print(f"  STATS_FILE_TYPE:     {settings.STATS_FILE_TYPE}")
    print(f"  STATS_HTTP_TIMEOUT:  {settings.STATS_HTTP_TIMEOUT or 'none'}")
    config_ok = base_url is not None
    try:
        settings.require_display_tz()
        print(f"  STATS_DISPLAY_TZ:    ✅ {settings.STATS_DISPLAY_TZ}")
        passed += 1
    except ConfigurationError as e:
        print(f"  STATS_DISPLAY_TZ:    ❌ {settings.STATS_DISPLAY_TZ!r}")
        failures.append(e.message)
        config_ok = False

    # ── Check 3: Backend reachable ──────────────────────────────────────────
    print("\n[Backend]")
    if not config_ok:
        print("  fetch-stats-from-file  ⚠️  Skipped (configuration invalid)")
    else:
        controller = _build_controller()
        result = controller.fetch_snapshot()
        if result.ok:
            print("  fetch-stats-from-file  ✅ Reachable")
            passed += 1
        else:
            print("  fetch-stats-from-file  ❌ Failed")
            failures.append(f"Backend fetch failed: {result.error}")

    # ── Summary ──────────────────────────────────────────────────────────────
    total = passed + len(failures)
    print(f"\n{'─' * 50}")
    if failures:
        print(f"Result: {passed}/{total} checks passed\n")
        for msg in failures:
            print(f"  ❌ {msg}")
        print()
        raise typer.Exit(code=1)
    else:
        print(f"Result: {passed}/{total} checks passed — all good ✅")
        print()


@app.command("show")
def show():
    """Print the latest persisted stats."""
    controller = _build_controller()
    result = controller.fetch_snapshot()
    if not result.ok:
        print(f"❌ Failed to fetch stats: {result.error}")
        raise typer.Exit(code=1)
    _print_tables(controller)


@app.command("refresh")
def refresh():
    """Ask the backend to recompute stats, then print the persisted result."""
    controller = _build_controller()
    print("Updating stats from API, this can take a few minutes...")
    recompute, fetch = controller.refresh()
    if recompute.ok:
        print("✅ Stats recomputed.")
    else:
        print(f"⚠️  Recompute failed: {recompute.error}")
    if not fetch.ok:
        print(f"❌ Failed to fetch stats: {fetch.error}")
        raise typer.Exit(code=1)
    _print_tables(controller)


@app.command("ui")
def ui(port: int = typer.Option(8501, help="Port for the Streamlit server")):
    """Launch the Streamlit dashboard."""
    page = Path(__file__).parent / "ui" / "app.py"
    try:
        settings.require_api_base_url()
        settings.require_display_tz()
    except ConfigurationError as e:
        print(f"❌ {e.message}")
        raise typer.Exit(code=1)
    raise typer.Exit(code=subprocess.call(
        [sys.executable, "-m", "streamlit", "run", str(page), "--server.port", str(port)]
    ))


if __name__ == "__main__":
    app()
