import streamlit as st

from biostats.config import settings
from biostats.domain.exceptions import ConfigurationError
from biostats.domain.stats import total_count
from biostats.ui.dashboard import RemoteResult
from biostats.ui.tables import rows_to_frame
from biostats.ui.state import get_controller, mark_initial_load_done, needs_initial_load


def _report(result: RemoteResult, what: str) -> None:
    if not result.ok and settings.STATS_SHOW_ERRORS:
        st.error(f"{what} failed: {result.error}")


st.set_page_config(page_title="bioBakery Stats", layout="wide")
st.title("The bioBakery Lab")

try:
    display_tz = settings.require_display_tz()
    controller = get_controller()
except ConfigurationError as e:
    st.error(f"Configuration error: {e.message}")
    st.stop()

if needs_initial_load():
    with st.spinner("Loading..."):
        _report(controller.initial_load(), "Loading stats")
    mark_initial_load_done()

if st.button("Update Stats from API"):
    with st.spinner("Updating stats from API, this can take a few minutes..."):
        recompute, fetch = controller.refresh()
    _report(recompute, "Updating stats from API")
    _report(fetch, "Loading stats")

st.markdown(f"**Last Updated:** {controller.last_update_text(display_tz)}")

tables = controller.tables()
for col, (category, rows) in zip(st.columns(len(tables)), tables):
    with col:
        st.subheader(category.title)
        if not rows:
            st.info(f"No {category.title} stats available.")
            continue
        st.dataframe(rows_to_frame(category, rows), hide_index=True, width="stretch")
        st.caption(f"Total: {total_count(rows):,}")
