"""
forecast.py rendering for the forecast page

Maps Streamlit widgets onto the widget's key events and renders the state
snapshot: error banner, location prompt, progress, or the forecast itself.
"""

import streamlit as st

import hourcast.core.data_processing as hc_dp
import hourcast.core.visualization as hc_viz
from hourcast import config as cfg
from hourcast.core.widget import WeatherWidget
from hourcast.models.state import ApplicationState, Key, Phase
from hourcast.utils.log_util import app_logger

logger = app_logger(__name__)


def get_widget(location_hint=None) -> WeatherWidget:
    """Return the session's widget, creating it on first run."""
    if "widget" not in st.session_state:
        st.session_state["widget"] = WeatherWidget(location_hint=location_hint)
        logger.debug("Created weather widget for session")
    return st.session_state["widget"]


def _settle(widget: WeatherWidget) -> None:
    if widget.state.phase is Phase.FETCHING:
        with st.spinner(hc_dp.FETCHING_TEXT):
            widget.run_until_settled(cfg.SETTLE_TIMEOUT_SECONDS)


def render_controls(widget: WeatherWidget) -> None:
    col1, col2 = st.columns([1, 1])
    with col1:
        if st.button("🔄 Reload", key="hourcast_reload"):
            widget.press(Key.CONFIRM)
    with col2:
        if st.button("📍 New location", key="hourcast_new_location"):
            widget.press(Key.NEW_LOCATION)


def render_location_prompt(widget: WeatherWidget) -> None:
    with st.form("hourcast_location_form"):
        text = st.text_input("Enter desired location", value=widget.state.draft_input)
        submitted = st.form_submit_button("Go")
    if submitted:
        widget.type_text(text)


def render_forecast(state: ApplicationState) -> None:
    """Location label, upcoming-hours table and the full forecast chart."""
    current_hour = hc_dp.current_forecast_hour()

    if state.forecast_label:
        st.subheader(state.forecast_label)

    table = hc_dp.upcoming_table(state.forecast, current_hour)
    st.dataframe(table, hide_index=True)
    st.caption("Times are UTC")

    df = hc_dp.forecast_to_dataframe(state.forecast)
    fig = hc_viz.create_forecast_chart(df, current_hour=current_hour)
    st.plotly_chart(fig, width="stretch", key="hourcast_forecast_chart")


def render(widget: WeatherWidget) -> None:
    render_controls(widget)
    if widget.state.phase is Phase.TYPING_LOCATION:
        render_location_prompt(widget)

    _settle(widget)
    state = widget.state
    headline, hint = hc_dp.status_lines(state)

    if state.phase is Phase.ERROR:
        st.error(headline)
        st.caption(hint)
        # Keep the last good forecast visible behind the error.
        if state.forecast:
            render_forecast(state)
    elif state.phase is Phase.TYPING_LOCATION:
        st.caption(headline)
    elif state.phase is Phase.IDLE:
        st.info(headline)
    elif state.phase is Phase.FETCHING:
        st.warning(headline)
    else:
        render_forecast(state)
        st.caption(hint)
