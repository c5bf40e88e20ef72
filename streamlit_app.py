"""
Main streamlit.io application
"""

import streamlit as st

from hourcast import config as cfg
from hourcast.ui import forecast
from hourcast.utils.log_util import app_logger

logger = app_logger(__name__)

st.set_page_config(
    page_title="Hourcast",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# ?location=Europe/Berlin overrides HOURCAST_LOCATION
location_hint = st.query_params.get("location") or cfg.initial_location()

widget = forecast.get_widget(location_hint)

try:
    forecast.render(widget)
except Exception as e:
    logger.exception(f"Unhandled exception while rendering: {e}")
    st.error("Weather widget temporarily unavailable")
