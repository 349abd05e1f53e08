"""Shared sidebar components for the multi-page app.

Every page calls :func:`render_shared_sidebar` first; it owns the record
service connection and the month selection that budget and transaction
views share.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import streamlit as st

from .analytics import recent_months
from .config import configure_logging, ensure_data_directories, load_record_settings
from .formatting import format_month
from .models import is_valid_month, month_key
from .persistent_cache import load_cache, update_cache
from .record_client import RecordClient
from .services import Services, build_services

logger = logging.getLogger(__name__)

MONTH_CHOICES = 12


@st.cache_resource(show_spinner=False)
def get_services() -> Services:
    """One record client and service bundle per Streamlit server process."""
    configure_logging()
    settings = load_record_settings()
    if not settings.is_configured:
        logger.warning("Record service project id is not set; requests will likely be rejected")
    return build_services(RecordClient(settings))


def month_options(selected: str = "", count: int = MONTH_CHOICES) -> List[str]:
    """Recent months newest first, keeping ``selected`` available even if older."""
    options = list(reversed(recent_months(count)))
    if selected and is_valid_month(selected) and selected not in options:
        options.append(selected)
    return options


def render_shared_sidebar() -> Dict[str, Any]:
    """Render shared sidebar elements available on all pages.

    Returns:
        Dict with keys: 'services', 'month', 'cache'
    """
    ensure_data_directories()
    services = get_services()
    cache = load_cache()

    st.sidebar.title("💰 Finance Tracker")

    cached_month = cache.get('selected_month') or ''
    options = month_options(cached_month)
    default_month = cached_month if cached_month in options else month_key()
    month = st.sidebar.selectbox(
        "Month",
        options=options,
        index=options.index(default_month) if default_month in options else 0,
        format_func=format_month,
        key="selected_month",
    )
    cache = update_cache(selected_month=month)

    if st.sidebar.button("🔄 Refresh data"):
        st.rerun()

    return {
        'services': services,
        'month': month,
        'cache': cache,
    }
