"""Reusable Streamlit building blocks shared by the entity pages."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, TypeVar

import streamlit as st

from .errors import CategoryNotFoundError, FinanceServiceError, RecordNotFoundError, RecordValidationError
from .formatting import format_currency

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_service_call(
    action: str,
    func: Callable[..., T],
    *args: Any,
    success: Optional[str] = None,
    **kwargs: Any,
) -> Optional[T]:
    """Call a service operation and turn failures into notices.

    Args:
        action: Short description used in the error notice, e.g. "save budget".
        func: Service method to invoke.
        success: Toast shown when the call succeeds.

    Returns:
        The service result, or ``None`` when the call failed.
    """
    try:
        result = func(*args, **kwargs)
    except CategoryNotFoundError as exc:
        st.error(f"Failed to {action}: category {exc.name!r} does not exist. Create it on the Categories page first.")
        return None
    except RecordNotFoundError as exc:
        st.error(f"Failed to {action}: {exc}")
        return None
    except RecordValidationError as exc:
        st.error(f"Failed to {action}:\n\n" + "\n".join(f"- {m}" for m in exc.messages))
        return None
    except FinanceServiceError as exc:
        st.error(f"Failed to {action}: {exc}")
        return None
    if success:
        st.toast(success)
    return result


def show_form_errors(errors: List[str]) -> bool:
    """Render validation problems; return True when there were none."""
    for message in errors:
        st.error(message)
    return not errors


def confirm_delete(key: str, label: str, on_confirm: Callable[[], Any]) -> None:
    """Two-step delete button: first click asks, second click deletes."""
    flag = f"confirm_delete_{key}"
    if not st.session_state.get(flag, False):
        if st.button("🗑️ Delete", key=f"delete_{key}"):
            st.session_state[flag] = True
            st.rerun()
        return

    st.warning(f"Delete {label}? This cannot be undone.")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("✅ Confirm", key=f"confirm_{key}"):
            st.session_state[flag] = False

            def _delete() -> bool:
                on_confirm()
                return True

            if run_service_call(f"delete {label}", _delete, success=f"Deleted {label}"):
                st.rerun()
    with col2:
        if st.button("❌ Cancel", key=f"cancel_{key}"):
            st.session_state[flag] = False
            st.rerun()


def metric_currency(label: str, amount: float, help: Optional[str] = None) -> None:
    st.metric(label, format_currency(amount), help=help)
