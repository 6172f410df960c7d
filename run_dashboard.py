"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``jira_readiness/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from jira_readiness.app import main

logger = logging.getLogger(__name__)

st.set_page_config(layout="wide")


def _auto_init_readiness_service():
    """Initialize the Jira service from Streamlit secrets if available."""
    if "readiness_service" in st.session_state:
        return

    from jira_readiness.pages.setup import jira_secrets

    server, email, token = jira_secrets()
    if server and email and token:
        st.sidebar.info("Secrets found, attempting to connect to Jira...")
        try:
            from jira_readiness.core.jira_client import JiraAPI
            from jira_readiness.core.service import ReadinessService

            api = JiraAPI(server, email, token)
            st.session_state["jira_server"] = server
            st.session_state["readiness_service"] = ReadinessService(api)
            st.sidebar.success("Jira connection successful!")
        except Exception as e:
            st.sidebar.error(f"Jira connection failed: {e}")
            st.session_state.pop("readiness_service", None)
    else:
        st.sidebar.warning("Jira secrets not found. Please use the Setup page.")


PAGES_DIR = Path(__file__).parent / "jira_readiness" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"jira_readiness.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception as e:  # pragma: no cover
        logger.error("Failed importing page %s: %s", mod_name, e)

_auto_init_readiness_service()

if __name__ == "__main__":
    main()
