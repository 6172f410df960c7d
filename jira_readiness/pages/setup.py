"""Connection setup page: collect Jira credentials and initialize ReadinessService."""

from __future__ import annotations

import logging

import streamlit as st

from jira_readiness.app import register_page
from jira_readiness.core.jira_client import JiraAPI
from jira_readiness.core.profiles import load_profiles
from jira_readiness.core.service import ReadinessService

logger = logging.getLogger(__name__)


def jira_secrets() -> tuple[str | None, str | None, str | None]:
    """Read server/email/token from a [jira] secrets section or the top level."""
    section = st.secrets.get("jira", {})
    server = section.get("JIRA_SERVER") or st.secrets.get("JIRA_SERVER")
    email = section.get("JIRA_EMAIL") or st.secrets.get("JIRA_EMAIL")
    token = (
        section.get("JIRA_API_TOKEN")
        or st.secrets.get("JIRA_API_TOKEN")
        or section.get("JIRA_TOKEN")
        or st.secrets.get("JIRA_TOKEN")
    )
    return server, email, token


@register_page("Setup / Connection")
def setup_page():
    st.title("Jira Connection Setup")
    st.caption("Enter credentials (use secrets manager in production).")

    secret_server, secret_email, secret_token = jira_secrets()
    profiles = load_profiles()

    server = st.text_input(
        "Jira Server URL",
        value=st.session_state.get("jira_server") or secret_server or profiles.url,
    )
    email = st.text_input(
        "Email / Username",
        value=st.session_state.get("jira_email") or secret_email or "",
    )
    token = st.text_input("API Token", type="password", value=secret_token or "")
    ttl = st.number_input("Client cache TTL (seconds)", min_value=60, max_value=3600, value=300)

    if st.button("Initialize Connection", type="primary"):
        if not (server and email and token):
            st.error("All fields required.")
            return
        try:
            api = JiraAPI(server, email, token)
            api._cache_ttl = float(ttl)
            st.session_state["jira_server"] = server
            st.session_state["jira_email"] = email
            st.session_state["readiness_service"] = ReadinessService(api)
            st.success("Connection initialized.")
        except Exception as e:  # pragma: no cover
            logger.warning("Jira client initialization failed: %s", e)
            st.error(f"Failed to initialize Jira client: {e}")

    if "readiness_service" in st.session_state:
        st.info("ReadinessService ready.")
