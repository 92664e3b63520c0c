"""
data_loader.py - Admin API calls for the Streamlit dashboard.

Every call carries the admin password in X-Admin-Password; the dashboard
never talks to Snowflake directly.
"""

import os
from typing import Dict, List, Optional

import pandas as pd
import requests
import streamlit as st

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
API_BASE = os.getenv("CHAMP_API_URL", "http://localhost:8000")
ADMIN_PREFIX = "/api/v1/admin"
PAGE_SIZE = 500

TIERS = ["Tier1", "Tier2", "OpenNetwork"]
TIER_COLORS = {
    "Tier1": "#16a34a",
    "Tier2": "#ca8a04",
    "OpenNetwork": "#64748b",
}

# Columns shown in the overview table
TABLE_COLUMNS = {
    "first_name": "First Name",
    "last_name": "Last Name",
    "email": "Email",
    "country": "Country",
    "archetype_label": "Archetype",
    "hidden_tier": "Tier",
    "availability_hours": "Availability",
    "created_at": "Created",
}


class AdminApiError(Exception):
    """Raised when the admin API answers with anything but success."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)


# ---------------------------------------------------------------------------
# API helpers
# ---------------------------------------------------------------------------
def _headers(password: str) -> Dict[str, str]:
    return {"X-Admin-Password": password}


def _error_message(r: requests.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text or f"HTTP {r.status_code}"
    return body.get("message") or str(body)


def _get(path: str, password: str, params: Optional[Dict] = None, timeout: int = 30) -> requests.Response:
    r = requests.get(
        f"{API_BASE}{ADMIN_PREFIX}{path}",
        headers=_headers(password),
        params={k: v for k, v in (params or {}).items() if v is not None},
        timeout=timeout,
    )
    if r.status_code != 200:
        raise AdminApiError(r.status_code, _error_message(r))
    return r


def authenticate(password: str) -> bool:
    """True on the right password, False on 401; other failures raise AdminApiError."""
    r = requests.post(f"{API_BASE}{ADMIN_PREFIX}/auth", json={"password": password}, timeout=15)
    if r.status_code == 200:
        return True
    if r.status_code == 401:
        return False
    raise AdminApiError(r.status_code, _error_message(r))


# ---------------------------------------------------------------------------
# Cached loaders
# ---------------------------------------------------------------------------
@st.cache_data(ttl=60, show_spinner=False)
def load_submissions(password: str, archetype: Optional[str] = None, tier: Optional[str] = None) -> List[Dict]:
    """All submissions matching the filters, newest first."""
    items: List[Dict] = []
    page = 1
    while True:
        body = _get(
            "/submissions",
            password,
            {"archetype": archetype, "tier": tier, "page": page, "page_size": PAGE_SIZE},
        ).json()
        items.extend(body["items"])
        if page >= body["total_pages"]:
            break
        page += 1
    return items


@st.cache_data(ttl=60, show_spinner=False)
def load_archetypes(password: str) -> List[str]:
    return _get("/archetypes", password).json()["labels"]


@st.cache_data(ttl=60, show_spinner=False)
def load_stats(password: str) -> Dict:
    return _get("/stats", password).json()


def load_export(password: str, archetype: Optional[str] = None, tier: Optional[str] = None) -> bytes:
    """CSV body exactly as the API renders it."""
    return _get("/submissions/export", password, {"archetype": archetype, "tier": tier}, timeout=60).content


# ---------------------------------------------------------------------------
# DataFrame builders
# ---------------------------------------------------------------------------
def build_submissions_df(items: List[Dict]) -> pd.DataFrame:
    if not items:
        return pd.DataFrame(columns=["id", *TABLE_COLUMNS.values()])
    df = pd.DataFrame(items)
    df["created_at"] = pd.to_datetime(df["created_at"], utc=True).dt.strftime("%Y-%m-%d %H:%M")
    df = df[["id", *TABLE_COLUMNS.keys()]].rename(columns=TABLE_COLUMNS)
    return df


def build_scores_df(items: List[Dict]) -> pd.DataFrame:
    """Long-format scores for distribution charts."""
    rows = []
    for item in items:
        for archetype in ("builder", "translator", "architect"):
            rows.append({
                "Archetype": archetype.title(),
                "Score": item[f"{archetype}_score"],
                "Tier": item["hidden_tier"],
            })
    return pd.DataFrame(rows, columns=["Archetype", "Score", "Tier"])
