# dashboard/app.py
# Champ Funnel admin dashboard. Run with: streamlit run dashboard/app.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

# =====================================================================
# Page config (must be first Streamlit call)
# =====================================================================

st.set_page_config(
    page_title="Champ Funnel Admin",
    layout="wide",
    page_icon="🛰️",
)

from data_loader import (  # noqa: E402
    TIERS,
    AdminApiError,
    authenticate,
    build_scores_df,
    build_submissions_df,
    load_archetypes,
    load_export,
    load_stats,
    load_submissions,
)
from components.charts import (  # noqa: E402
    archetype_bar_chart,
    score_distribution_chart,
    tier_bar_chart,
)

if "admin_password" not in st.session_state:
    st.session_state["admin_password"] = None


# =====================================================================
# Login
# =====================================================================

def render_login() -> None:
    st.title("Admin Access")
    with st.form("login"):
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login")
    if not submitted:
        return
    try:
        ok = authenticate(password)
    except AdminApiError as e:
        st.error(f"Admin API unavailable ({e.status_code}): {e}")
        return
    if ok:
        st.session_state["admin_password"] = password
        st.rerun()
    else:
        st.error("Invalid password")


# =====================================================================
# Detail panel
# =====================================================================

def render_detail(entry: Dict) -> None:
    st.subheader(f"{entry['first_name']} {entry['last_name']}")

    c1, c2, c3, c4 = st.columns(4)
    c1.markdown(f"**Email**  \n{entry['email']}")
    c2.markdown(f"**Age**  \n{entry['age']}")
    c3.markdown(f"**Country**  \n{entry['country']}" + (f", {entry['city']}" if entry.get("city") else ""))
    c4.markdown(f"**Timezone**  \n{entry['timezone']}")

    c1, c2, c3 = st.columns(3)
    c1.metric("Archetype", entry["archetype_label"])
    c2.metric("Tier", entry["hidden_tier"])
    c3.metric("Availability", f"{entry['availability_hours']} h/month")

    st.markdown("**Scores**")
    s1, s2, s3 = st.columns(3)
    s1.metric("Builder", entry["builder_score"])
    s2.metric("Translator", entry["translator_score"])
    s3.metric("Architect", entry["architect_score"])

    st.markdown("**Quiz Answers**")
    st.write(
        f"Identity: {entry['identity_choice']} · "
        + " · ".join(f"Scenario {i}: {entry[f'scenario{i}']}" for i in range(1, 6))
    )

    st.markdown("**What they shipped**")
    st.text(entry.get("shipped_text") or "N/A")
    if entry.get("created_link"):
        st.markdown(f"**Link:** {entry['created_link']}")
    if entry.get("project_text"):
        st.markdown("**Project**")
        st.text(entry["project_text"])

    st.markdown("**Capacity**")
    st.write(
        f"Led team: {'Yes' if entry['led_team'] else 'No'} · "
        f"Handles disagreement: {entry['handle_disagreement']} · "
        f"Drained most by: {entry['drains_most']}"
    )
    if entry.get("linkedin_url"):
        st.markdown(f"[LinkedIn]({entry['linkedin_url']})")


# =====================================================================
# Main view
# =====================================================================

def render_dashboard(password: str) -> None:
    st.title("Champ Entries")

    # ── Sidebar filters ────────────────────────────────────────────
    st.sidebar.title("Filters")
    try:
        archetypes = load_archetypes(password)
    except AdminApiError as e:
        if e.status_code == 401:
            st.session_state["admin_password"] = None
            st.rerun()
        st.error(f"Could not load archetypes: {e}")
        st.stop()

    archetype_choice = st.sidebar.selectbox("Archetype", ["All archetypes", *archetypes])
    tier_choice = st.sidebar.selectbox("Tier", ["All tiers", *TIERS])
    archetype: Optional[str] = None if archetype_choice == "All archetypes" else archetype_choice
    tier: Optional[str] = None if tier_choice == "All tiers" else tier_choice

    st.sidebar.divider()
    if st.sidebar.button("Refresh", use_container_width=True):
        st.cache_data.clear()
        st.rerun()
    if st.sidebar.button("Logout", use_container_width=True):
        st.session_state["admin_password"] = None
        st.cache_data.clear()
        st.rerun()

    try:
        items = load_submissions(password, archetype, tier)
        stats = load_stats(password)
    except AdminApiError as e:
        st.error(f"Could not load submissions: {e}")
        st.stop()

    # ── Headline metrics ───────────────────────────────────────────
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Entries", stats["total"])
    c2.metric("Tier 1", stats["by_tier"].get("Tier1", 0))
    c3.metric("Tier 2", stats["by_tier"].get("Tier2", 0))
    c4.metric("Open Network", stats["by_tier"].get("OpenNetwork", 0))

    st.divider()

    # ── Table + export ─────────────────────────────────────────────
    df = build_submissions_df(items)
    left, right = st.columns([4, 1])
    left.caption(f"Showing {len(df)} entries")
    if items:
        filename = f"champ_entries_{datetime.now(timezone.utc).date().isoformat()}.csv"
        right.download_button(
            "Export CSV",
            data=load_export(password, archetype, tier),
            file_name=filename,
            mime="text/csv",
            use_container_width=True,
        )

    st.dataframe(df.drop(columns=["id"]), use_container_width=True, hide_index=True)

    if items:
        labels = {
            item["id"]: f"{item['first_name']} {item['last_name']} · {item['email']}"
            for item in items
        }
        selected = st.selectbox(
            "View entry",
            options=[None, *labels.keys()],
            format_func=lambda i: "Select an entry…" if i is None else labels[i],
        )
        if selected:
            with st.container(border=True):
                render_detail(next(i for i in items if i["id"] == selected))

    st.divider()

    # ── Charts ─────────────────────────────────────────────────────
    g1, g2 = st.columns(2)
    g1.plotly_chart(tier_bar_chart(stats["by_tier"]), use_container_width=True, key="tier_bar")
    if stats["by_archetype"]:
        g2.plotly_chart(archetype_bar_chart(stats["by_archetype"]), use_container_width=True, key="arch_bar")
    if items:
        st.plotly_chart(score_distribution_chart(build_scores_df(items)), use_container_width=True, key="scores")


password = st.session_state["admin_password"]
if password:
    render_dashboard(password)
else:
    render_login()
