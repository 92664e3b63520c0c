"""
components/charts.py - Plotly chart builders for the admin dashboard.
"""

from typing import Dict

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from data_loader import TIER_COLORS, TIERS

ARCHETYPE_COLORS = {
    "Builder": "#f97316",
    "Translator": "#3b82f6",
    "Architect": "#a855f7",
}


def tier_bar_chart(by_tier: Dict[str, int]) -> go.Figure:
    """Counts per hidden tier in fixed Tier1 → OpenNetwork order."""
    counts = [by_tier.get(t, 0) for t in TIERS]
    fig = go.Figure(go.Bar(
        x=TIERS, y=counts,
        marker_color=[TIER_COLORS[t] for t in TIERS],
        text=counts, textposition="outside",
    ))
    fig.update_layout(
        title="Entries by Tier",
        yaxis=dict(title="Entries", rangemode="tozero"),
        height=320, margin=dict(l=40, r=20, t=50, b=40),
        showlegend=False, plot_bgcolor="white",
    )
    return fig


def archetype_bar_chart(by_archetype: Dict[str, int]) -> go.Figure:
    """Horizontal bars: one per archetype label, hybrids included."""
    df = pd.DataFrame(
        sorted(by_archetype.items(), key=lambda kv: kv[1], reverse=True),
        columns=["Archetype", "Entries"],
    )
    fig = px.bar(df, x="Entries", y="Archetype", orientation="h", text="Entries")
    fig.update_traces(marker_color="#0ea5e9", textposition="outside")
    fig.update_layout(
        title="Entries by Archetype",
        yaxis=dict(autorange="reversed"),
        height=max(260, 40 * len(df) + 100), margin=dict(l=160, r=40, t=50, b=40),
        plot_bgcolor="white",
    )
    return fig


def score_distribution_chart(scores_df: pd.DataFrame) -> go.Figure:
    """Box plot of the three archetype scores (0 to 5.5)."""
    fig = px.box(
        scores_df, x="Archetype", y="Score", color="Archetype",
        color_discrete_map=ARCHETYPE_COLORS, points="all",
    )
    fig.update_layout(
        title="Score Distribution",
        yaxis=dict(range=[0, 5.75]),
        height=360, margin=dict(l=40, r=20, t=50, b=40),
        showlegend=False, plot_bgcolor="white",
    )
    return fig
