"""
Shapes the filtered sample for the bubble chart and the company table.
"""

from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

import pandas as pd
import plotly.graph_objects as go

from filters import distinct_values
from records import HEADERS, Record, is_missing

MIN_BUBBLE_SIZE = 8
MIN_MARKET_CAP = 0.1
BUBBLE_SCALE = 3
ESG_AXIS_RANGE = [0, 100]

violet, fuchsia = ["#694ED6", "#C137A2"]
SECTOR_PALETTE = [
    violet, fuchsia, "#1F9EDB", "#0D7A60", "#F2A541",
    "#A52B3D", "#5E6482", "#3FB8AF", "#8E6C8A", "#D95D39",
]


def finastra_theme(dark=False):
    font_color = "#e6edf3" if dark else "#1f2333"
    grid_color = "rgba(255,255,255,0.06)" if dark else "rgba(31,35,51,0.08)"
    zero_color = "rgba(255,255,255,0.08)" if dark else "rgba(31,35,51,0.12)"
    return {
        "paper_bgcolor": "rgba(0,0,0,0)",
        "plot_bgcolor": "rgba(0,0,0,0)",
        "margin": {"l": 50, "r": 10, "t": 10, "b": 50},
        "font": {"color": font_color, "family": "Inter, Segoe UI, sans-serif"},
        "xaxis": {"gridcolor": grid_color, "zerolinecolor": zero_color},
        "yaxis": {"gridcolor": grid_color, "zerolinecolor": zero_color},
        "showlegend": False,
    }


def bubble_size(market_cap: float) -> float:
    """Square-root scale with a floor, so small or unknown caps stay visible."""
    if is_missing(market_cap):
        return float(MIN_BUBBLE_SIZE)
    return max(MIN_BUBBLE_SIZE, math.sqrt(max(market_cap, MIN_MARKET_CAP)) * BUBBLE_SCALE)


def sector_color_keys(records: Sequence[Record]) -> List[int]:
    sectors = distinct_values(records, "sector")
    color_map: Dict[str, int] = {s: i for i, s in enumerate(sectors)}
    return [color_map[r.sector] for r in records]


def chart_points(records: Sequence[Record]):
    return {
        "x": [r.esg_score for r in records],
        "y": [r.controversy_count for r in records],
        "text": [f"{r.name} ({r.ticker})" for r in records],
        "size": [bubble_size(r.market_cap_usd_billions) for r in records],
        "color": sector_color_keys(records),
        "sector": [r.sector for r in records],
    }


def build_scatter_figure(records: Sequence[Record], dark=False) -> go.Figure:
    points = chart_points(records)
    colors = [SECTOR_PALETTE[k % len(SECTOR_PALETTE)] for k in points["color"]]

    trace = go.Scatter(
        x=points["x"],
        y=points["y"],
        text=points["text"],
        customdata=points["sector"],
        mode="markers",
        hovertemplate=(
            "<b>%{text}</b><br>"
            "Sector: %{customdata}<br>"
            "ESG: %{x}<br>"
            "Controversies: %{y}<extra></extra>"
        ),
        marker={"size": points["size"], "color": colors, "opacity": 0.9},
    )

    fig = go.Figure(data=[trace])
    fig.update_layout(**finastra_theme(dark))
    fig.update_xaxes(title_text="ESG Score (0–100)", range=ESG_AXIS_RANGE)
    fig.update_yaxes(title_text="Controversies (count)", autorange=True)
    return fig


def table_rows(records: Sequence[Record]) -> Tuple[List[str], List[list]]:
    return list(HEADERS), [r.as_row() for r in records]


def table_frame(records: Sequence[Record]) -> pd.DataFrame:
    headers, rows = table_rows(records)
    return pd.DataFrame(rows, columns=headers)
