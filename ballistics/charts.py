from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Sequence

import altair as alt
import pandas as pd

from ballistics.calculator import TrajectoryPoint

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def trajectory_frame(points: Sequence[TrajectoryPoint]) -> pd.DataFrame:
    columns = ["distance", "drop", "velocity", "energy", "wind_drift"]
    if not points:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([asdict(p) for p in points], columns=columns)


def drop_chart(df: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(df)
        .mark_line(point={"filled": True}, color="#f97316")
        .encode(
            x=alt.X("distance:Q", title="Distance (yards)", axis=alt.Axis(grid=False)),
            y=alt.Y("drop:Q", title="Drop (inches)", axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            tooltip=[
                alt.Tooltip("distance:Q", title="Distance (yd)"),
                alt.Tooltip("drop:Q", title="Drop (in)", format=".2f"),
            ],
        )
    )


def velocity_energy_chart(df: pd.DataFrame) -> alt.Chart:
    long_df = df.melt(id_vars="distance", value_vars=["velocity", "energy"], var_name="metric", value_name="value")
    hover = alt.selection_point(fields=["metric"], on="mouseover", empty="all")
    return (
        alt.Chart(long_df)
        .mark_line(point={"filled": True})
        .encode(
            x=alt.X("distance:Q", title="Distance (yards)", axis=alt.Axis(grid=False)),
            y=alt.Y("value:Q", title="Velocity (fps) / Energy (ft-lbs)", axis=alt.Axis(gridDash=[4, 4], domain=False, ticks=False)),
            color=alt.Color(
                "metric:N",
                title="Metric",
                scale=alt.Scale(domain=["velocity", "energy"], range=["#3b82f6", "#22c55e"]),
            ),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.2)),
            tooltip=[
                alt.Tooltip("distance:Q", title="Distance (yd)"),
                alt.Tooltip("metric:N", title="Metric"),
                alt.Tooltip("value:Q", title="Value", format=",.0f"),
            ],
        )
        .add_params(hover)
    )


def trajectory_charts(points: Sequence[TrajectoryPoint]) -> Dict[str, Any]:
    df = trajectory_frame(points)
    if df.empty:
        return {}
    return {
        "drop": to_vega_spec(drop_chart(df)),
        "velocity_energy": to_vega_spec(velocity_energy_chart(df)),
    }
