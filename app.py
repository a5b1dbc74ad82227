import streamlit as st
from contextlib import contextmanager
from dataclasses import asdict
from typing import Optional

from ballistics import client
from ballistics.charts import drop_chart, trajectory_frame, velocity_energy_chart
from ballistics.config import API_BASE_URL
from ballistics.params import SHOT_DEFAULTS, SHOT_LIMITS, WIND_DIRECTIONS, ShotValidationError
from ballistics.presets import AMMO_PRESETS


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        .chip-offline {background: #fef3c7;border-color: #f59e0b;color: #92400e;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def limit_slider(label: str, field: str, value: Optional[float] = None, step: float = 1.0) -> float:
    low, high, unit = SHOT_LIMITS[field]
    default = SHOT_DEFAULTS.get(field, low) if value is None else value
    title = f"{label} ({unit})" if unit else label
    return st.slider(title, min_value=float(low), max_value=float(high), value=float(default), step=step)


def source_chip(source: str) -> str:
    if source == client.SOURCE_OFFLINE:
        return "<span class='chip chip-offline'>Offline approximation (API unavailable)</span>"
    return "<span class='chip'>Calculated by ballistics API</span>"


# ---------- UI setup ----------
st.set_page_config(page_title="Ballistics Calculator", layout="wide")
inject_base_styles()
st.title("Ballistics Calculator")
st.caption("Bullet drop, wind drift and trajectory for accurate shot placement.")

# ----- Sidebar: ammunition + conditions -----
with st.sidebar:
    st.markdown("### Ammunition")
    preset_names = [p.name for p in AMMO_PRESETS]
    preset_name = st.selectbox("Preset", preset_names, index=0)
    preset = AMMO_PRESETS[preset_names.index(preset_name)]
    st.caption(f"{preset.caliber} • {preset.bullet_weight:g}gr • {preset.muzzle_velocity:g} fps • BC {preset.ballistic_coefficient}")

    st.markdown("---")
    st.markdown("### Shot")
    distance = limit_slider("Distance", "distance", value=100.0, step=10.0)
    wind_speed = limit_slider("Wind speed", "wind_speed", step=1.0)
    wind_direction = st.selectbox("Wind direction (deg)", ["None"] + list(WIND_DIRECTIONS), index=0)

    st.markdown("---")
    with st.expander("Environment", expanded=False):
        temperature = limit_slider("Temperature", "temperature", step=1.0)
        humidity = limit_slider("Humidity", "humidity", step=1.0)
        pressure = limit_slider("Barometric pressure", "barometric_pressure", step=0.01)

raw_shot = {
    **preset.shot_fields(),
    "distance": distance,
    "wind_speed": wind_speed,
    "wind_direction": None if wind_direction == "None" else wind_direction,
    "temperature": temperature,
    "humidity": humidity,
    "barometric_pressure": pressure,
}

try:
    solution = client.solve(raw_shot, base_url=API_BASE_URL)
except ShotValidationError as exc:
    for issue in exc.issues:
        st.error(f"{issue.field}: {issue.message}")
    st.stop()

result = solution.result
st.markdown(source_chip(solution.source), unsafe_allow_html=True)

with card("Results"):
    cols = st.columns(4)
    cols[0].metric("Drop", f"{result.drop_inches:.2f} in")
    cols[1].metric("Wind drift", f"{result.wind_drift_inches:.2f} in")
    cols[2].metric("Time of flight", f"{result.time_of_flight:.3f} s")
    cols[3].metric("Velocity", f"{result.velocity_at_distance:,.0f} fps", f"{result.velocity_retention:.0f}% retained")
    cols = st.columns(4)
    cols[0].metric("Muzzle energy", f"{result.energy_at_muzzle:,.0f} ft-lbs")
    cols[1].metric("Energy at target", f"{result.energy_at_distance:,.0f} ft-lbs")

points_df = trajectory_frame(solution.points)
if points_df.empty:
    st.info("No trajectory points to plot.")
else:
    chart_cols = st.columns(2)
    with chart_cols[0]:
        with card("Bullet Drop"):
            st.altair_chart(drop_chart(points_df).properties(height=280), use_container_width=True)
    with chart_cols[1]:
        with card("Velocity & Energy"):
            st.altair_chart(velocity_energy_chart(points_df).properties(height=280), use_container_width=True)

    with card("Trajectory Table"):
        table = points_df.rename(
            columns={
                "distance": "Distance (yd)",
                "drop": "Drop (in)",
                "velocity": "Velocity (fps)",
                "energy": "Energy (ft-lbs)",
                "wind_drift": "Wind drift (in)",
            }
        )
        if solution.points and solution.points[-1].wind_drift is None:
            table = table.drop(columns=["Wind drift (in)"])
        st.dataframe(table, use_container_width=True, hide_index=True)
        st.download_button(
            "Export CSV",
            data=table.to_csv(index=False).encode("utf-8"),
            file_name="trajectory.csv",
            mime="text/csv",
        )

with st.expander("Shot parameters", expanded=False):
    st.json({**asdict(preset), **raw_shot})
