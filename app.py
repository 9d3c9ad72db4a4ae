import datetime as dt

import pandas as pd
import streamlit as st
from pydantic import ValidationError

from agromet.services.irrigation import InvalidArgument
from agromet.services.report import build_report
from agromet.services.schemas import ForecastDay, Severity, WeatherSnapshot

# -------------------------------------------------------------------
# CONFIG
# -------------------------------------------------------------------
st.set_page_config(page_title="Irrigation Advisor", layout="wide")
st.title("🌱 Weather & Irrigation Advisor")

st.markdown("""
Enter **current conditions** and a **7-day forecast** to get the reference
evapotranspiration (Hargreaves ET₀) and irrigation recommendations.
""")

# -------------------------------------------------------------------
# USER INPUT
# -------------------------------------------------------------------
st.sidebar.header("Location & Crop")
lat = st.sidebar.number_input("Latitude (°)", -90.0, 90.0, 24.14, step=0.01)
on_date = st.sidebar.date_input("Date", value=dt.date.today())
kc = st.sidebar.slider("Crop coefficient (Kc)", 0.3, 1.5, 1.0, 0.05)
soil_buffer = st.sidebar.slider("Soil moisture buffer (mm)", 0, 10, 2)

st.sidebar.header("Current conditions")
temperature = st.sidebar.number_input("Temperature (°C)", -40.0, 60.0, 24.0)
humidity = st.sidebar.slider("Humidity (%)", 0, 100, 55)
uv = st.sidebar.slider("UV index", 0, 15, 5)
wind = st.sidebar.number_input("Wind (km/h)", 0.0, 200.0, 10.0)
precip_now = st.sidebar.number_input("Precipitation (mm)", 0.0, 500.0, 0.0)


def _default_forecast(start: dt.date) -> pd.DataFrame:
    return pd.DataFrame({
        "date": [start + dt.timedelta(days=i) for i in range(7)],
        "temp_max": [28.0] * 7,
        "temp_min": [18.0] * 7,
        "precip_probability": [10] * 7,
        "precipitation": [0.0] * 7,
        "humidity": [55] * 7,
        "wind_speed": [10.0] * 7,
        "uv": [6] * 7,
    })


def _label(i: int, d: dt.date) -> str:
    if i == 0:
        return "Today"
    if i == 1:
        return "Tomorrow"
    return d.strftime("%a")


st.subheader("📅 Forecast")
edited = st.data_editor(_default_forecast(on_date), num_rows="dynamic", use_container_width=True)

SEVERITY_BOX = {
    Severity.success: st.success,
    Severity.info: st.info,
    Severity.warning: st.warning,
    Severity.danger: st.error,
}

# -------------------------------------------------------------------
# MAIN ACTION
# -------------------------------------------------------------------
if st.button("💧 Generate irrigation advice"):
    try:
        current = WeatherSnapshot(
            temperature=temperature, feels_like=temperature, humidity=humidity,
            precipitation=precip_now, wind_speed=wind, uv=uv,
        )
        rows = edited.dropna(subset=["date", "temp_max", "temp_min"]).reset_index(drop=True)
        forecast = []
        for i, r in rows.iterrows():
            day = pd.Timestamp(r["date"]).date()
            forecast.append(ForecastDay(
                date=day, label=_label(i, day),
                temp_max=float(r["temp_max"]), temp_min=float(r["temp_min"]),
                precip_probability=int(r["precip_probability"]),
                precipitation=float(r["precipitation"]),
                humidity=float(r["humidity"]), wind_speed=float(r["wind_speed"]),
                uv=int(r["uv"]),
            ))
        report = build_report(current, forecast, lat, on_date, kc=kc, soil_buffer_mm=soil_buffer)
    except (ValidationError, InvalidArgument, ValueError) as e:
        st.error(f"Invalid input: {e}")
        st.stop()

    # ------------------ DISPLAY -------------------
    col1, col2 = st.columns(2)
    with col1:
        st.metric("📊 ET₀ today (mm/day)", "—" if report.et0 is None else f"{report.et0:.1f}")
        st.metric("🌿 Crop ET (mm/day)", "—" if report.etc is None else f"{report.etc:.2f}")
    with col2:
        st.metric("💦 Irrigation need (mm)", "—" if report.irrigation_mm is None else f"{report.irrigation_mm:.2f}")
        st.caption(f"Day of year {report.day_of_year} • effective rain {report.effective_rain or 0:.2f} mm")

    if report.forecast_et0:
        st.bar_chart(pd.DataFrame([d.model_dump() for d in report.forecast_et0]).set_index("label")["et0"])

    st.divider()
    st.subheader("🌱 Irrigation recommendations")
    if not report.advisories:
        st.write("Nothing notable for today.")
    for rec in report.advisories:
        SEVERITY_BOX[rec.severity](f"{rec.icon} **{rec.title}** — {rec.description}")

    st.divider()
    st.caption("ET₀ via Hargreaves-Samani • UV and forecast values are indicative only.")
