import math

import numpy as np
import pandas as pd

from .schemas import ForecastDay, WeatherSnapshot

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def round_half_up(x: float) -> int:
    # ties go up, also for negatives: -2.5 -> -2
    return int(math.floor(x + 0.5))


def estimate_uv(latitude: float, cloud_cover: float) -> int:
    """
    Rough UV index from latitude band and cloud cover (%).
    Placeholder for providers whose free tier omits UV; not a validated model.
    """
    abs_lat = abs(latitude)
    base = 10
    if abs_lat > 40:
        base = 6
    elif abs_lat > 30:
        base = 8
    elif abs_lat < 20:
        base = 11
    reduction = float(np.clip(cloud_cover, 0, 100)) / 100 * 0.5
    return round_half_up(base * (1 - reduction))


def snapshot_from_current(payload: dict, latitude: float) -> WeatherSnapshot:
    """
    OpenWeather /weather response (units=metric) -> WeatherSnapshot.
    Wind is converted from m/s to km/h, visibility from m to km.
    """
    try:
        main = payload["main"]
        weather = payload["weather"][0]
        return WeatherSnapshot(
            temperature=round_half_up(main["temp"]),
            feels_like=round_half_up(main["feels_like"]),
            humidity=main["humidity"],
            precipitation=(payload.get("rain") or {}).get("1h", 0.0),
            wind_speed=round_half_up(payload["wind"]["speed"] * 3.6),
            uv=estimate_uv(latitude, payload.get("clouds", {}).get("all", 0)),
            pressure=main["pressure"],
            visibility=(payload.get("visibility") or 10000) / 1000,
            condition=weather.get("description", ""),
            icon=weather.get("icon", ""),
        )
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"malformed current-weather payload: {e!r}") from e


def _items_frame(items: list[dict]) -> pd.DataFrame:
    try:
        rows = [{
            "dt": pd.to_datetime(i["dt"], unit="s", utc=True),
            "temp": i["main"]["temp"],
            "humidity": i["main"]["humidity"],
            "wind": i["wind"]["speed"],
            "pop": i.get("pop", 0.0) or 0.0,
            "rain": (i.get("rain") or {}).get("3h", 0.0),
            "clouds": i.get("clouds", {}).get("all", 0),
            "icon": i["weather"][0].get("icon", ""),
            "description": i["weather"][0].get("description", ""),
        } for i in items]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"malformed forecast item: {e!r}") from e
    df = pd.DataFrame(rows)
    df["day"] = df["dt"].dt.date
    df["hour"] = df["dt"].dt.hour
    return df


def forecast_from_items(items: list[dict], latitude: float, days: int = 7) -> list[ForecastDay]:
    """
    Collapse OpenWeather 3-hourly /forecast items into one ForecastDay per
    UTC calendar date, keeping the first `days` dates.
    """
    if not items:
        return []
    df = _items_frame(items)

    out = []
    for idx, (day, grp) in enumerate(df.groupby("day", sort=True)):
        if idx >= days:
            break
        midday = grp[(grp["hour"] >= 12) & (grp["hour"] <= 15)]
        rep = midday.iloc[0] if not midday.empty else grp.iloc[0]
        if idx == 0:
            label = "Today"
        elif idx == 1:
            label = "Tomorrow"
        else:
            label = WEEKDAYS[day.weekday()]
        out.append(ForecastDay(
            date=day,
            label=label,
            temp_max=round_half_up(grp["temp"].max()),
            temp_min=round_half_up(grp["temp"].min()),
            precip_probability=round_half_up(grp["pop"].max() * 100),
            precipitation=round_half_up(grp["rain"].sum() * 10) / 10,
            humidity=round_half_up(grp["humidity"].mean()),
            wind_speed=round_half_up(grp["wind"].mean() * 3.6),
            uv=estimate_uv(latitude, rep["clouds"]),
            condition=rep["description"],
            icon=rep["icon"],
        ))
    return out
