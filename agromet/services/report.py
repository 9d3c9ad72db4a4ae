from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date as _date
from typing import Protocol

import pandas as pd

from .advisory import generate_advisories
from .irrigation import crop_water_need, reference_et
from .schemas import (DailyET0, ForecastDay, IrrigationReport, WeatherSnapshot,
                      check_forecast_order)

logger = logging.getLogger(__name__)


@dataclass
class WeatherReport:
    place: str
    latitude: float
    longitude: float
    current: WeatherSnapshot
    forecast: list[ForecastDay] = field(default_factory=list)


class WeatherSource(Protocol):
    """Anything that can resolve a place name to current conditions + forecast."""

    def fetch(self, place: str) -> WeatherReport: ...


def day_of_year(d: _date) -> int:
    return d.timetuple().tm_yday


def forecast_et0(forecast: list[ForecastDay], latitude: float) -> pd.DataFrame:
    """
    Per-day Hargreaves ET0 over the forecast.
    Columns: date, label, temp_max, temp_min, doy, et0
    """
    cols = ["date", "label", "temp_max", "temp_min", "doy", "et0"]
    if not forecast:
        return pd.DataFrame(columns=cols)
    df = pd.DataFrame([{
        "date": d.date, "label": d.label,
        "temp_max": d.temp_max, "temp_min": d.temp_min,
    } for d in forecast])
    df["doy"] = df["date"].map(day_of_year)
    df["et0"] = df.apply(
        lambda r: reference_et(r["temp_max"], r["temp_min"], latitude, int(r["doy"])), axis=1
    )
    return df[cols]


def build_report(current: WeatherSnapshot, forecast: list[ForecastDay], latitude: float,
                 on_date: _date, kc: float = 1.0, eff_rain_factor: float = 0.8,
                 soil_buffer_mm: float = 2.0) -> IrrigationReport:
    forecast = check_forecast_order(list(forecast))
    doy = day_of_year(on_date)
    recs = generate_advisories(current, forecast)

    if not forecast:
        logger.info("no forecast available; ET0 and water balance skipped")
        return IrrigationReport(day_of_year=doy, et0=None, forecast_et0=[], advisories=recs)

    today = forecast[0]
    if today.date != on_date:
        logger.warning("forecast starts on %s, not %s; using the first forecast day for ET0",
                       today.date, on_date)
    per_day = forecast_et0(forecast, latitude)
    # today's ET0 is the first forecast row, so et0 == forecast_et0[0].et0
    et0 = float(per_day["et0"].iloc[0])
    net, etc, peff = crop_water_need(et0, kc, today.precipitation,
                                     eff_rain_factor=eff_rain_factor,
                                     soil_buffer_mm=soil_buffer_mm)
    return IrrigationReport(
        day_of_year=doy,
        et0=et0,
        forecast_et0=[DailyET0(date=r.date, label=r.label, et0=float(r.et0))
                      for r in per_day.itertuples(index=False)],
        advisories=recs,
        etc=round(etc, 2),
        effective_rain=round(peff, 2),
        irrigation_mm=round(net, 2),
    )


def advise_for_place(source: WeatherSource, place: str, on_date: _date,
                     **kwargs) -> IrrigationReport:
    """Fetch weather for `place` through the given source and build the report."""
    wx = source.fetch(place)
    logger.info("weather for %s (lat=%.2f, lon=%.2f): %d forecast days",
                wx.place, wx.latitude, wx.longitude, len(wx.forecast))
    return build_report(wx.current, wx.forecast, wx.latitude, on_date, **kwargs)
