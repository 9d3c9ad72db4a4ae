from __future__ import annotations

from datetime import date as _date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Severity(str, Enum):
    success = "success"
    info = "info"
    warning = "warning"
    danger = "danger"


class WeatherSnapshot(BaseModel):
    """Current conditions, already normalized to metric units."""
    model_config = ConfigDict(frozen=True)

    temperature: float
    feels_like: float
    humidity: int = Field(..., ge=0, le=100)
    precipitation: float = Field(0.0, ge=0)   # mm
    wind_speed: float = Field(0.0, ge=0)      # km/h
    uv: int = Field(0, ge=0)
    pressure: float = 1013.0                  # hPa
    visibility: float = 10.0                  # km
    condition: str = ""
    icon: str = ""


class ForecastDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: _date
    label: str
    temp_max: float
    temp_min: float
    precip_probability: int = Field(0, ge=0, le=100)
    precipitation: float = Field(0.0, ge=0)
    humidity: float = Field(..., ge=0, le=100)
    wind_speed: float = Field(0.0, ge=0)
    uv: int = Field(0, ge=0)
    condition: str = ""
    icon: str = ""

    @model_validator(mode="after")
    def _check_temp_range(self):
        if self.temp_max < self.temp_min:
            raise ValueError(
                f"temp_max ({self.temp_max}) must be >= temp_min ({self.temp_min}) on {self.date}"
            )
        return self


class AdvisoryRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    severity: Severity
    title: str
    description: str
    icon: str


class DailyET0(BaseModel):
    date: _date
    label: str
    et0: float


class IrrigationReport(BaseModel):
    day_of_year: int
    et0: float | None
    forecast_et0: list[DailyET0]
    advisories: list[AdvisoryRecord]
    etc: float | None = None
    effective_rain: float | None = None
    irrigation_mm: float | None = None


def check_forecast_order(forecast: list[ForecastDay]) -> list[ForecastDay]:
    """Raise ValueError unless dates are strictly ascending (no duplicates)."""
    for prev, cur in zip(forecast, forecast[1:]):
        if cur.date <= prev.date:
            raise ValueError(
                f"forecast must be in ascending date order without duplicates "
                f"({prev.date} followed by {cur.date})"
            )
    return forecast
