from datetime import date, timedelta

import pytest

from agromet.services.schemas import ForecastDay, WeatherSnapshot


def make_snapshot(**overrides) -> WeatherSnapshot:
    fields = dict(
        temperature=20.0, feels_like=20.0, humidity=55, precipitation=0.0,
        wind_speed=10.0, uv=3, pressure=1012.0, visibility=10.0,
        condition="clear sky", icon="01d",
    )
    fields.update(overrides)
    return WeatherSnapshot(**fields)


def make_forecast(start=date(2025, 5, 30), days=7, overrides=None) -> list[ForecastDay]:
    out = []
    for i in range(days):
        fields = dict(
            date=start + timedelta(days=i), label=f"day{i}",
            temp_max=28.0, temp_min=18.0, precip_probability=0,
            precipitation=0.0, humidity=55, wind_speed=10.0, uv=6,
        )
        fields.update((overrides or {}).get(i, {}))
        out.append(ForecastDay(**fields))
    return out


@pytest.fixture
def snapshot():
    return make_snapshot()


@pytest.fixture
def forecast():
    return make_forecast()
