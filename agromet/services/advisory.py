import logging
from typing import Callable, Sequence

from .schemas import AdvisoryRecord, ForecastDay, Severity, WeatherSnapshot

logger = logging.getLogger(__name__)

Predicate = Callable[[WeatherSnapshot, Sequence[ForecastDay]], bool]
Factory = Callable[[WeatherSnapshot, Sequence[ForecastDay]], AdvisoryRecord]


# Rain
def _rain_tomorrow(current, forecast) -> bool:
    return len(forecast) >= 2 and forecast[1].precip_probability > 70


def _suspend_tomorrow(current, forecast) -> AdvisoryRecord:
    tomorrow = forecast[1]
    return AdvisoryRecord(
        severity=Severity.warning,
        title="Suspend irrigation tomorrow",
        description=(f"{tomorrow.precipitation:.1f} mm of rain forecast "
                     f"({tomorrow.precip_probability}% probability)."),
        icon="🌧️",
    )


# Heat
def _extreme_heat(current, forecast) -> bool:
    return current.temperature > 30


def _heat_record(current, forecast) -> AdvisoryRecord:
    return AdvisoryRecord(
        severity=Severity.danger,
        title="Extreme heat detected",
        description="Increase irrigation frequency. Water preferably at night.",
        icon="🔥",
    )


# Humidity
def _low_humidity(current, forecast) -> bool:
    return current.humidity < 40


def _humidity_record(current, forecast) -> AdvisoryRecord:
    return AdvisoryRecord(
        severity=Severity.warning,
        title="Low humidity",
        description="Plants may need supplemental irrigation.",
        icon="🏜️",
    )


# UV
def _high_uv(current, forecast) -> bool:
    return current.uv >= 8


def _uv_record(current, forecast) -> AdvisoryRecord:
    return AdvisoryRecord(
        severity=Severity.warning,
        title="Very high UV index",
        description="Irrigate early in the morning or at dusk.",
        icon="☀️",
    )


# Optimal window
def _optimal(current, forecast) -> bool:
    return 18 <= current.temperature <= 28 and 50 <= current.humidity <= 70


def _optimal_record(current, forecast) -> AdvisoryRecord:
    return AdvisoryRecord(
        severity=Severity.success,
        title="Optimal conditions",
        description="Good conditions for normal irrigation.",
        icon="✅",
    )


# Evaluation order is emission order.
RULES: list[tuple[str, Predicate, Factory]] = [
    ("rain_tomorrow", _rain_tomorrow, _suspend_tomorrow),
    ("extreme_heat", _extreme_heat, _heat_record),
    ("low_humidity", _low_humidity, _humidity_record),
    ("high_uv", _high_uv, _uv_record),
    ("optimal", _optimal, _optimal_record),
]


def generate_advisories(current: WeatherSnapshot,
                        forecast: Sequence[ForecastDay]) -> list[AdvisoryRecord]:
    """
    Evaluate every rule in RULES against the current snapshot and forecast.
    Rules are additive: all matching rules contribute one record each,
    so an empty list simply means nothing notable.
    """
    recs = []
    fired = []
    for name, predicate, factory in RULES:
        if predicate(current, forecast):
            recs.append(factory(current, forecast))
            fired.append(name)
    logger.debug("advisory rules fired: %s", fired or "none")
    return recs
