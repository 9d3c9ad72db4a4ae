import logging
import math

logger = logging.getLogger(__name__)


class InvalidArgument(ValueError):
    """Input outside the domain of the ET / water balance formulas."""


def extraterrestrial_radiation(latitude: float, doy: int) -> float:
    """
    FAO-56 extraterrestrial radiation Ra (MJ m^-2 day^-1).
    Near the poles the sunset hour angle argument is clamped to [-1, 1]:
    permanent night gives Ra = 0, permanent day gives omega_s = pi.
    """
    phi = math.radians(latitude)
    dr = 1 + 0.033 * math.cos(2*math.pi*doy/365)
    delta = 0.409 * math.sin(2*math.pi*doy/365 - 1.39)
    x = -math.tan(phi)*math.tan(delta)
    if x > 1.0 or x < -1.0:
        logger.debug("polar day/night at lat=%s doy=%s, clamping acos arg %.3f", latitude, doy, x)
        x = max(-1.0, min(x, 1.0))
    omega_s = math.acos(x)
    Gsc = 0.0820  # MJ m^-2 min^-1
    return (24*60/math.pi)*Gsc*dr*(omega_s*math.sin(phi)*math.sin(delta) +
                                   math.cos(phi)*math.cos(delta)*math.sin(omega_s))


def round_half_away(value: float, ndigits: int = 1) -> float:
    # x10, round, /10 -- ties go away from zero, unlike round()
    scale = 10 ** ndigits
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale


def reference_et(temp_max: float, temp_min: float, latitude: float, doy: int) -> float:
    """Hargreaves-Samani (1985) ET0 in mm/day, rounded to one decimal."""
    if temp_max < temp_min:
        raise InvalidArgument(f"temp_max ({temp_max}) is below temp_min ({temp_min})")
    t_mean = (temp_max + temp_min) / 2
    t_range = temp_max - temp_min
    Ra = extraterrestrial_radiation(latitude, doy)
    et0 = 0.0023 * (t_mean + 17.8) * math.sqrt(t_range) * Ra
    return round_half_away(et0, 1)


def crop_water_need(et0: float, kc: float, precip: float,
                    eff_rain_factor: float = 0.8, soil_buffer_mm: float = 2.0):
    """
    Net irrigation depth for a crop with coefficient kc.
    Returns (net_mm, etc, peff).
    """
    if not 0 < kc <= 2:
        raise InvalidArgument(f"kc must be in (0, 2], got {kc}")
    etc = kc * et0
    peff = eff_rain_factor * max(0.0, precip)
    net = max(0.0, etc - peff - soil_buffer_mm)
    return net, etc, peff
