# engine.py — hold entry calculator: wind at altitude, drift, headings, outbound timing
#
# Every function here is a pure function of its arguments. compute_hold() is the
# single entry point used by the Streamlit page; the smaller pieces are public so
# each step can be checked on its own.

import logging
import math
from typing import Dict, Any, Optional, Tuple, Union

from holdcalc.config import SETTINGS
from holdcalc.geometry import build_geometry
from holdcalc.models import (
    WindVector, AltitudeBand, DriftResult, TimingResult, HoldResult, round_half_up,
)
from holdcalc.parsing import parse_number, parse_positive, parse_wind

logger = logging.getLogger(__name__)

WindInput = Union[WindVector, str, None]

# ---------------------------------- Angles -------------------------------------------

def normalize360(deg: float) -> float:
    if not math.isfinite(deg):
        return 0.0
    d = deg % 360.0
    return 0.0 if d >= 360.0 else d

def signed_angle(deg: float) -> float:
    """Fold an angle into (-180, 180]."""
    d = normalize360(deg)
    return d - 360.0 if d > 180.0 else d

def angle_between(a: float, b: float) -> float:
    """Unsigned angle between two directions, 0..180."""
    diff = abs(normalize360(a) - normalize360(b))
    return 360.0 - diff if diff > 180.0 else diff

def acute_angle(angle: float) -> float:
    """0..180 folded onto 0..90 (a course and its reciprocal see the same crosswind)."""
    return 180.0 - angle if angle > 90.0 else angle

# ------------------------------- Wind at altitude ------------------------------------

def interpolate_wind(target_alt: float, low: AltitudeBand, high: AltitudeBand) -> WindVector:
    """
    Linear wind between two reported levels, direction along the short way round.
    The ratio is not clamped: a target outside the band extrapolates.
    """
    if high.altitude_ft == low.altitude_ft:
        return low.wind

    ratio = (target_alt - low.altitude_ft) / (high.altitude_ft - low.altitude_ft)

    diff = high.wind.direction_deg - low.wind.direction_deg
    if diff > 180.0: diff -= 360.0
    elif diff <= -180.0: diff += 360.0

    direction = normalize360(low.wind.direction_deg + diff * ratio)
    speed = low.wind.speed_kt + (high.wind.speed_kt - low.wind.speed_kt) * ratio
    return WindVector(direction, speed)

def round_wind(wind: WindVector) -> WindVector:
    """Whole degrees / knots. Everything downstream works from these rounded values."""
    return WindVector(normalize360(round_half_up(wind.direction_deg)), round_half_up(wind.speed_kt))

def magnetic_wind(true_wind: WindVector, variation: float) -> WindVector:
    return WindVector(normalize360(true_wind.direction_deg + variation), true_wind.speed_kt)

# ----------------------------------- Drift -------------------------------------------

def max_drift(wind_speed_kt: float, tas_kt: float) -> int:
    """1-in-60 rule: drift for a full 90° crosswind."""
    if tas_kt <= 0:
        tas_kt = float(SETTINGS["inputs"]["tas_kt"])
    return round_half_up(wind_speed_kt * 60.0 / tas_kt)

def drift_factor(acute_deg: float) -> Tuple[float, str]:
    # >= 53 (near 60) -> 1, >= 38 (near 45) -> 3/4, >= 23 (near 30) -> 1/2, else 1/3
    if acute_deg >= 53: return 1.0, "1"
    if acute_deg >= 38: return 0.75, "3/4"
    if acute_deg >= 23: return 0.5, "1/2"
    if acute_deg > 0:   return 1.0 / 3.0, "1/3"
    return 0.0, "0"

def calculate_drift(course: float, wind_dir: float, max_drift_deg: int) -> DriftResult:
    acute = acute_angle(angle_between(course, wind_dir))
    factor, text = drift_factor(acute)
    return DriftResult(acute, factor, text, round_half_up(max_drift_deg * factor))

def apply_correction(course: float, wind_dir: float, correction: float) -> float:
    """Turn `correction` degrees into the wind: wind from the left subtracts, from the right adds."""
    relative_wind = signed_angle(wind_dir - course)
    heading = course - correction if relative_wind < 0 else course + correction
    return normalize360(heading)

def outbound_correction(drift: DriftResult) -> Tuple[int, str]:
    """Outbound leg flies 3x the single drift beyond 30° of crosswind angle, 2x otherwise."""
    mult = 3 if drift.acute_angle_deg > 30 else 2
    total = drift.single_drift_deg * mult
    return total, f"{mult}x SingleDrift ({drift.single_drift_deg}) = {total}"

# ------------------------------- Outbound timing -------------------------------------

def time_factor(rule_angle: float) -> float:
    # Same clock-code buckets as drift_factor, kept separate: the input here is 90 - acute
    if rule_angle >= 53: return 1.0
    if rule_angle >= 38: return 0.75
    if rule_angle >= 23: return 0.5
    if rule_angle > 0:   return 1.0 / 3.0
    return 0.0

def outbound_timing(inbound_course: float, wind_dir: float, wind_speed_kt: float,
                    base_time_sec: float) -> TimingResult:
    """
    Headwind inbound means tailwind outbound (shorter leg) and vice versa.
    Exactly 90° off the inbound course counts as headwind side.
    """
    angle_diff = angle_between(inbound_course, wind_dir)
    is_tailwind = angle_diff < 90
    factor = time_factor(90.0 - acute_angle(angle_diff))
    correction = wind_speed_kt * factor
    adjusted = base_time_sec - correction if is_tailwind else base_time_sec + correction
    return TimingResult(is_tailwind, factor, adjusted)

# --------------------------------- Entry point ---------------------------------------

def compute_hold(target_altitude: Any, low_altitude: Any, low_wind: WindInput,
                 high_altitude: Any, high_wind: WindInput, magnetic_variation: Any,
                 inbound_course: Any, true_airspeed: Any = None, outbound_base_time: Any = None,
                 settings: Optional[Dict[str, Any]] = None) -> HoldResult:
    """
    Full hold computation from raw form values. Never raises on bad input:
    unparseable numbers read as 0, TAS and base time fall back to their defaults.
    """
    cfg = settings or SETTINGS
    tas = parse_positive(true_airspeed, float(cfg["inputs"]["tas_kt"]))
    base_time = parse_positive(outbound_base_time, float(cfg["inputs"]["outbound_base_time_sec"]))

    low = AltitudeBand(parse_number(low_altitude), parse_wind(low_wind))
    high = AltitudeBand(parse_number(high_altitude), parse_wind(high_wind))
    wind = round_wind(interpolate_wind(parse_number(target_altitude), low, high))
    mag = magnetic_wind(wind, parse_number(magnetic_variation))

    course = normalize360(parse_number(inbound_course))
    md = max_drift(wind.speed_kt, tas)

    inbound = calculate_drift(course, mag.direction_deg, md)
    inbound_hdg = apply_correction(course, mag.direction_deg, inbound.single_drift_deg)

    out_course = normalize360(course + 180.0)
    outbound = calculate_drift(out_course, mag.direction_deg, md)
    correction, correction_text = outbound_correction(outbound)
    outbound_hdg = apply_correction(out_course, mag.direction_deg, correction)

    timing = outbound_timing(course, mag.direction_deg, wind.speed_kt, base_time)
    out_time = round_half_up(timing.adjusted_time_sec)

    geometry = build_geometry(course, round_half_up(inbound_hdg) % 360, round_half_up(outbound_hdg) % 360,
                              out_time, cfg)

    logger.debug(f"Hold {course:g}°: wind {wind.display()} mag {mag.display()}, "
                 f"max drift {md}, out time {out_time}s")

    return HoldResult(
        wind=wind, magnetic_wind=mag, max_drift=md, inbound_course=course,
        inbound_drift=inbound, inbound_heading=inbound_hdg,
        outbound_course=out_course, outbound_drift=outbound,
        outbound_correction=correction, outbound_correction_text=correction_text,
        outbound_heading=outbound_hdg, timing=timing, outbound_time_sec=out_time,
        geometry=geometry,
    )
