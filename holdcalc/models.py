import math
from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class WindVector:
    direction_deg: float
    speed_kt: float

    def display(self) -> str:
        return f"{pad3(self.direction_deg)}/{self.speed_kt:g}"


@dataclass(frozen=True)
class AltitudeBand:
    altitude_ft: float
    wind: WindVector


@dataclass(frozen=True)
class DriftResult:
    acute_angle_deg: float
    factor: float
    factor_text: str
    single_drift_deg: int

    def display(self) -> str:
        return f"{self.acute_angle_deg:g}°({self.factor_text}) -> {self.single_drift_deg}"


@dataclass(frozen=True)
class TimingResult:
    is_tailwind: bool
    time_factor: float
    adjusted_time_sec: float


@dataclass(frozen=True)
class HoldGeometry:
    """
    Right-hand racetrack in a local frame: x runs along the inbound track
    towards the fix, y points to the right of the inbound track. The fix is
    the origin; nothing here knows about pixels.
    """
    inbound_track_deg: float
    outbound_track_deg: float
    inbound_heading_deg: float
    outbound_heading_deg: float
    outbound_time_sec: int
    gate1_time_sec: int
    gate2_bearing_deg: float
    leg_length: float
    turn_radius: float

    @property
    def fix(self) -> Tuple[float, float]:
        return (0.0, 0.0)

    @property
    def inbound_start(self) -> Tuple[float, float]:
        return (-self.leg_length, 0.0)

    @property
    def outbound_start(self) -> Tuple[float, float]:
        return (0.0, 2 * self.turn_radius)

    @property
    def outbound_end(self) -> Tuple[float, float]:
        return (-self.leg_length, 2 * self.turn_radius)

    @property
    def turn1_center(self) -> Tuple[float, float]:
        return (0.0, self.turn_radius)

    @property
    def turn2_center(self) -> Tuple[float, float]:
        return (-self.leg_length, self.turn_radius)

    @property
    def gate1(self) -> Tuple[float, float]:
        return self.outbound_end

    @property
    def gate2(self) -> Tuple[float, float]:
        return self.inbound_start


@dataclass(frozen=True)
class HoldResult:
    wind: WindVector
    magnetic_wind: WindVector
    max_drift: int
    inbound_course: float
    inbound_drift: DriftResult
    inbound_heading: float
    outbound_course: float
    outbound_drift: DriftResult
    outbound_correction: int
    outbound_correction_text: str
    outbound_heading: float
    timing: TimingResult
    outbound_time_sec: int
    geometry: HoldGeometry

    @property
    def wind_display(self) -> str:
        return self.wind.display()

    @property
    def mag_wind_display(self) -> str:
        return self.magnetic_wind.display()

    def labels(self) -> Dict[str, str]:
        """Text for every output field, formatted the way the cockpit card shows it."""
        return {
            "wind": self.wind_display,
            "mag_wind": self.mag_wind_display,
            "max_drift": f"{self.max_drift}°",
            "inbound_drift": self.inbound_drift.display(),
            "inbound_heading": f"{pad3(self.inbound_heading)}°",
            "outbound_course": pad3(self.outbound_course),
            "outbound_drift": f"{float(self.outbound_drift.single_drift_deg):.1f}",
            "outbound_correction": self.outbound_correction_text,
            "outbound_heading": f"{pad3(self.outbound_heading)}°",
            "outbound_time": f"{self.outbound_time_sec} sec",
            "gate2": f"{pad3(self.geometry.gate2_bearing_deg)}°",
        }


def round_half_up(x: float) -> int:
    """Nearest integer with halves rounded up (16.5 -> 17, -2.5 -> -2); inf/nan give 0."""
    if not math.isfinite(x):
        return 0
    return math.floor(x + 0.5)


def pad3(deg: float) -> str:
    """Zero-padded three digit direction, e.g. 5 -> '005'."""
    return f"{round_half_up(deg) % 360:03d}"
