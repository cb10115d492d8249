from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import numpy as np

from holdcalc.config import SETTINGS
from holdcalc.models import HoldGeometry

if TYPE_CHECKING:
    from numpy import typing as npt


def build_geometry(
    inbound_course: float,
    inbound_heading: float,
    outbound_heading: float,
    outbound_time_sec: int,
    settings: Optional[Dict[str, Any]] = None,
) -> HoldGeometry:
    """
    Describe the racetrack for a hold on `inbound_course`.

    Leg length and turn radius are fixed schematic proportions taken from the
    geometry settings; they are not derived from airspeed or rate of turn.

    Args:
        inbound_course: Inbound track in degrees.
        inbound_heading: Rounded heading flown on the inbound leg.
        outbound_heading: Rounded heading flown on the outbound leg.
        outbound_time_sec: Rounded outbound time, shown at Gate 1.
        settings: Settings dict, defaults to the packaged defaults.

    Returns:
        The HoldGeometry for an external renderer.
    """
    cfg = settings or SETTINGS
    geo = cfg["geometry"]
    scale = float(geo["scale"])

    gate2 = (inbound_course - float(cfg["gates"]["gate2_offset_deg"])) % 360.0

    return HoldGeometry(
        inbound_track_deg=inbound_course,
        outbound_track_deg=(inbound_course + 180.0) % 360.0,
        inbound_heading_deg=inbound_heading,
        outbound_heading_deg=outbound_heading,
        outbound_time_sec=outbound_time_sec,
        gate1_time_sec=outbound_time_sec,
        gate2_bearing_deg=gate2,
        leg_length=float(geo["leg_length"]) * scale,
        turn_radius=float(geo["turn_radius"]) * scale,
    )


def to_world(points: npt.ArrayLike, course_deg: float) -> np.ndarray:
    """
    Rotate local hold points (along-track, right-of-track) onto the compass
    plane, returned as (east, north) pairs.

    Args:
        points: A single (x, y) pair or an (N, 2) array.
        course_deg: Inbound track the local x axis is aligned with.

    Returns:
        Array of the same shape holding (east, north) coordinates.
    """
    pts = np.asarray(points, dtype=float)
    c = np.deg2rad(course_deg)
    along = np.array([np.sin(c), np.cos(c)])
    right = np.array([np.cos(c), -np.sin(c)])
    return pts[..., :1] * along + pts[..., 1:2] * right


def _arc(center: Tuple[float, float], radius: float, start: float, end: float, n: int) -> np.ndarray:
    theta = np.linspace(start, end, n)
    return np.c_[center[0] + radius * np.cos(theta), center[1] + radius * np.sin(theta)]


def racetrack_path(geometry: HoldGeometry, n_arc: int = 60) -> Dict[str, np.ndarray]:
    """
    Polylines for each segment of the racetrack in compass-plane coordinates.

    Returns:
        Dict with "inbound", "turn1", "outbound" and "turn2" (N, 2) arrays,
        each running in the direction flown.
    """
    r = geometry.turn_radius
    # local angles measured from +x towards +y (to the right of track)
    local = {
        "inbound": np.array([geometry.inbound_start, geometry.fix]),
        "turn1": _arc(geometry.turn1_center, r, -np.pi / 2, np.pi / 2, n_arc),
        "outbound": np.array([geometry.outbound_start, geometry.outbound_end]),
        "turn2": _arc(geometry.turn2_center, r, np.pi / 2, 3 * np.pi / 2, n_arc),
    }
    return {k: to_world(v, geometry.inbound_track_deg) for k, v in local.items()}
