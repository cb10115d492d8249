# render.py — matplotlib painter for the hold geometry (compass rose, racetrack, gates, wind)
#
# Plot coordinates are (east, north) with the fix at the centre of the rose.

import math
from typing import Tuple

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as patches

from holdcalc.geometry import racetrack_path, to_world
from holdcalc.models import HoldGeometry, WindVector, pad3

BG = "#0a0f14"; ROSE = "#444444"; ROSE_TEXT = "#666666"; LABEL = "#cccccc"
TRACK = "#98ff98"; GATE1 = "#ff00ff"; GATE2 = "#ffaa00"; WIND = "#4488ff"

CARDINALS = {0: "N", 90: "E", 180: "S", 270: "W"}

def polar(bearing_deg: float, r: float) -> Tuple[float, float]:
    b = math.radians(bearing_deg)
    return r*math.sin(b), r*math.cos(b)

def rose_tick(deg: int) -> Tuple[float, float]:
    """Inner radius and line width of the rose tick at `deg`."""
    if deg % 90 == 0: return 340.0, 3.0
    if deg % 30 == 0: return 350.0, 2.0
    if deg % 10 == 0: return 360.0, 2.0
    if deg % 5 == 0:  return 365.0, 1.0
    return 372.0, 0.5

def rose_label(deg: int) -> str:
    return CARDINALS.get(deg, pad3(deg))

def draw_arrow_head(ax, x: float, y: float, bearing_deg: float, color: str, size: float = 10.0):
    """Filled triangle with its tip at (x, y) pointing along `bearing_deg`."""
    b = math.radians(bearing_deg)
    fwd = np.array([math.sin(b), math.cos(b)]); side = np.array([fwd[1], -fwd[0]])
    tip = np.array([x, y]); base = tip - fwd*size
    tri = np.array([tip, base + side*size/2, base - side*size/2])
    ax.add_patch(patches.Polygon(tri, closed=True, facecolor=color, edgecolor=color, zorder=8))

def draw_compass_rose(ax, r_outer: float = 380.0):
    for deg in range(360):
        r_inner, lw = rose_tick(deg)
        x1, y1 = polar(deg, r_outer); x2, y2 = polar(deg, r_inner)
        ax.plot([x1, x2], [y1, y2], color=ROSE, linewidth=lw, zorder=1)
        if deg % 30 == 0:
            tx, ty = polar(deg, 320.0 if deg % 90 == 0 else 330.0)
            ax.text(tx, ty, rose_label(deg), ha="center", va="center",
                    fontsize=9, color=ROSE_TEXT, zorder=2)

def draw_hold(geometry: HoldGeometry, wind: WindVector):
    """Racetrack over a compass rose, with the magnetic wind arrow. Returns the Figure."""
    fig, ax = plt.subplots(figsize=(6.0, 6.0))
    ax.set_aspect("equal"); ax.axis("off")
    fig.patch.set_facecolor(BG); ax.set_facecolor(BG)
    ax.set_xlim(-400, 400); ax.set_ylim(-400, 400)

    draw_compass_rose(ax)

    # Racetrack
    course = geometry.inbound_track_deg
    for seg in racetrack_path(geometry).values():
        ax.plot(seg[:, 0], seg[:, 1], color=TRACK, linewidth=3, solid_capstyle="round", zorder=5)
    mid_in = to_world((-geometry.leg_length/2, 0.0), course)
    draw_arrow_head(ax, mid_in[0], mid_in[1], course, TRACK)
    ax.add_patch(patches.Circle((0.0, 0.0), 6, color=TRACK, zorder=6))

    # Leg labels, kept upright
    r2 = 2*geometry.turn_radius
    lx, ly = to_world((-geometry.leg_length/2, -35.0), course)
    ax.text(lx, ly, f"TRK {pad3(course)}°\nHDG {pad3(geometry.inbound_heading_deg)}°",
            ha="center", va="center", fontsize=9, color=LABEL, zorder=7)
    lx, ly = to_world((-geometry.leg_length/2, r2 + 35.0), course)
    ax.text(lx, ly, f"TRK {pad3(geometry.outbound_track_deg)}°\nHDG {pad3(geometry.outbound_heading_deg)}°",
            ha="center", va="center", fontsize=9, color=LABEL, zorder=7)

    # Gates
    g1 = to_world(geometry.gate1, course)
    ax.add_patch(patches.Circle(tuple(g1), 8, color=GATE1, zorder=7))
    lx, ly = to_world((geometry.gate1[0] - 15, geometry.gate1[1] + 15), course)
    ax.text(lx, ly, f"Gate 1 {geometry.gate1_time_sec}s", ha="right", va="center",
            fontsize=11, fontweight="bold", color=GATE1, zorder=9)

    g2 = to_world(geometry.gate2, course)
    ax.add_patch(patches.Circle(tuple(g2), 8, color=GATE2, zorder=7))
    lx, ly = to_world((geometry.gate2[0] - 15, geometry.gate2[1] - 15), course)
    ax.text(lx, ly, f"Gate 2 {pad3(geometry.gate2_bearing_deg)}°", ha="right", va="center",
            fontsize=11, fontweight="bold", color=GATE2, zorder=9)

    lx, ly = to_world((25.0, -25.0), course)
    ax.text(lx, ly, "FIX", ha="left", va="center", fontsize=12, color=TRACK, zorder=9)

    # Wind arrow, drawn from where the wind comes from towards the centre
    x1, y1 = polar(wind.direction_deg, 320.0); x2, y2 = polar(wind.direction_deg, 120.0)
    ax.plot([x1, x2], [y1, y2], color=WIND, linewidth=4, zorder=4)
    draw_arrow_head(ax, x2, y2, wind.direction_deg + 180.0, WIND, size=30.0)
    ax.text(x1, y1 + (25 if y1 >= 0 else -25), f"WIND {pad3(wind.direction_deg)}",
            ha="center", va="center", fontsize=11, fontweight="bold", color=WIND, zorder=9)

    return fig
