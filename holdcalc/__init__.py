from holdcalc.engine import compute_hold
from holdcalc.models import (
    WindVector, AltitudeBand, DriftResult, TimingResult, HoldGeometry, HoldResult,
)

__all__ = [
    "compute_hold", "WindVector", "AltitudeBand", "DriftResult",
    "TimingResult", "HoldGeometry", "HoldResult",
]
