"""Exact conversion of floating-point rewards to fixed-point integers."""

import math
from fractions import Fraction
from typing import Dict

from ..models.ledger import CumulativeLedger

# Rewards are reported in the token's smallest unit (18 decimals).
FIXED_POINT_DECIMALS = 18
FIXED_POINT_SCALE = 10 ** FIXED_POINT_DECIMALS


def to_fixed_point(value: float) -> int:
    """
    Convert a reward to an integer scaled by 10^18.

    The float is taken at its exact binary value, multiplied with
    arbitrary-precision rational arithmetic and truncated toward zero.
    No intermediate float rounding takes place, so 1e-18 converts to 1.

    Raises:
        ValueError: If value is NaN, infinite or negative
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot convert non-finite reward {value!r} to fixed point")
    if value < 0:
        raise ValueError(f"Cannot convert negative reward {value!r} to fixed point")
    return math.trunc(Fraction(value) * FIXED_POINT_SCALE)


def finalize_cumulative(ledger: CumulativeLedger) -> Dict[str, int]:
    """Convert a ledger's accumulated rewards to identity -> fixed-point integer."""
    return {identity: to_fixed_point(reward) for identity, reward in ledger.rewards().items()}
