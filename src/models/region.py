"""
Observed region model
"""

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any

from models.errors import InvalidThreshold

DEFAULT_THRESHOLD = 0.5


def validate_threshold(threshold: Any) -> float:
    """
    Check a visibility threshold

    Returns:
        Threshold as float

    Raises:
        InvalidThreshold: Not a finite number in [0, 1]
    """
    if isinstance(threshold, bool) or not isinstance(threshold, Real):
        raise InvalidThreshold(threshold)
    if not math.isfinite(threshold) or not 0.0 <= threshold <= 1.0:
        raise InvalidThreshold(threshold)
    return float(threshold)


@dataclass(frozen=True)
class ObservedRegion:
    """
    Container whose visibility is tracked

    region_id: Stable identity (one active observation per id)
    threshold: Visible-area ratio that counts as "visible" (0.0-1.0)
    """
    region_id: str
    threshold: float = DEFAULT_THRESHOLD

    def __post_init__(self):
        object.__setattr__(self, "threshold", validate_threshold(self.threshold))
