"""
Distance interpretation guide for semantic matching results.
ChromaDB distances are non-negative; lower means more similar.
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple


# Squared L2 between unit vectors never exceeds this; larger values usually
# mean the embedding function and collection disagree.
DISTANCE_ANOMALY_THRESHOLD = 4.0


@dataclass(frozen=True)
class QualityBand:
    """One row of the distance guide: [min, max) maps to quality."""

    quality: str
    min: float
    max: float
    label: str

    def contains(self, distance: float) -> bool:
        return self.min <= distance < self.max


DISTANCE_GUIDE: Tuple[QualityBand, ...] = (
    QualityBand("excellent", 0.0, 0.8, "Excellent Match"),
    QualityBand("good", 0.8, 1.2, "Good Match"),
    QualityBand("weak", 1.2, 1.6, "Weak Match"),
    QualityBand("poor", 1.6, math.inf, "Poor Match"),
)

_POOR = DISTANCE_GUIDE[-1]


def get_match_quality(distance: float) -> QualityBand:
    """Get match quality band for a raw distance score.

    Anything the bands do not capture (negative values, NaN) is poor.
    """
    for band in DISTANCE_GUIDE:
        if band.contains(distance):
            return band
    return _POOR


def classify_distance(distance: float) -> str:
    return get_match_quality(distance).quality


def is_anomalous_distance(distance: float) -> bool:
    return math.isnan(distance) or distance < 0 or distance > DISTANCE_ANOMALY_THRESHOLD


def distance_guide_as_dict() -> Dict[str, Dict[str, object]]:
    """JSON-friendly view of the guide; the unbounded max becomes None."""
    return {
        band.quality: {
            "min": band.min,
            "max": None if math.isinf(band.max) else band.max,
            "label": band.label,
        }
        for band in DISTANCE_GUIDE
    }
