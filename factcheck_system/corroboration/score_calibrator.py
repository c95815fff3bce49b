"""Confidence calibration combining the base score with corroboration.

The raw score is clamped to [0, 1] (non-numeric -> 0.5), then bounded per label:

    label         inconclusive   corroborated / contradicted
    doubtful      <= 0.60        <= 0.70
    trustworthy   <= 0.85        0.60 .. 0.98
    fake          <= 0.90        0.70 .. 0.99

Inconclusive corroboration only ever lowers the score. A definite outcome also
raises low scores of trustworthy/fake up to their floor. No label reaches 0 or
1 after a definite outcome, and doubtful never reports high confidence.
"""

import math
from typing import Any, Optional

import structlog

from factcheck_system.corroboration.schemas import (
    CorroborationResult,
    CorroborationStatus,
    Label,
)

DEFAULT_RAW_SCORE = 0.5

# label -> (floor, ceiling)
INCONCLUSIVE_BOUNDS: dict[Label, tuple[float, float]] = {
    Label.DOUBTFUL: (0.0, 0.6),
    Label.TRUSTWORTHY: (0.0, 0.85),
    Label.FAKE: (0.0, 0.9),
}
DEFINITE_BOUNDS: dict[Label, tuple[float, float]] = {
    Label.DOUBTFUL: (0.0, 0.7),
    Label.TRUSTWORTHY: (0.6, 0.98),
    Label.FAKE: (0.7, 0.99),
}


def clamp_unit(value: Any, default: float = DEFAULT_RAW_SCORE) -> float:
    """Coerce value to a float in [0, 1]; unusable values become default."""
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    return max(0.0, min(1.0, number))


class ScoreCalibrator:
    """Applies label-consistent bounds to a raw confidence score."""

    def __init__(self) -> None:
        self._logger = structlog.get_logger().bind(component="ScoreCalibrator")

    def calibrate(
        self,
        label: Label,
        raw_score: Any,
        corroboration: Optional[CorroborationResult],
    ) -> float:
        """Calibrate raw_score for label given the corroboration outcome.

        Args:
            label: Base classification label.
            raw_score: Model-reported confidence (clamped first).
            corroboration: Corroboration result; None counts as inconclusive.

        Returns:
            Calibrated score in [0, 1].
        """
        label = Label(label)
        score = clamp_unit(raw_score)
        overall = corroboration.overall if corroboration is not None else CorroborationStatus.INCONCLUSIVE

        bounds = INCONCLUSIVE_BOUNDS if overall == CorroborationStatus.INCONCLUSIVE else DEFINITE_BOUNDS
        floor, ceiling = bounds[label]
        calibrated = max(floor, min(score, ceiling))

        self._logger.debug(
            "score_calibrated",
            label=label.value,
            overall=overall.value,
            raw=score,
            calibrated=calibrated,
        )
        return calibrated


def calibrate(label: Label, raw_score: Any, corroboration: Optional[CorroborationResult]) -> float:
    """Module-level shortcut for ScoreCalibrator().calibrate()."""
    return ScoreCalibrator().calibrate(label, raw_score, corroboration)
