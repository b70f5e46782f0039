from __future__ import annotations
from typing import List, Sequence
from .math_tools import MathTools
from .schemas import MuscleGroup, Workout
from .volume_aggregator import VolumeAggregator


class VolumePredictor:
    """Forecast the volume a muscle can take in its next session.

    A linearly weighted moving average favours recent sessions while still
    smoothing out single-session noise. When the latest session beats the
    average the forecast gets a flat ``TREND_BONUS``; this is a momentum
    heuristic, not a fitted trend line.
    """

    TREND_BONUS: float = 1.05

    @staticmethod
    def muscle_volumes(
        recent_workouts: Sequence[Workout], muscle: MuscleGroup
    ) -> List[float]:
        """Per-session volumes for ``muscle``, oldest first.

        ``recent_workouts`` is expected newest first. Sessions that did not
        train the muscle are dropped.
        """
        volumes = [
            VolumeAggregator.workout_volume(w, muscle) for w in recent_workouts
        ]
        volumes = [v for v in volumes if v > 0]
        volumes.reverse()
        return volumes

    @classmethod
    def predict(
        cls, recent_workouts: Sequence[Workout], muscle: MuscleGroup
    ) -> float:
        volumes = cls.muscle_volumes(recent_workouts, muscle)
        if not volumes:
            return 0
        if len(volumes) == 1:
            return volumes[0]
        average = MathTools.linear_weighted_average(volumes)
        factor = cls.TREND_BONUS if volumes[-1] > average else 1.0
        return MathTools.round_half_up(average * factor)
