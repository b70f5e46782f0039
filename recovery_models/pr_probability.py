from __future__ import annotations
import math
from typing import Dict, List, Sequence
from .math_tools import MathTools
from .schemas import MuscleStatus, Workout
from .supercompensation import Supercompensation
from .volume_aggregator import VolumeAggregator


class PRProbability:
    """Score the chance (0-100) of setting a personal record."""

    W_RECOVERY: float = 0.4
    W_SUPERCOMP: float = 0.2
    W_CONSISTENCY: float = 0.2
    W_TREND: float = 0.2
    TREND_WINDOW: int = 5

    @staticmethod
    def recovery_factor(status: MuscleStatus) -> float:
        pct = status.recovery_percentage
        if pct >= 100:
            return 100.0
        if pct >= 90:
            return 80.0
        if pct >= 80:
            return 50.0
        return 20.0

    @staticmethod
    def supercompensation_factor(
        status: MuscleStatus, hours_since_last_workout: float
    ) -> float:
        bonus = Supercompensation.score(status, hours_since_last_workout)
        if math.isnan(bonus):
            return 0.0
        return min(100.0, bonus * 10)

    @staticmethod
    def consistency_factor(status: MuscleStatus) -> float:
        if status.training_frequency >= 2:
            return 100.0
        if status.training_frequency >= 1:
            return 70.0
        return 40.0

    @classmethod
    def session_totals(cls, recent_workouts: Sequence[Workout]) -> List[float]:
        """Totals of the latest sessions in chronological order."""
        totals = [
            sum(VolumeAggregator.stored_volume(ex) for ex in w.exercises)
            for w in list(recent_workouts)[: cls.TREND_WINDOW]
        ]
        totals.reverse()
        return totals

    @classmethod
    def trend_factor(cls, recent_workouts: Sequence[Workout]) -> float:
        totals = cls.session_totals(recent_workouts)
        if len(totals) < 2:
            return 50.0
        current, previous = totals[-1], totals[-2]
        if current > previous:
            return 90.0
        if current == previous:
            return 70.0
        return 40.0

    @classmethod
    def factors(
        cls,
        status: MuscleStatus,
        recent_workouts: Sequence[Workout],
        hours_since_last_workout: float,
    ) -> Dict[str, float]:
        return {
            "recovery": cls.recovery_factor(status),
            "supercompensation": cls.supercompensation_factor(
                status, hours_since_last_workout
            ),
            "consistency": cls.consistency_factor(status),
            "trend": cls.trend_factor(recent_workouts),
        }

    @classmethod
    def score(
        cls,
        status: MuscleStatus,
        recent_workouts: Sequence[Workout],
        hours_since_last_workout: float,
    ) -> int:
        f = cls.factors(status, recent_workouts, hours_since_last_workout)
        probability = MathTools.weighted_sum(
            (f["recovery"], f["supercompensation"], f["consistency"], f["trend"]),
            (cls.W_RECOVERY, cls.W_SUPERCOMP, cls.W_CONSISTENCY, cls.W_TREND),
        )
        return int(MathTools.clamp(MathTools.round_half_up(probability), 0, 100))
