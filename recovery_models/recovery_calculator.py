from __future__ import annotations
import datetime
import math
from typing import Dict, Optional
from .math_tools import MathTools
from .schemas import (
    ExperienceLevel,
    MuscleGroup,
    MuscleStatus,
    RecoveryStatus,
    SleepLog,
)

M = MuscleGroup

DEFAULT_REST_DAYS: Dict[ExperienceLevel, Dict[MuscleGroup, float]] = {
    ExperienceLevel.BEGINNER: {
        M.CHEST: 3, M.BACK: 3, M.SHOULDERS: 2, M.BICEPS: 2, M.TRICEPS: 2,
        M.QUADS: 4, M.HAMSTRINGS: 4, M.GLUTES: 3, M.ABS: 1,
    },
    ExperienceLevel.INTERMEDIATE: {
        M.CHEST: 2, M.BACK: 2, M.SHOULDERS: 2, M.BICEPS: 1, M.TRICEPS: 1,
        M.QUADS: 3, M.HAMSTRINGS: 3, M.GLUTES: 2, M.ABS: 1,
    },
    ExperienceLevel.ADVANCED: {
        M.CHEST: 1, M.BACK: 1, M.SHOULDERS: 1, M.BICEPS: 1, M.TRICEPS: 1,
        M.QUADS: 2, M.HAMSTRINGS: 2, M.GLUTES: 1, M.ABS: 1,
    },
}

FALLBACK_REST_DAYS: Dict[ExperienceLevel, float] = {
    ExperienceLevel.BEGINNER: 2,
    ExperienceLevel.INTERMEDIATE: 2,
    ExperienceLevel.ADVANCED: 1,
}


class RecoveryCalculator:
    """Build the per-muscle recovery snapshot consumed by the models."""

    DEFAULT_BASE_INTERVAL: float = 48.0
    OVERTRAINING_THRESHOLD: float = 80.0
    SLEEP_MIN: float = 0.7
    SLEEP_MAX: float = 1.3
    INTENSITY_MULTIPLIER = {"high": 1.5, "medium": 1.0, "low": 0.5}

    @staticmethod
    def hours_between(start: datetime.datetime, end: datetime.datetime) -> int:
        """Whole hours from ``start`` to ``end``, truncated toward zero."""
        return math.trunc((end - start).total_seconds() / 3600)

    @classmethod
    def sleep_multiplier(cls, sleep: SleepLog) -> float:
        """Recovery time multiplier for the previous night's sleep."""
        mult = 1.0
        if sleep.quality <= 4:
            mult += 0.1 + (5 - sleep.quality) * 0.05
        elif sleep.quality >= 8:
            mult -= 0.1 + (sleep.quality - 7) * 0.05
        hours = sleep.duration / 60
        if hours < 6:
            mult += 0.15
        elif hours < 7:
            mult += 0.05
        elif hours > 9:
            mult -= 0.05
        return MathTools.clamp(mult, cls.SLEEP_MIN, cls.SLEEP_MAX)

    @classmethod
    def base_recovery_hours(
        cls,
        muscle: MuscleGroup,
        level: ExperienceLevel,
        base_rest_interval: Optional[float] = None,
    ) -> float:
        level = ExperienceLevel(level)
        days = DEFAULT_REST_DAYS[level].get(
            MuscleGroup(muscle), FALLBACK_REST_DAYS[level]
        )
        hours = days * 24
        if base_rest_interval is not None:
            hours *= base_rest_interval / cls.DEFAULT_BASE_INTERVAL
        return hours

    @classmethod
    def adjusted_recovery_hours(
        cls,
        muscle: MuscleGroup,
        workload_score: float,
        level: ExperienceLevel,
        base_rest_interval: Optional[float] = None,
        sleep: Optional[SleepLog] = None,
    ) -> float:
        hours = cls.base_recovery_hours(muscle, level, base_rest_interval)
        hours *= 1 + workload_score / 100
        if sleep is not None:
            hours *= cls.sleep_multiplier(sleep)
        return hours

    @staticmethod
    def classify(recovery_percentage: float) -> RecoveryStatus:
        if recovery_percentage >= 100:
            return RecoveryStatus.READY
        if recovery_percentage >= 75:
            return RecoveryStatus.FRESH
        if recovery_percentage >= 50:
            return RecoveryStatus.RECOVERING
        if recovery_percentage >= 25:
            return RecoveryStatus.SORE
        return RecoveryStatus.OVERWORKED

    @classmethod
    def projected_recovery(
        cls, hours_since_workout: float, adjusted_hours: float
    ) -> float:
        """Unrounded recovery percentage, clamped to [0, 100]."""
        if adjusted_hours <= 0:
            return 100.0
        return MathTools.clamp(hours_since_workout / adjusted_hours * 100, 0.0, 100.0)

    @classmethod
    def recovery_status(
        cls,
        muscle: MuscleGroup,
        last_workout: Optional[datetime.datetime],
        workload_score: float,
        level: ExperienceLevel,
        now: datetime.datetime,
        *,
        total_volume_last_7_days: float = 0.0,
        training_frequency: float = 0.0,
        base_rest_interval: Optional[float] = None,
        sleep: Optional[SleepLog] = None,
    ) -> MuscleStatus:
        """Return the recovery snapshot of ``muscle`` at ``now``."""
        if last_workout is None:
            return MuscleStatus(
                muscle=muscle,
                last_worked=None,
                recovery_status=RecoveryStatus.READY,
                recovery_percentage=100,
                workload_score=0,
                recommended_rest_days=0,
                total_volume_last_7_days=0,
                training_frequency=0,
            )

        hours = cls.hours_between(last_workout, now)
        adjusted = cls.adjusted_recovery_hours(
            muscle, workload_score, level, base_rest_interval, sleep
        )
        pct = cls.projected_recovery(hours, adjusted)
        status = cls.classify(pct)
        if total_volume_last_7_days > cls.OVERTRAINING_THRESHOLD * 1000:
            status = RecoveryStatus.OVERWORKED
        remaining = max(0.0, adjusted - hours)
        return MuscleStatus(
            muscle=muscle,
            last_worked=last_workout,
            recovery_status=status,
            recovery_percentage=MathTools.round_half_up(pct),
            workload_score=workload_score,
            recommended_rest_days=math.ceil(remaining / 24),
            total_volume_last_7_days=total_volume_last_7_days,
            training_frequency=training_frequency,
        )

    @classmethod
    def workload_score(
        cls, volume: float, intensity: str, rpe: Optional[float] = None
    ) -> int:
        """Training stress of a session from its volume, intensity and RPE.

        Unknown intensities count as medium.
        """
        base = volume * cls.INTENSITY_MULTIPLIER.get(intensity, 1.0)
        rpe_mult = 1 + (rpe - 5) / 10 if rpe else 1.0
        return MathTools.round_half_up(base * rpe_mult)
