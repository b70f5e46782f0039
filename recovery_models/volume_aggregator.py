from __future__ import annotations
from typing import Callable, Dict, Iterable, Optional
from .schemas import (
    DistanceUnit,
    MuscleGroup,
    TrackingType,
    VolumeMetrics,
    Workout,
    WorkoutExercise,
    WorkoutSet,
)
from .unit_converter import UnitConverter


def _weight_reps(s: WorkoutSet) -> float:
    if s.weight is None or s.reps is None:
        return 0.0
    return s.reps * s.weight


def _reps_only(s: WorkoutSet) -> float:
    return s.reps if s.reps is not None else 0.0


def _cardio(s: WorkoutSet) -> float:
    if s.distance is None:
        return 0.0
    if s.distance_unit == DistanceUnit.MILES:
        return UnitConverter.miles_to_km(s.distance)
    return s.distance


def _duration(s: WorkoutSet) -> float:
    return s.duration if s.duration is not None else 0.0


_VOLUME_RULES: Dict[TrackingType, Callable[[WorkoutSet], float]] = {
    TrackingType.WEIGHT_REPS: _weight_reps,
    TrackingType.REPS_ONLY: _reps_only,
    TrackingType.CARDIO: _cardio,
    TrackingType.DURATION: _duration,
}

_missing = set(TrackingType) - set(_VOLUME_RULES)
if _missing:
    raise RuntimeError(f"no volume rule for tracking types: {sorted(_missing)}")


class VolumeAggregator:
    """Turn the completed sets of an exercise into a training volume."""

    @staticmethod
    def infer_tracking_type(s: WorkoutSet) -> TrackingType:
        """Guess the tracking type of a set from the fields it carries."""
        if s.weight is not None:
            return TrackingType.WEIGHT_REPS
        if s.distance is not None:
            return TrackingType.CARDIO
        if s.duration is not None:
            return TrackingType.DURATION
        if s.reps is not None:
            return TrackingType.REPS_ONLY
        return TrackingType.WEIGHT_REPS

    @staticmethod
    def _resolve(tracking_type: TrackingType | str | None) -> Optional[TrackingType]:
        if not tracking_type:
            return None
        if isinstance(tracking_type, TrackingType):
            return tracking_type
        try:
            return TrackingType(tracking_type)
        except ValueError:
            return None

    @classmethod
    def compute_volume(
        cls,
        sets: Iterable[WorkoutSet],
        tracking_type: TrackingType | str | None = None,
    ) -> float:
        """Sum the volume of completed ``sets``.

        ``weight_reps`` sums reps x weight, ``reps_only`` sums reps, ``cardio``
        sums distance in kilometres and ``duration`` sums seconds. Without a
        tracking type (``None`` or empty) each set is classified from its own
        fields. A string that names no tracking type yields 0.
        """
        ttype = cls._resolve(tracking_type)
        if tracking_type and ttype is None:
            return 0.0
        total = 0.0
        for s in sets:
            if not s.completed:
                continue
            rule = _VOLUME_RULES[ttype or cls.infer_tracking_type(s)]
            total += rule(s)
        return total

    @classmethod
    def volume_by_type(
        cls, sets: Iterable[WorkoutSet], tracking_type: TrackingType | str
    ) -> VolumeMetrics:
        """Break volume down per tracking type.

        Only weight x reps volume counts towards ``total_normalized_volume``;
        reps, distance and duration are kept apart to avoid mixing units.
        """
        metrics = VolumeMetrics()
        ttype = cls._resolve(tracking_type)
        if ttype is None:
            return metrics
        done = [s for s in sets if s.completed]
        volume = sum(_VOLUME_RULES[ttype](s) for s in done)
        if ttype == TrackingType.WEIGHT_REPS:
            metrics.weight_reps_volume = volume
            metrics.total_normalized_volume = volume
        elif ttype == TrackingType.REPS_ONLY:
            metrics.reps_only_volume = volume
        elif ttype == TrackingType.CARDIO:
            metrics.cardio_volume = volume
        else:
            metrics.duration_volume = volume
        return metrics

    @classmethod
    def exercise_volume(cls, exercise: WorkoutExercise) -> float:
        return cls.compute_volume(exercise.sets, exercise.tracking_type)

    @classmethod
    def stored_volume(cls, exercise: WorkoutExercise) -> float:
        """Volume recorded on the exercise, recomputed when none was stored."""
        if exercise.total_volume is not None:
            return exercise.total_volume
        return cls.exercise_volume(exercise)

    @classmethod
    def workout_volume(
        cls, workout: Workout, muscle: MuscleGroup | None = None
    ) -> float:
        """Total volume of ``workout``, optionally only exercises hitting ``muscle``."""
        total = 0.0
        for ex in workout.exercises:
            if muscle is not None and muscle not in ex.muscles_worked:
                continue
            total += cls.exercise_volume(ex)
        return total
