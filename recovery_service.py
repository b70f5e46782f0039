from __future__ import annotations
import datetime
import math
from typing import List, Optional, Sequence
from loguru import logger
from recovery_models import (
    FatigueModel,
    PRProbability,
    RecoveryCalculator,
    Supercompensation,
    VolumePredictor,
)
from recovery_models.schemas import MuscleStatus, RecoveryPrediction, Workout
from settings_schema import SettingsSchema


class RecoveryService:
    """Combine the recovery models into per-muscle readiness reports.

    Inputs are read-only snapshots passed in per call; nothing is cached so
    repeated calls recompute. Suspicious numbers are logged, never rejected.
    """

    PR_POTENTIAL_THRESHOLD = 70
    FATIGUE_WARNING_THRESHOLD = 25
    LOW_RECOVERY_THRESHOLD = 50

    def __init__(self, settings: SettingsSchema | None = None) -> None:
        self.settings = settings or SettingsSchema()

    @staticmethod
    def _as_utc(ts: datetime.datetime) -> datetime.datetime:
        """Return ``ts`` as a timezone-aware datetime in UTC."""
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=datetime.timezone.utc)
        return ts

    @classmethod
    def hours_since(
        cls, last_worked: Optional[datetime.datetime], now: datetime.datetime
    ) -> Optional[int]:
        if last_worked is None:
            return None
        return RecoveryCalculator.hours_between(
            cls._as_utc(last_worked), cls._as_utc(now)
        )

    @staticmethod
    def _flag_inputs(status: MuscleStatus, hours: float) -> None:
        checks = {
            "workload_score": status.workload_score,
            "hours_since_last_workout": hours,
            "recommended_rest_days": status.recommended_rest_days,
            "training_frequency": status.training_frequency,
        }
        for name, value in checks.items():
            if not math.isfinite(value) or value < 0:
                logger.warning(
                    f"Suspicious {name}={value} for {status.muscle.value}; passing through"
                )

    def readiness_report(
        self,
        status: MuscleStatus,
        recent_workouts: Sequence[Workout],
        now: datetime.datetime,
    ) -> dict:
        """Return fatigue, supercompensation, volume and PR odds for a muscle."""
        hours = self.hours_since(status.last_worked, now)
        if hours is None:
            hours = 0
        self._flag_inputs(status, hours)
        report = {
            "muscle": status.muscle.value,
            "hours_since_last_workout": hours,
            "recovery_percentage": status.recovery_percentage,
            "fatigue": FatigueModel.from_status(status, hours),
            "supercompensation_score": Supercompensation.score(status, hours),
            "predicted_volume": VolumePredictor.predict(recent_workouts, status.muscle),
            "pr_probability": PRProbability.score(status, recent_workouts, hours),
        }
        logger.debug(f"Readiness report for {status.muscle.value}: {report}")
        return report

    def readiness_reports(
        self,
        statuses: Sequence[MuscleStatus],
        recent_workouts: Sequence[Workout],
        now: datetime.datetime,
    ) -> List[dict]:
        return [self.readiness_report(s, recent_workouts, now) for s in statuses]

    def _projected_status(
        self, status: MuscleStatus, target: datetime.datetime
    ) -> MuscleStatus:
        """Recovery snapshot of ``status.muscle`` as it will look at ``target``."""
        last = None
        if status.last_worked is not None:
            last = self._as_utc(status.last_worked)
            if last > target:
                return status
        return RecoveryCalculator.recovery_status(
            status.muscle,
            last,
            status.workload_score,
            self.settings.user_level,
            target,
            total_volume_last_7_days=status.total_volume_last_7_days,
            training_frequency=status.training_frequency,
            base_rest_interval=self.settings.base_rest_interval,
        )

    def forecast(
        self,
        status: MuscleStatus,
        recent_workouts: Sequence[Workout],
        now: datetime.datetime,
        days: int | None = None,
    ) -> List[RecoveryPrediction]:
        """Project readiness of ``status.muscle`` for each of the next ``days``."""
        days = self.settings.forecast_days if days is None else days
        volume = VolumePredictor.predict(recent_workouts, status.muscle)
        predictions: list[RecoveryPrediction] = []
        for i in range(days):
            target = self._as_utc(now) + datetime.timedelta(days=i)
            hours = self.hours_since(status.last_worked, target)
            projected = self._projected_status(status, target)
            pct = projected.recovery_percentage
            elapsed = max(hours or 0, 0)
            fatigue = FatigueModel.from_status(projected, elapsed)
            pr = PRProbability.score(projected, recent_workouts, elapsed)
            warnings: list[str] = []
            if fatigue >= self.FATIGUE_WARNING_THRESHOLD:
                warnings.append(f"High residual fatigue ({fatigue})")
            if pct < self.LOW_RECOVERY_THRESHOLD:
                warnings.append(f"Only {pct}% recovered")
            predictions.append(
                RecoveryPrediction(
                    date=target.date(),
                    day_label=target.strftime("%a"),
                    muscle=status.muscle,
                    recovery_percentage=pct,
                    fatigue_accumulation=fatigue,
                    supercompensation_score=Supercompensation.score(projected, elapsed),
                    pr_probability=pr,
                    volume_prediction=volume,
                    pr_potential=pr >= self.PR_POTENTIAL_THRESHOLD,
                    fatigue_warnings=warnings,
                )
            )
        logger.debug(f"Forecast {status.muscle.value} over {days} days")
        return predictions
