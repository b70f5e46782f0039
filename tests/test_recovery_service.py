import os
import sys
import datetime
import unittest
from loguru import logger

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from recovery_models import RecoveryCalculator, Supercompensation
from recovery_models.schemas import (
    ExperienceLevel,
    MuscleGroup,
    MuscleStatus,
    TrackingType,
    Workout,
    WorkoutExercise,
    WorkoutSet,
)
from recovery_service import RecoveryService
from settings_schema import SettingsSchema

NOW = datetime.datetime(2024, 3, 10, 12, 0, tzinfo=datetime.timezone.utc)


def _workout(weight: float) -> Workout:
    return Workout(
        exercises=[
            WorkoutExercise(
                exercise_name="Bench Press",
                sets=[WorkoutSet(reps=10, weight=weight, completed=True)],
                muscles_worked=[MuscleGroup.CHEST],
                tracking_type=TrackingType.WEIGHT_REPS,
            )
        ]
    )


class RecoveryServiceTest(unittest.TestCase):
    def setUp(self) -> None:
        self.service = RecoveryService(SettingsSchema(forecast_days=3))
        self.status = MuscleStatus(
            muscle=MuscleGroup.CHEST,
            workload_score=60,
            recovery_percentage=100,
            last_worked=NOW - datetime.timedelta(hours=72),
            recommended_rest_days=2,
            training_frequency=2,
        )
        # newest first
        self.workouts = [_workout(120), _workout(100), _workout(100)]

    def test_readiness_report(self) -> None:
        report = self.service.readiness_report(self.status, self.workouts, NOW)
        self.assertEqual(report["muscle"], "chest")
        self.assertEqual(report["hours_since_last_workout"], 72)
        self.assertEqual(report["fatigue"], 1)
        self.assertEqual(report["supercompensation_score"], 10)
        self.assertEqual(report["predicted_volume"], 1155)
        self.assertEqual(report["pr_probability"], 98)

    def test_untrained_muscle(self) -> None:
        status = MuscleStatus(muscle=MuscleGroup.CALVES)
        report = self.service.readiness_report(status, [], NOW)
        self.assertEqual(report["hours_since_last_workout"], 0)
        self.assertEqual(report["fatigue"], 0)
        self.assertEqual(report["predicted_volume"], 0)

    def test_naive_timestamps_are_utc(self) -> None:
        naive = NOW.replace(tzinfo=None)
        self.assertEqual(
            RecoveryService.hours_since(naive - datetime.timedelta(hours=5), NOW), 5
        )
        self.assertIsNone(RecoveryService.hours_since(None, NOW))

    def test_reports_for_each_status(self) -> None:
        other = self.status.model_copy(update={"muscle": MuscleGroup.TRICEPS})
        reports = self.service.readiness_reports([self.status, other], self.workouts, NOW)
        self.assertEqual([r["muscle"] for r in reports], ["chest", "triceps"])
        self.assertEqual(reports[1]["predicted_volume"], 0)

    def test_repeated_calls_are_identical(self) -> None:
        first = self.service.readiness_report(self.status, self.workouts, NOW)
        second = self.service.readiness_report(self.status, self.workouts, NOW)
        self.assertEqual(first, second)

    def test_suspicious_inputs_logged_not_rejected(self) -> None:
        messages: list[str] = []
        handler = logger.add(messages.append, level="WARNING")
        try:
            status = self.status.model_copy(update={"workload_score": -10})
            report = self.service.readiness_report(status, [], NOW)
        finally:
            logger.remove(handler)
        self.assertEqual(report["fatigue"], 0)
        self.assertTrue(any("workload_score" in m for m in messages))

    def test_forecast(self) -> None:
        days = self.service.forecast(self.status, self.workouts, NOW)
        self.assertEqual(len(days), 3)
        self.assertEqual(days[0].date, NOW.date())
        self.assertEqual(days[0].day_label, "Sun")
        recoveries = [d.recovery_percentage for d in days]
        self.assertEqual(recoveries, sorted(recoveries))
        self.assertEqual(recoveries[-1], 100)
        self.assertTrue(all(d.volume_prediction == 1155 for d in days))
        for d in days:
            self.assertGreaterEqual(d.pr_probability, 0)
            self.assertLessEqual(d.pr_probability, 100)
            self.assertEqual(d.pr_potential, d.pr_probability >= 70)

    def test_forecast_recomputes_rest_window_each_day(self) -> None:
        # chest/intermediate with no workload: 48h to recover, 24h in
        last = NOW - datetime.timedelta(hours=24)
        snapshot = RecoveryCalculator.recovery_status(
            MuscleGroup.CHEST, last, 0, ExperienceLevel.INTERMEDIATE, NOW, training_frequency=2
        )
        self.assertEqual(snapshot.recovery_percentage, 50)
        self.assertEqual(snapshot.recommended_rest_days, 1)

        days = self.service.forecast(snapshot, [], NOW)
        self.assertEqual([d.recovery_percentage for d in days], [50, 100, 100])
        # day 1 has no rest left, so the bump is 48h past the session: 10 * e^-2
        self.assertEqual([d.supercompensation_score for d in days], [0, 1, 0])
        for i, day in enumerate(days):
            target = NOW + datetime.timedelta(days=i)
            fresh = RecoveryCalculator.recovery_status(
                MuscleGroup.CHEST, last, 0, ExperienceLevel.INTERMEDIATE, target
            )
            hours = RecoveryCalculator.hours_between(last, target)
            self.assertEqual(day.supercompensation_score, Supercompensation.score(fresh, hours))

    def test_forecast_untrained_is_ready(self) -> None:
        status = MuscleStatus(muscle=MuscleGroup.ABS, recovery_percentage=100)
        days = self.service.forecast(status, [], NOW, days=2)
        self.assertEqual([d.recovery_percentage for d in days], [100, 100])
        self.assertEqual(days[0].fatigue_warnings, [])

    def test_forecast_warns_when_fresh_session(self) -> None:
        status = self.status.model_copy(
            update={
                "workload_score": 100,
                "recovery_percentage": 0,
                "last_worked": NOW,
            }
        )
        first = self.service.forecast(status, [], NOW, days=1)[0]
        self.assertEqual(first.recovery_percentage, 0)
        self.assertEqual(first.fatigue_accumulation, 50)
        self.assertEqual(len(first.fatigue_warnings), 2)


if __name__ == "__main__":
    unittest.main()
