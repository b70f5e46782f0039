import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from recovery_models import VolumePredictor
from recovery_models.schemas import (
    MuscleGroup,
    TrackingType,
    Workout,
    WorkoutExercise,
    WorkoutSet,
)


def _workout(volume: float, muscle: MuscleGroup = MuscleGroup.CHEST) -> Workout:
    """A workout holding one completed set of ``volume`` x 1."""
    return Workout(
        exercises=[
            WorkoutExercise(
                exercise_name="Press",
                sets=[WorkoutSet(reps=1, weight=volume, completed=True)],
                muscles_worked=[muscle],
                tracking_type=TrackingType.WEIGHT_REPS,
            )
        ]
    )


class VolumePredictorTestCase(unittest.TestCase):
    def test_empty_history(self) -> None:
        self.assertEqual(VolumePredictor.predict([], MuscleGroup.CHEST), 0)

    def test_single_point_identity(self) -> None:
        self.assertEqual(VolumePredictor.predict([_workout(5000)], MuscleGroup.CHEST), 5000)

    def test_trending_up_gets_bonus(self) -> None:
        # newest first: 1200, 1000, 1000 -> weighted average 1100, x1.05
        workouts = [_workout(1200), _workout(1000), _workout(1000)]
        self.assertEqual(VolumePredictor.predict(workouts, MuscleGroup.CHEST), 1155)

    def test_trending_down_no_bonus(self) -> None:
        # oldest 1200, newest 1000 -> (1200 + 2000) / 3
        workouts = [_workout(1000), _workout(1200)]
        self.assertEqual(VolumePredictor.predict(workouts, MuscleGroup.CHEST), 1067)

    def test_other_muscles_dropped(self) -> None:
        workouts = [
            _workout(1200),
            _workout(800, MuscleGroup.QUADS),
            _workout(1000),
            _workout(1000),
        ]
        self.assertEqual(
            VolumePredictor.muscle_volumes(workouts, MuscleGroup.CHEST), [1000, 1000, 1200]
        )
        self.assertEqual(VolumePredictor.predict(workouts, MuscleGroup.CHEST), 1155)
        self.assertEqual(VolumePredictor.predict(workouts, MuscleGroup.QUADS), 800)

    def test_incomplete_sessions_dropped(self) -> None:
        skipped = Workout(
            exercises=[
                WorkoutExercise(
                    sets=[WorkoutSet(reps=10, weight=100, completed=False)],
                    muscles_worked=[MuscleGroup.CHEST],
                    tracking_type=TrackingType.WEIGHT_REPS,
                )
            ]
        )
        self.assertEqual(VolumePredictor.predict([skipped, _workout(700)], MuscleGroup.CHEST), 700)

    def test_never_negative(self) -> None:
        workouts = [_workout(300), _workout(100), _workout(50), _workout(900)]
        self.assertGreaterEqual(VolumePredictor.predict(workouts, MuscleGroup.CHEST), 0)


if __name__ == "__main__":
    unittest.main()
