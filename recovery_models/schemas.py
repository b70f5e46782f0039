from __future__ import annotations
import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class MuscleGroup(str, Enum):
    CHEST = "chest"
    UPPER_CHEST = "upper_chest"
    LOWER_CHEST = "lower_chest"
    BACK = "back"
    LATS = "lats"
    TRAPS = "traps"
    RHOMBOIDS = "rhomboids"
    LOWER_BACK = "lower_back"
    SHOULDERS = "shoulders"
    FRONT_DELTS = "front_delts"
    SIDE_DELTS = "side_delts"
    REAR_DELTS = "rear_delts"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    ABS = "abs"
    OBLIQUES = "obliques"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    HIP_FLEXORS = "hip_flexors"


class TrackingType(str, Enum):
    WEIGHT_REPS = "weight_reps"
    REPS_ONLY = "reps_only"
    CARDIO = "cardio"
    DURATION = "duration"


class DistanceUnit(str, Enum):
    KM = "km"
    MILES = "miles"


class RecoveryStatus(str, Enum):
    FRESH = "fresh"
    RECOVERING = "recovering"
    SORE = "sore"
    READY = "ready"
    OVERWORKED = "overworked"


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class WorkoutSet(BaseModel):
    """A single logged set. Only the fields of its tracking type are set."""

    reps: Optional[float] = None
    weight: Optional[float] = None
    distance: Optional[float] = None
    distance_unit: DistanceUnit = DistanceUnit.KM
    time: Optional[float] = None
    duration: Optional[float] = None
    rpe: Optional[float] = None
    completed: bool = False


class WorkoutExercise(BaseModel):
    exercise_name: str = ""
    sets: List[WorkoutSet] = Field(default_factory=list)
    muscles_worked: List[MuscleGroup] = Field(default_factory=list)
    tracking_type: Optional[TrackingType] = None
    total_volume: Optional[float] = None


class Workout(BaseModel):
    date: Optional[datetime.datetime] = None
    exercises: List[WorkoutExercise] = Field(default_factory=list)


class MuscleStatus(BaseModel):
    """Per-muscle recovery snapshot owned by the data layer."""

    muscle: MuscleGroup
    workload_score: float = 0.0
    recovery_percentage: float = 100.0
    last_worked: Optional[datetime.datetime] = None
    recommended_rest_days: float = 0.0
    training_frequency: float = 0.0
    recovery_status: RecoveryStatus = RecoveryStatus.READY
    total_volume_last_7_days: float = 0.0


class SleepLog(BaseModel):
    quality: float
    duration: float  # minutes


class VolumeMetrics(BaseModel):
    weight_reps_volume: float = 0.0
    reps_only_volume: float = 0.0
    cardio_volume: float = 0.0
    duration_volume: float = 0.0
    total_normalized_volume: float = 0.0


class RecoveryPrediction(BaseModel):
    date: datetime.date
    day_label: str
    muscle: MuscleGroup
    recovery_percentage: float
    fatigue_accumulation: float
    supercompensation_score: float
    pr_probability: float
    volume_prediction: float
    pr_potential: bool = False
    fatigue_warnings: List[str] = Field(default_factory=list)
