import math
from .math_tools import MathTools
from .schemas import MuscleStatus


class FatigueModel:
    """Exponential decay of residual fatigue after a session."""

    WORKLOAD_FATIGUE_FACTOR: float = 0.5
    DECAY_RATE: float = 0.05  # per hour

    @classmethod
    def fatigue(cls, workload_score: float, hours_since_last_workout: float) -> int:
        """Return the fatigue left ``hours_since_last_workout`` after training.

        F(t) = workload * 0.5 * e^(-0.05 t), rounded and floored at zero.
        """
        initial = workload_score * cls.WORKLOAD_FATIGUE_FACTOR
        current = MathTools.exp_decay(initial, cls.DECAY_RATE, hours_since_last_workout)
        rounded = MathTools.round_half_up(current)
        if math.isnan(rounded):
            return rounded
        return max(0, rounded)

    @classmethod
    def from_status(cls, status: MuscleStatus, hours_since_last_workout: float) -> int:
        return cls.fatigue(status.workload_score, hours_since_last_workout)
