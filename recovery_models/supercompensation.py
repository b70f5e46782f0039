from .math_tools import MathTools
from .schemas import MuscleStatus


class Supercompensation:
    """Readiness bonus in the window after a muscle has fully recovered.

    The bonus is a Gaussian bump: zero while the muscle is still recovering,
    rising to ``PEAK_SCORE`` ``PEAK_HOURS`` after the recommended rest has
    elapsed and fading again as detraining sets in.
    """

    PEAK_SCORE: float = 10.0
    PEAK_HOURS: float = 24.0
    WIDTH_HOURS: float = 12.0

    @classmethod
    def hours_since_recovered(
        cls, status: MuscleStatus, hours_since_last_workout: float
    ) -> float | None:
        """Hours past the recommended rest window, ``None`` inside it."""
        recommended_hours = status.recommended_rest_days * 24
        if hours_since_last_workout <= recommended_hours:
            return None
        return hours_since_last_workout - recommended_hours

    @classmethod
    def score(cls, status: MuscleStatus, hours_since_last_workout: float) -> int:
        if status.recovery_percentage < 100:
            return 0
        since = cls.hours_since_recovered(status, hours_since_last_workout)
        if since is None:
            return 0
        bump = MathTools.gaussian(since, cls.PEAK_SCORE, cls.PEAK_HOURS, cls.WIDTH_HOURS)
        return MathTools.round_half_up(bump)
