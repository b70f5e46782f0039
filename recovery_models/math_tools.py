import math
from typing import Iterable
import numpy as np


class MathTools:
    """Numeric helpers shared by the recovery models."""

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @staticmethod
    def round_half_up(value: float) -> int | float:
        """Round to the nearest integer with halves going up.

        Non-finite values are returned unchanged so NaN and infinities
        propagate instead of raising.
        """
        if not math.isfinite(value):
            return value
        return int(math.floor(value + 0.5))

    @staticmethod
    def exp_decay(initial: float, rate: float, elapsed: float) -> float:
        """Return ``initial * e^(-rate * elapsed)``."""
        return initial * math.exp(-rate * elapsed)

    @staticmethod
    def gaussian(x: float, peak: float, center: float, width: float) -> float:
        """Bell curve of height ``peak`` centred on ``center``."""
        return peak * math.exp(-((x - center) ** 2) / (2 * width**2))

    @staticmethod
    def linear_weighted_average(values: Iterable[float]) -> float:
        """Average ``values`` with weights 1..N, the last value weighted most."""
        data = np.asarray(list(values), dtype=float)
        if data.size == 0:
            return 0.0
        weights = np.arange(1, data.size + 1, dtype=float)
        return float(np.dot(data, weights) / weights.sum())

    @staticmethod
    def weighted_sum(scores: Iterable[float], weights: Iterable[float]) -> float:
        """Return the dot product of ``scores`` and ``weights``."""
        total = 0.0
        for score, weight in zip(scores, weights):
            total += score * weight
        return total
