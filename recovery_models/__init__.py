from .math_tools import MathTools
from .unit_converter import UnitConverter
from .volume_aggregator import VolumeAggregator
from .fatigue_model import FatigueModel
from .supercompensation import Supercompensation
from .volume_predictor import VolumePredictor
from .pr_probability import PRProbability
from .recovery_calculator import RecoveryCalculator

__all__ = [
    "MathTools",
    "UnitConverter",
    "VolumeAggregator",
    "FatigueModel",
    "Supercompensation",
    "VolumePredictor",
    "PRProbability",
    "RecoveryCalculator",
]
