"""Wellness Service: questionnaire scoring with dual-model inference.

Turns 25 questionnaire answers (PHQ-9, GAD-7, WHO-5, social functioning)
into depression/anxiety probabilities from two trained classifiers plus
closed-form wellness percentages and a weighted comprehensive score.

Components:
- validator.py: answer count / type / Likert range checks
- features.py: subscale sums and the 28-feature model input
- normalizer.py: versioned z-score constants
- inference.py: joblib model adapter and concurrent dual-model engine
- aggregator.py: wellness percentages and comprehensive score
- predictor.py: WellnessPredictor session (predict, self_test, close)
- handler.py: Flask HTTP endpoints (/health, /ready, /predict, /self-test)
- cli.py: command-line entry point

Usage:
    from cognify.services.wellness_service import WellnessPredictor, WellnessConfig
    with WellnessPredictor.from_config(WellnessConfig(model_dir="models")) as predictor:
        result = predictor.predict(responses)
"""

from .config import WellnessConfig, ScoringWeights, SubscaleSpec, SUBSCALES
from .errors import (
    PredictorError,
    InvalidInputError,
    ModelLoadError,
    ModelUnavailableError,
    InferenceError,
)
from .features import EngineeredFeatures, engineer_features
from .inference import InferenceEngine, JoblibScoringModel, ScoringModel
from .normalizer import NormalizationParameters, Normalizer
from .predictor import WellnessPredictor
from .validator import validate_responses

__all__ = [
    "WellnessConfig",
    "ScoringWeights",
    "SubscaleSpec",
    "SUBSCALES",
    "PredictorError",
    "InvalidInputError",
    "ModelLoadError",
    "ModelUnavailableError",
    "InferenceError",
    "EngineeredFeatures",
    "engineer_features",
    "InferenceEngine",
    "JoblibScoringModel",
    "ScoringModel",
    "NormalizationParameters",
    "Normalizer",
    "WellnessPredictor",
    "validate_responses",
]
