"""Wellness predictor session.

Pipeline per request:
    validate -> engineer features -> normalize -> infer (both models) -> aggregate

The two models are loaded once per session and released by close().
A session whose models failed to load rejects every prediction with
ModelUnavailableError.
"""
import logging
import time
from typing import Optional, Sequence

from cognify.shared.models import PredictionResult, SelfTestReport
from .aggregator import aggregate_scores
from .config import (
    DEPRESSED_CASE_RESPONSES,
    NORMAL_CASE_RESPONSES,
    ScoringWeights,
    WellnessConfig,
)
from .errors import ModelLoadError, ModelUnavailableError
from .features import engineer_features
from .inference import InferenceEngine
from .normalizer import NormalizationParameters, Normalizer
from .validator import validate_responses

logger = logging.getLogger(__name__)


class WellnessPredictor:
    """Computes a PredictionResult from 25 questionnaire answers."""

    def __init__(
        self,
        engine: InferenceEngine,
        config: Optional[WellnessConfig] = None,
        normalization: Optional[NormalizationParameters] = None,
        weights: Optional[ScoringWeights] = None,
    ):
        """Initialize predictor.

        Args:
            engine: Inference engine holding the two models
            config: Runtime configuration
            normalization: Feature scaling constants (default: embedded set)
            weights: Comprehensive score weights
        """
        self.config = config or WellnessConfig()
        self.engine = engine
        self.normalizer = Normalizer(normalization)
        self.weights = weights or ScoringWeights()
        self._closed = False

        logger.info(
            "WELLNESS_PREDICTOR_INITIALIZED",
            extra={
                "normalization_version": self.normalizer.version,
                "models_available": engine.is_available,
                "strict_ranges": self.config.strict_ranges,
            }
        )

    @classmethod
    def from_config(cls, config: Optional[WellnessConfig] = None) -> "WellnessPredictor":
        """Build a predictor and load its model artifacts.

        A model load failure is logged and leaves the predictor unavailable.
        A bad normalization artifact raises ModelLoadError, since predicting
        with mismatched constants would silently corrupt every score.
        """
        config = config or WellnessConfig.from_env()

        normalization = None
        if config.normalization_file:
            normalization = NormalizationParameters.from_file(config.normalization_file)

        engine = InferenceEngine(timeout_seconds=config.inference_timeout_seconds)
        try:
            engine.load(config.depression_model_path, config.anxiety_model_path)
        except ModelLoadError as e:
            logger.error(
                "PREDICTOR_STARTED_WITHOUT_MODELS",
                extra={"model_dir": config.model_dir, "error": e.message}
            )

        return cls(engine=engine, config=config, normalization=normalization)

    @property
    def is_ready(self) -> bool:
        return not self._closed and self.engine.is_available

    def predict(self, responses: Sequence[int]) -> PredictionResult:
        """Assess one questionnaire submission.

        Raises:
            InvalidInputError: Wrong count or invalid answers
            ModelUnavailableError: Models not loaded, released or timed out
            InferenceError: A model call failed
        """
        if self._closed:
            raise ModelUnavailableError("Predictor has been closed")

        start_time = time.perf_counter()

        answers = validate_responses(responses, strict_ranges=self.config.strict_ranges)
        features = engineer_features(answers)
        normalized = self.normalizer.transform(features.vector)
        depression_output, anxiety_output = self.engine.infer_pair(normalized)
        result = aggregate_scores(
            features, depression_output, anxiety_output, weights=self.weights
        )

        logger.info(
            "PREDICTION_COMPLETE",
            extra={
                "comprehensive_score": result.comprehensive_score,
                "latency_ms": round((time.perf_counter() - start_time) * 1000, 2),
            }
        )
        return result

    def self_test(self) -> SelfTestReport:
        """Run the built-in normal and depressed questionnaires."""
        return SelfTestReport(
            normal_case=self.predict(NORMAL_CASE_RESPONSES),
            depressed_case=self.predict(DEPRESSED_CASE_RESPONSES),
        )

    def get_status(self) -> dict:
        return {
            "ready": self.is_ready,
            "closed": self._closed,
            "normalization_version": self.normalizer.version,
            "engine": self.engine.get_status(),
        }

    def close(self) -> None:
        """Release both models. Later predict() calls fail."""
        if self._closed:
            return
        self._closed = True
        self.engine.release()
        logger.info("WELLNESS_PREDICTOR_CLOSED")

    def __enter__(self) -> "WellnessPredictor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
