"""Dual-model inference engine.

Two independently trained binary classifiers (depression, anxiety) score
the same normalized feature vector. The calls share no state, so both are
issued concurrently and joined before aggregation.

Model artifacts are scikit-learn compatible estimators serialized with
joblib. Anything exposing predict_proba() or a single-output predict()
can be scored.
"""
import logging
import math
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Dict, Optional, Tuple

import joblib
import numpy as np

from .errors import (
    InferenceError,
    ModelLoadError,
    ModelUnavailableError,
    PredictorError,
)

logger = logging.getLogger(__name__)

DEPRESSION_MODEL = "depression"
ANXIETY_MODEL = "anxiety"
MODEL_NAMES = (DEPRESSION_MODEL, ANXIETY_MODEL)


class ScoringModel(ABC):
    """A loaded model mapping one normalized vector to a probability."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def score(self, vector: np.ndarray) -> float:
        """Return the positive-class probability for one feature vector."""
        pass

    def close(self) -> None:
        """Release any resources held by the model."""
        pass


class JoblibScoringModel(ScoringModel):
    """Adapter for a joblib-serialized scikit-learn style classifier."""

    def __init__(self, name: str, estimator: Any, path: Optional[str] = None):
        super().__init__(name)
        self.path = path
        self._estimator = estimator

    @classmethod
    def load(cls, name: str, path: str) -> "JoblibScoringModel":
        """Load a model artifact from disk.

        Raises:
            ModelLoadError: If the artifact is missing or cannot be deserialized
        """
        try:
            estimator = joblib.load(path)
        except FileNotFoundError as e:
            raise ModelLoadError(f"{name} model artifact not found: {path}") from e
        except Exception as e:
            raise ModelLoadError(f"{name} model artifact could not be loaded from {path}: {e}") from e

        if not (hasattr(estimator, "predict_proba") or hasattr(estimator, "predict")):
            raise ModelLoadError(
                f"{name} model artifact {path} has no predict_proba() or predict()"
            )
        return cls(name, estimator, path=path)

    def score(self, vector: np.ndarray) -> float:
        if self._estimator is None:
            raise ModelUnavailableError(f"{self.name} model has been released")

        batch = np.asarray(vector, dtype=np.float64).reshape(1, -1)
        if hasattr(self._estimator, "predict_proba"):
            proba = np.asarray(self._estimator.predict_proba(batch), dtype=np.float64)
            return float(proba[0, -1])

        output = np.asarray(self._estimator.predict(batch), dtype=np.float64).ravel()
        if output.size != 1:
            raise InferenceError(
                f"{self.name} model returned {output.size} values, expected 1"
            )
        return float(output[0])

    def close(self) -> None:
        self._estimator = None


class InferenceEngine:
    """Owns the two scoring models for the life of a predictor session.

    A failed load leaves the engine unavailable: every later infer() call
    raises ModelUnavailableError instead of returning defaulted scores.
    """

    def __init__(
        self,
        models: Optional[Dict[str, ScoringModel]] = None,
        timeout_seconds: float = 5.0,
    ):
        """Initialize engine.

        Args:
            models: Pre-loaded models keyed by DEPRESSION_MODEL / ANXIETY_MODEL
            timeout_seconds: Upper bound on the joined model calls
        """
        self.timeout_seconds = timeout_seconds
        self._models: Dict[str, ScoringModel] = dict(models or {})
        self._load_error: Optional[str] = None
        self._released = False
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    def load(self, depression_path: str, anxiety_path: str) -> None:
        """Load both model artifacts.

        Raises:
            ModelLoadError: If either artifact fails to load. Neither model
                is kept in that case.
        """
        try:
            models = {
                DEPRESSION_MODEL: JoblibScoringModel.load(DEPRESSION_MODEL, depression_path),
                ANXIETY_MODEL: JoblibScoringModel.load(ANXIETY_MODEL, anxiety_path),
            }
        except ModelLoadError as e:
            self._load_error = e.message
            self._models = {}
            logger.error(
                "MODEL_LOAD_FAILED",
                extra={"error": e.message}
            )
            raise

        self._models = models
        self._load_error = None
        self._released = False
        logger.info(
            "MODELS_LOADED",
            extra={"depression_path": depression_path, "anxiety_path": anxiety_path}
        )

    @property
    def is_available(self) -> bool:
        return not self._released and all(name in self._models for name in MODEL_NAMES)

    def get_status(self) -> dict:
        """Get engine status for health checks."""
        return {
            "available": self.is_available,
            "loaded_models": sorted(self._models),
            "released": self._released,
            "error": self._load_error,
        }

    def _get_model(self, name: str) -> ScoringModel:
        if self._released:
            raise ModelUnavailableError(f"{name} model has been released")
        model = self._models.get(name)
        if model is None:
            reason = f": {self._load_error}" if self._load_error else ""
            raise ModelUnavailableError(f"{name} model is not loaded{reason}")
        return model

    def infer(self, name: str, vector: np.ndarray) -> float:
        """Score one normalized vector with the named model.

        The probability is not clamped; a value outside [0, 1] is reported
        as an InferenceError.
        """
        model = self._get_model(name)
        try:
            probability = model.score(vector)
        except PredictorError:
            raise
        except Exception as e:
            logger.error(
                "INFERENCE_FAILED",
                extra={"model": name, "error": str(e), "error_type": type(e).__name__}
            )
            raise InferenceError(f"{name} model failed during scoring: {e}") from e

        if not math.isfinite(probability) or not 0.0 <= probability <= 1.0:
            logger.error(
                "INFERENCE_OUT_OF_RANGE",
                extra={"model": name, "probability": probability}
            )
            raise InferenceError(
                f"{name} model returned {probability}, expected a probability in [0, 1]"
            )
        return probability

    def infer_pair(self, vector: np.ndarray) -> Tuple[float, float]:
        """Run both models on the same vector concurrently.

        Returns:
            (depression_probability, anxiety_probability)

        Raises:
            ModelUnavailableError: If a model is missing, released or the
                joined calls exceed timeout_seconds
            InferenceError: If a scoring call fails
        """
        for name in MODEL_NAMES:
            self._get_model(name)

        futures = self._submit_pair(vector)
        _, pending = wait(futures.values(), timeout=self.timeout_seconds)

        if pending:
            timed_out = [name for name, future in futures.items() if future in pending]
            for future in pending:
                future.cancel()
            logger.error(
                "INFERENCE_TIMEOUT",
                extra={"models": timed_out, "timeout_seconds": self.timeout_seconds}
            )
            raise ModelUnavailableError(
                f"{', '.join(timed_out)} model timed out after {self.timeout_seconds}s"
            )

        return (
            futures[DEPRESSION_MODEL].result(),
            futures[ANXIETY_MODEL].result(),
        )

    def _submit_pair(self, vector: np.ndarray) -> Dict[str, Future]:
        # Holding the lock keeps release() from shutting the executor down
        # between the released check and the submits.
        with self._lock:
            if self._released:
                raise ModelUnavailableError("models have been released")
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=len(MODEL_NAMES),
                    thread_name_prefix="wellness-inference",
                )
            return {
                name: self._executor.submit(self.infer, name, vector)
                for name in MODEL_NAMES
            }

    def release(self) -> None:
        """Close both models. Safe to call more than once."""
        with self._lock:
            if self._released:
                return
            self._released = True
            for model in self._models.values():
                model.close()
            self._models = {}
            if self._executor is not None:
                self._executor.shutdown(wait=False)
                self._executor = None

        logger.info("MODELS_RELEASED")
