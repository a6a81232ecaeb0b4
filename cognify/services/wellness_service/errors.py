"""Wellness predictor errors.

Every error carries a machine-readable kind so the HTTP and CLI
boundaries can return a structured payload instead of a stack trace.
"""
from typing import Any, Dict, Optional


class PredictorError(Exception):
    """Base exception for wellness predictor errors."""
    kind = "PREDICTION_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class InvalidInputError(PredictorError):
    """Wrong response count, non-integer answer or out-of-range answer."""
    kind = "INVALID_INPUT"

    def __init__(self, message: str, observed_count: Optional[int] = None):
        super().__init__(message)
        self.observed_count = observed_count

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        if self.observed_count is not None:
            payload["observed_count"] = self.observed_count
        return payload


class ModelLoadError(PredictorError):
    """Model or normalization artifact missing, corrupt or mismatched."""
    kind = "MODEL_LOAD_ERROR"


class ModelUnavailableError(PredictorError):
    """Inference attempted without a loaded model, after release, or timed out."""
    kind = "MODEL_UNAVAILABLE"


class InferenceError(PredictorError):
    """The scoring call itself failed or returned an invalid probability."""
    kind = "INFERENCE_ERROR"
