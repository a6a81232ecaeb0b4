"""Wellness Service HTTP handler.

Host applications submit a completed questionnaire to /predict and get
the wellness assessment back. Failures are returned as
{"error": {"kind": ..., "message": ...}} and never as a stack trace.

Raw answers are never logged; respondent ids are hashed first.
"""
import atexit
import logging
import os
import threading
from typing import Optional

from flask import Flask, jsonify, request

from cognify.shared.utils import RespondentHasher
from .config import WellnessConfig
from .errors import (
    InferenceError,
    InvalidInputError,
    ModelLoadError,
    ModelUnavailableError,
    PredictorError,
)
from .predictor import WellnessPredictor

logger = logging.getLogger(__name__)

app = Flask(__name__)

config = WellnessConfig.from_env()
respondent_hasher = RespondentHasher(config.respondent_hash_salt)

_predictor: Optional[WellnessPredictor] = None
_predictor_lock = threading.Lock()

ERROR_STATUS = {
    InvalidInputError: 400,
    ModelLoadError: 503,
    ModelUnavailableError: 503,
    InferenceError: 500,
}


def get_predictor() -> WellnessPredictor:
    """Return the session predictor, loading models on first use."""
    global _predictor
    with _predictor_lock:
        if _predictor is None:
            _predictor = WellnessPredictor.from_config(config)
        return _predictor


def set_predictor(predictor: Optional[WellnessPredictor]) -> None:
    """Replace the session predictor (used by tests and embedding hosts)."""
    global _predictor
    with _predictor_lock:
        _predictor = predictor


@atexit.register
def _close_predictor() -> None:
    if _predictor is not None:
        _predictor.close()


def _error_response(error: PredictorError):
    status = ERROR_STATUS.get(type(error), 500)
    return jsonify({"error": error.to_dict()}), status


@app.route("/health", methods=["GET"])
def health():
    """Liveness check."""
    return jsonify({
        "status": "healthy",
        "service": "wellness-service",
    }), 200


@app.route("/ready", methods=["GET"])
def ready():
    """Readiness check - both models must be loaded.

    Returns:
        200 if ready, 503 if not
    """
    try:
        predictor = get_predictor()
    except ModelLoadError as e:
        return jsonify({"status": "not_ready", "reason": e.message}), 503

    status = predictor.get_status()
    if not predictor.is_ready:
        return jsonify({
            "status": "not_ready",
            "reason": status["engine"]["error"] or "models_unavailable",
        }), 503
    return jsonify({
        "status": "ready",
        "normalization_version": status["normalization_version"],
    }), 200


@app.route("/predict", methods=["POST"])
def predict():
    """Assess a completed questionnaire.

    Request Body:
        {
            "responses": [25 integers in questionnaire order],
            "respondent_id": "user_123" (optional)
        }

    Response:
        PredictionResult fields (comprehensive_score, probabilities,
        subscale sums, wellness percentages, engineered features)
    """
    data = request.get_json(silent=True)
    if not data:
        logger.warning("PREDICT_REQUEST_INVALID", extra={"reason": "empty_body"})
        return _error_response(InvalidInputError("Request body required"))
    if not isinstance(data, dict):
        logger.warning("PREDICT_REQUEST_INVALID", extra={"reason": "not_an_object"})
        return _error_response(InvalidInputError("Request body must be a JSON object"))

    respondent_hash = respondent_hasher.digest(data.get("respondent_id"))

    try:
        result = get_predictor().predict(data.get("responses"))
    except PredictorError as e:
        logger.warning(
            "PREDICT_FAILED",
            extra={"kind": e.kind, "respondent_hash": respondent_hash}
        )
        return _error_response(e)
    except Exception as e:
        logger.error(
            "PREDICT_ERROR",
            extra={"error": str(e), "error_type": type(e).__name__}
        )
        return _error_response(PredictorError(f"Error during prediction: {e}"))

    logger.info(
        "PREDICT_SERVED",
        extra={
            "respondent_hash": respondent_hash,
            "comprehensive_score": result.comprehensive_score,
        }
    )
    return jsonify(result.to_dict()), 200


@app.route("/self-test", methods=["POST"])
def self_test():
    """Run the two built-in questionnaires through the full pipeline."""
    try:
        report = get_predictor().self_test()
    except PredictorError as e:
        logger.warning("SELF_TEST_FAILED", extra={"kind": e.kind})
        return _error_response(e)
    except Exception as e:
        logger.error(
            "SELF_TEST_ERROR",
            extra={"error": str(e), "error_type": type(e).__name__}
        )
        return _error_response(PredictorError(f"Error during testing: {e}"))

    return jsonify(report.to_dict()), 200


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = int(os.getenv("PORT", "8005"))
    app.run(host="0.0.0.0", port=port, debug=False)
