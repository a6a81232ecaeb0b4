"""Shared domain models for Cognify."""
from .assessment import (
    Subscale,
    PredictionResult,
    SelfTestReport,
)

__all__ = [
    "Subscale",
    "PredictionResult",
    "SelfTestReport",
]
