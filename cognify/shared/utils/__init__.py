"""Shared utilities for Cognify."""
from .pii import RespondentHasher
from .rounding import round2

__all__ = ["RespondentHasher", "round2"]
