"""Score aggregation.

Combines subscale sums and model probabilities into wellness percentages
and the weighted comprehensive score. Pure arithmetic, no I/O.
"""
from typing import Optional

from cognify.shared.models import PredictionResult, Subscale
from cognify.shared.utils import round2
from .config import SUBSCALE_BY_NAME, ScoringWeights
from .features import EngineeredFeatures


def inverse_wellness(score: int, max_sum: int) -> float:
    """Symptom subscale as a health percentage (higher = fewer symptoms)."""
    return max(0.0, (max_sum - score) / max_sum) * 100


def direct_wellness(score: int, max_sum: int) -> float:
    """Positive subscale as a percentage of its maximum. Not clamped."""
    return (score / max_sum) * 100


def aggregate_scores(
    features: EngineeredFeatures,
    depression_output: float,
    anxiety_output: float,
    weights: Optional[ScoringWeights] = None,
) -> PredictionResult:
    """Build the final result from engineered features and model outputs.

    Args:
        features: Subscale sums and derived features
        depression_output: Depression model probability (0.0 to 1.0)
        anxiety_output: Anxiety model probability (0.0 to 1.0)
        weights: Comprehensive score weights

    Returns:
        PredictionResult with percentages and ratio rounded to 2 decimals
    """
    weights = weights or ScoringWeights()

    depression_wellness = inverse_wellness(
        features.depression_score, SUBSCALE_BY_NAME[Subscale.DEPRESSION].max_sum
    )
    anxiety_wellness = inverse_wellness(
        features.anxiety_score, SUBSCALE_BY_NAME[Subscale.ANXIETY].max_sum
    )
    wellbeing_wellness = direct_wellness(
        features.wellbeing_score, SUBSCALE_BY_NAME[Subscale.WELLBEING].max_sum
    )
    social_wellness = direct_wellness(
        features.social_score, SUBSCALE_BY_NAME[Subscale.SOCIAL].max_sum
    )

    comprehensive_score = (
        depression_wellness * weights.DEPRESSION
        + anxiety_wellness * weights.ANXIETY
        + wellbeing_wellness * weights.WELLBEING
        + social_wellness * weights.SOCIAL
    )

    return PredictionResult(
        comprehensive_score=round2(comprehensive_score),
        depression_probability=round2(depression_output * 100),
        anxiety_probability=round2(anxiety_output * 100),
        depression_score=features.depression_score,
        anxiety_score=features.anxiety_score,
        wellbeing_score=features.wellbeing_score,
        social_functioning_score=features.social_score,
        depression_wellness=round2(depression_wellness),
        anxiety_wellness=round2(anxiety_wellness),
        wellbeing_wellness=round2(wellbeing_wellness),
        social_wellness=round2(social_wellness),
        dep_anx_ratio=round2(features.dep_anx_ratio),
        wellbeing_social_sum=features.wellbeing_social_sum,
        total_distress=features.total_distress,
    )
