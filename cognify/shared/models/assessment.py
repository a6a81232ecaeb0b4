"""Assessment domain models.

Defines the questionnaire subscales and the immutable result records
produced by the wellness predictor.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class Subscale(Enum):
    """Questionnaire sections, in answer order.

    Each section occupies a fixed contiguous block of the 25 answers.
    """
    DEPRESSION = "depression"   # PHQ-9, answers 1-9
    ANXIETY = "anxiety"         # GAD-7, answers 10-16
    WELLBEING = "wellbeing"     # WHO-5, answers 17-21
    SOCIAL = "social"           # Social functioning, answers 22-25


@dataclass(frozen=True)
class PredictionResult:
    """Final assessment for one questionnaire submission.

    Immutable - returned once per request and never updated.
    Percentages and the ratio are already rounded to 2 decimals.
    """
    comprehensive_score: float
    depression_probability: float
    anxiety_probability: float

    depression_score: int
    anxiety_score: int
    wellbeing_score: int
    social_functioning_score: int

    depression_wellness: float
    anxiety_wellness: float
    wellbeing_wellness: float
    social_wellness: float

    dep_anx_ratio: float
    wellbeing_social_sum: int
    total_distress: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            # Main results
            "comprehensive_score": self.comprehensive_score,
            "depression_probability": self.depression_probability,
            "anxiety_probability": self.anxiety_probability,
            # Component scores
            "depression_score": self.depression_score,
            "anxiety_score": self.anxiety_score,
            "wellbeing_score": self.wellbeing_score,
            "social_functioning_score": self.social_functioning_score,
            # Wellness components
            "depression_wellness": self.depression_wellness,
            "anxiety_wellness": self.anxiety_wellness,
            "wellbeing_wellness": self.wellbeing_wellness,
            "social_wellness": self.social_wellness,
            # Engineered features
            "dep_anx_ratio": self.dep_anx_ratio,
            "wellbeing_social_sum": self.wellbeing_social_sum,
            "total_distress": self.total_distress,
        }


@dataclass(frozen=True)
class SelfTestReport:
    """Results of running the two fixed smoke-test questionnaires."""
    normal_case: PredictionResult
    depressed_case: PredictionResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "normal_case": self.normal_case.to_dict(),
            "depressed_case": self.depressed_case.to_dict(),
        }
