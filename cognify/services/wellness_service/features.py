"""Feature engineering for the wellness models.

The models consume 28 features: the 25 raw answers followed by three
derived features in a fixed order (ratio, wellbeing+social, distress).
"""
from dataclasses import dataclass
from typing import Sequence, Tuple

from cognify.shared.models import Subscale
from .config import FEATURE_COUNT, SUBSCALE_BY_NAME

DEP_ANX_RATIO_INDEX = 25
WELLBEING_SOCIAL_SUM_INDEX = 26
TOTAL_DISTRESS_INDEX = 27


@dataclass(frozen=True)
class EngineeredFeatures:
    """Subscale sums, derived features and the model feature vector."""
    depression_score: int
    anxiety_score: int
    wellbeing_score: int
    social_score: int
    dep_anx_ratio: float
    wellbeing_social_sum: int
    total_distress: int
    vector: Tuple[float, ...]

    def __post_init__(self):
        if len(self.vector) != FEATURE_COUNT:
            raise ValueError(
                f"Feature vector must have {FEATURE_COUNT} values, got {len(self.vector)}"
            )


def subscale_sum(responses: Sequence[int], subscale: Subscale) -> int:
    spec = SUBSCALE_BY_NAME[subscale]
    return sum(responses[spec.start:spec.stop])


def engineer_features(responses: Sequence[int]) -> EngineeredFeatures:
    """Derive subscale sums and the 28-feature vector from validated answers.

    The ratio divides by anxiety + 1 so a zero anxiety score is defined.
    """
    depression = subscale_sum(responses, Subscale.DEPRESSION)
    anxiety = subscale_sum(responses, Subscale.ANXIETY)
    wellbeing = subscale_sum(responses, Subscale.WELLBEING)
    social = subscale_sum(responses, Subscale.SOCIAL)

    dep_anx_ratio = depression / (anxiety + 1)
    wellbeing_social_sum = wellbeing + social
    total_distress = depression + anxiety

    vector = tuple(float(value) for value in responses) + (
        dep_anx_ratio,
        float(wellbeing_social_sum),
        float(total_distress),
    )

    return EngineeredFeatures(
        depression_score=depression,
        anxiety_score=anxiety,
        wellbeing_score=wellbeing,
        social_score=social,
        dep_anx_ratio=dep_anx_ratio,
        wellbeing_social_sum=wellbeing_social_sum,
        total_distress=total_distress,
        vector=vector,
    )
