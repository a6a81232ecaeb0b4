"""Wellness Service configuration and questionnaire constants.

Questionnaire layout: PHQ-9 (9 items), GAD-7 (7 items), WHO-5 (5 items)
and a 4-item social-functioning block, answered in that order.
"""
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from cognify.shared.models import Subscale

RESPONSE_COUNT = 25
FEATURE_COUNT = 28


@dataclass(frozen=True)
class SubscaleSpec:
    """Position and Likert range of one questionnaire section."""
    subscale: Subscale
    start: int          # inclusive answer index
    stop: int           # exclusive answer index
    item_min: int = 0
    item_max: int = 4

    @property
    def item_count(self) -> int:
        return self.stop - self.start

    @property
    def max_sum(self) -> int:
        """Largest possible subscale sum."""
        return self.item_count * self.item_max


SUBSCALES: Tuple[SubscaleSpec, ...] = (
    SubscaleSpec(Subscale.DEPRESSION, 0, 9),               # max 36
    SubscaleSpec(Subscale.ANXIETY, 9, 16),                 # max 28
    SubscaleSpec(Subscale.WELLBEING, 16, 21, item_max=5),  # max 25
    SubscaleSpec(Subscale.SOCIAL, 21, 25),                 # max 16
)

SUBSCALE_BY_NAME = {spec.subscale: spec for spec in SUBSCALES}


@dataclass(frozen=True)
class ScoringWeights:
    """Weights of the four wellness percentages in the comprehensive score."""
    DEPRESSION: float = 0.30
    ANXIETY: float = 0.30
    WELLBEING: float = 0.25
    SOCIAL: float = 0.15


# Feature order the models and normalization constants were trained on
FEATURE_NAMES: Tuple[str, ...] = (
    "q1_phq", "q2_phq", "q3_phq", "q4_phq", "q5_phq",
    "q6_phq", "q7_phq", "q8_phq", "q9_phq",
    "q10_gad", "q11_gad", "q12_gad", "q13_gad", "q14_gad", "q15_gad", "q16_gad",
    "q17_who5", "q18_who5", "q19_who5", "q20_who5", "q21_who5",
    "q22_life", "q23_life", "q24_life", "q25_life",
    "dep_anx_ratio",
    "wellbeing_social_sum",
    "total_distress",
)

# StandardScaler parameters fitted on the training corpus
NORMALIZATION_VERSION = "2024.1"

FEATURE_MEANS: Tuple[float, ...] = (
    # PHQ-9 (q1-q9)
    1.95131086, 2.08988764, 2.1011236, 1.99625468, 2.06367041,
    1.83146067, 2.03745318, 1.8576779, 1.97003745,
    # GAD-7 (q10-q16)
    1.917603, 2.082397, 2.0411985, 1.94756554, 2.01498127, 1.917603, 2.05243446,
    # WHO-5 (q17-q21)
    2.65543071, 2.44569288, 2.41198502, 2.43071161, 2.49812734,
    # Social functioning (q22-q25)
    1.97003745, 2.10486891, 1.84644195, 1.93632959,
    # Engineered
    1.26997233,
    20.29962547,
    31.87265918,
)

FEATURE_STDS: Tuple[float, ...] = (
    # PHQ-9 (q1-q9)
    1.4304959, 1.39802254, 1.36058709, 1.44952046, 1.44294435,
    1.42136682, 1.44256517, 1.34441801, 1.40326038,
    # GAD-7 (q10-q16)
    1.39042642, 1.36596849, 1.44376072, 1.42643044, 1.43516572, 1.47156222, 1.39724973,
    # WHO-5 (q17-q21)
    1.73561463, 1.63295021, 1.70335827, 1.71517589, 1.61076559,
    # Social functioning (q22-q25)
    1.42445245, 1.39965709, 1.50741503, 1.44812626,
    # Engineered
    0.44126218,
    4.21519898,
    5.70881125,
)

# Smoke-test questionnaires
NORMAL_CASE_RESPONSES: Tuple[int, ...] = (
    0, 0, 0, 1, 0, 0, 0, 0, 0,
    0, 0, 0, 1, 0, 0, 0,
    4, 4, 4, 4, 4,
    0, 0, 0, 3,
)
DEPRESSED_CASE_RESPONSES: Tuple[int, ...] = (
    3, 3, 2, 3, 3, 2, 3, 2, 2,
    3, 3, 2, 3, 3, 2, 3,
    0, 1, 1, 0, 1,
    3, 3, 3, 0,
)


@dataclass(frozen=True)
class WellnessConfig:
    """Runtime configuration for the wellness predictor."""

    model_dir: str = "models"
    depression_model_file: str = "depression_model.joblib"
    anxiety_model_file: str = "anxiety_model.joblib"

    # Optional JSON artifact overriding the embedded normalization constants
    normalization_file: Optional[str] = None

    # Upper bound on each model call (seconds)
    inference_timeout_seconds: float = 5.0

    # Reject answers outside each subscale's Likert range
    strict_ranges: bool = True

    respondent_hash_salt: str = "default_dev_salt_change_in_production_32chars"

    @property
    def depression_model_path(self) -> str:
        return os.path.join(self.model_dir, self.depression_model_file)

    @property
    def anxiety_model_path(self) -> str:
        return os.path.join(self.model_dir, self.anxiety_model_file)

    @classmethod
    def from_env(cls) -> "WellnessConfig":
        """Create config from environment variables.

        Environment variables:
            WELLNESS_MODEL_DIR: Directory holding model artifacts (default models)
            WELLNESS_DEPRESSION_MODEL: Depression model file name
            WELLNESS_ANXIETY_MODEL: Anxiety model file name
            WELLNESS_NORMALIZATION_FILE: Normalization JSON (optional)
            WELLNESS_INFERENCE_TIMEOUT_SECONDS: Per-call timeout (default 5.0)
            WELLNESS_STRICT_RANGES: Enforce Likert ranges (default true)
            RESPONDENT_HASH_SALT: Salt for respondent id hashing
        """
        defaults = cls()
        return cls(
            model_dir=os.getenv("WELLNESS_MODEL_DIR", defaults.model_dir),
            depression_model_file=os.getenv(
                "WELLNESS_DEPRESSION_MODEL", defaults.depression_model_file
            ),
            anxiety_model_file=os.getenv(
                "WELLNESS_ANXIETY_MODEL", defaults.anxiety_model_file
            ),
            normalization_file=os.getenv("WELLNESS_NORMALIZATION_FILE") or None,
            inference_timeout_seconds=float(
                os.getenv("WELLNESS_INFERENCE_TIMEOUT_SECONDS", "5.0")
            ),
            strict_ranges=os.getenv("WELLNESS_STRICT_RANGES", "true").lower() == "true",
            respondent_hash_salt=os.getenv(
                "RESPONDENT_HASH_SALT", defaults.respondent_hash_salt
            ),
        )
