"""Tests for feature engineering."""
import pytest

from cognify.shared.models import Subscale
from cognify.services.wellness_service.features import (
    DEP_ANX_RATIO_INDEX,
    TOTAL_DISTRESS_INDEX,
    WELLBEING_SOCIAL_SUM_INDEX,
    engineer_features,
    subscale_sum,
)

from .fakes import DEPRESSED_RESPONSES, NORMAL_RESPONSES


class TestSubscaleSums:

    def test_normal_case(self):
        """Normal case subscale sums."""
        features = engineer_features(NORMAL_RESPONSES)

        assert features.depression_score == 1
        assert features.anxiety_score == 1
        assert features.wellbeing_score == 20
        assert features.social_score == 3

    def test_depressed_case(self):
        """Depressed case subscale sums."""
        features = engineer_features(DEPRESSED_RESPONSES)

        assert features.depression_score == 23
        assert features.anxiety_score == 19
        assert features.wellbeing_score == 3
        assert features.social_score == 9

    def test_subscales_partition_all_answers(self):
        """Every answer should belong to exactly one subscale."""
        responses = list(range(25))
        total = sum(subscale_sum(responses, subscale) for subscale in Subscale)
        assert total == sum(responses)

    def test_maximum_sums(self):
        """Top answers should give the subscale maxima."""
        responses = [4] * 16 + [5] * 5 + [4] * 4
        features = engineer_features(responses)

        assert features.depression_score == 36
        assert features.anxiety_score == 28
        assert features.wellbeing_score == 25
        assert features.social_score == 16


class TestEngineeredFeatures:

    def test_normal_case(self):
        """Normal case derived features."""
        features = engineer_features(NORMAL_RESPONSES)

        assert features.dep_anx_ratio == 0.5
        assert features.wellbeing_social_sum == 23
        assert features.total_distress == 2

    def test_depressed_case(self):
        """Depressed case derived features."""
        features = engineer_features(DEPRESSED_RESPONSES)

        assert features.dep_anx_ratio == 23 / 20
        assert features.wellbeing_social_sum == 12
        assert features.total_distress == 42

    def test_ratio_with_zero_anxiety(self):
        """Ratio divisor keeps the +1 when anxiety is zero."""
        responses = [2] * 9 + [0] * 7 + [0] * 9
        features = engineer_features(responses)

        assert features.anxiety_score == 0
        assert features.dep_anx_ratio == 18.0

    def test_all_zero_ratio(self):
        """All-zero answers give a zero ratio."""
        features = engineer_features([0] * 25)
        assert features.dep_anx_ratio == 0.0


class TestFeatureVector:

    def test_length_is_28(self):
        """Feature vector should hold 28 values."""
        assert len(engineer_features(NORMAL_RESPONSES).vector) == 28

    def test_raw_answers_first_in_order(self):
        """Raw answers should lead the vector unchanged."""
        vector = engineer_features(DEPRESSED_RESPONSES).vector
        assert vector[:25] == tuple(float(v) for v in DEPRESSED_RESPONSES)

    def test_derived_feature_positions(self):
        """Derived features sit at positions 25, 26 and 27."""
        features = engineer_features(DEPRESSED_RESPONSES)

        assert features.vector[DEP_ANX_RATIO_INDEX] == features.dep_anx_ratio
        assert features.vector[WELLBEING_SOCIAL_SUM_INDEX] == 12.0
        assert features.vector[TOTAL_DISTRESS_INDEX] == 42.0
        assert (DEP_ANX_RATIO_INDEX, WELLBEING_SOCIAL_SUM_INDEX, TOTAL_DISTRESS_INDEX) == (25, 26, 27)

    def test_wrong_vector_length_rejected(self):
        """A short feature vector should not be constructible."""
        features = engineer_features(NORMAL_RESPONSES)
        with pytest.raises(ValueError):
            type(features)(
                depression_score=1,
                anxiety_score=1,
                wellbeing_score=20,
                social_score=3,
                dep_anx_ratio=0.5,
                wellbeing_social_sum=23,
                total_distress=2,
                vector=features.vector[:27],
            )
