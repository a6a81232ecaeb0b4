"""Shared fixtures for wellness service tests."""
import pytest

from cognify.services.wellness_service.inference import (
    ANXIETY_MODEL,
    DEPRESSION_MODEL,
    InferenceEngine,
)
from cognify.services.wellness_service.predictor import WellnessPredictor

from .fakes import ConstantModel


@pytest.fixture
def depression_model():
    return ConstantModel(DEPRESSION_MODEL, 0.25)


@pytest.fixture
def anxiety_model():
    return ConstantModel(ANXIETY_MODEL, 0.8)


@pytest.fixture
def engine(depression_model, anxiety_model):
    engine = InferenceEngine(
        models={DEPRESSION_MODEL: depression_model, ANXIETY_MODEL: anxiety_model},
        timeout_seconds=2.0,
    )
    yield engine
    engine.release()


@pytest.fixture
def predictor(engine):
    predictor = WellnessPredictor(engine=engine)
    yield predictor
    predictor.close()
