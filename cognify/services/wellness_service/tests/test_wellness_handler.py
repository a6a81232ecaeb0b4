"""Tests for Wellness Service HTTP handler."""
import json
import logging
import threading
import time

import pytest
from unittest.mock import MagicMock, patch

from cognify.services.wellness_service.errors import InferenceError
from cognify.services.wellness_service.inference import InferenceEngine
from cognify.services.wellness_service.predictor import WellnessPredictor

from .fakes import NORMAL_RESPONSES


@pytest.fixture
def handler_module():
    from cognify.services.wellness_service import handler
    yield handler
    handler.set_predictor(None)


@pytest.fixture
def client(handler_module, predictor):
    handler_module.set_predictor(predictor)
    handler_module.app.config['TESTING'] = True
    with handler_module.app.test_client() as client:
        yield client


@pytest.fixture
def unavailable_client(handler_module):
    handler_module.set_predictor(WellnessPredictor(engine=InferenceEngine()))
    handler_module.app.config['TESTING'] = True
    with handler_module.app.test_client() as client:
        yield client


class TestGetPredictor:

    def test_concurrent_first_requests_build_one_predictor(self, handler_module):
        """Simultaneous first calls should load the models only once."""
        handler_module.set_predictor(None)
        built = MagicMock()

        def slow_build(config):
            time.sleep(0.05)
            return built

        with patch.object(
            handler_module.WellnessPredictor, 'from_config', side_effect=slow_build
        ) as from_config:
            results = []
            threads = [
                threading.Thread(target=lambda: results.append(handler_module.get_predictor()))
                for _ in range(4)
            ]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        assert from_config.call_count == 1
        assert all(result is built for result in results)
        assert len(results) == 4


class TestHealthEndpoint:

    def test_health_returns_200(self, client):
        """Health check should return 200."""
        response = client.get('/health')
        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['status'] == 'healthy'
        assert data['service'] == 'wellness-service'


class TestReadyEndpoint:

    def test_ready_with_models(self, client):
        """Ready check should return 200 when models are loaded."""
        response = client.get('/ready')
        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['status'] == 'ready'
        assert data['normalization_version'] == '2024.1'

    def test_not_ready_without_models(self, unavailable_client):
        """Ready check should return 503 without models."""
        response = unavailable_client.get('/ready')
        assert response.status_code == 503
        assert json.loads(response.data)['status'] == 'not_ready'


class TestPredictEndpoint:

    def test_predict_success(self, client):
        """Valid questionnaire should return the assessment."""
        response = client.post(
            '/predict',
            json={'responses': NORMAL_RESPONSES, 'respondent_id': 'user_123'},
        )

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['comprehensive_score'] == 80.91
        assert data['depression_probability'] == 25.0
        assert data['anxiety_probability'] == 80.0
        assert data['social_functioning_score'] == 3
        assert data['dep_anx_ratio'] == 0.5

    def test_wrong_count_returns_structured_error(self, client):
        """Wrong count should return 400 with the observed count."""
        response = client.post('/predict', json={'responses': [0] * 24})

        assert response.status_code == 400
        error = json.loads(response.data)['error']
        assert error['kind'] == 'INVALID_INPUT'
        assert error['observed_count'] == 24
        assert 'got 24' in error['message']

    def test_missing_responses(self, client):
        """Missing responses should return 400."""
        response = client.post('/predict', json={'respondent_id': 'user_123'})

        assert response.status_code == 400
        assert json.loads(response.data)['error']['kind'] == 'INVALID_INPUT'

    def test_empty_body(self, client):
        """Empty body should return 400."""
        response = client.post('/predict', data='', content_type='application/json')

        assert response.status_code == 400
        assert json.loads(response.data)['error']['message'] == 'Request body required'

    def test_array_body_returns_structured_error(self, client):
        """A bare JSON array body should return 400 as JSON."""
        response = client.post('/predict', json=NORMAL_RESPONSES)

        assert response.status_code == 400
        assert response.is_json
        assert json.loads(response.data)['error']['kind'] == 'INVALID_INPUT'

    def test_scalar_responses_returns_400(self, client):
        """A scalar responses field should return 400, not 500."""
        response = client.post('/predict', json={'responses': 5})

        assert response.status_code == 400
        error = json.loads(response.data)['error']
        assert error['kind'] == 'INVALID_INPUT'
        assert 'sequence of integers' in error['message']

    def test_respondent_id_is_hashed_in_logs(self, client, caplog):
        """Log records should carry the respondent hash, never the raw id."""
        with caplog.at_level(logging.INFO):
            client.post(
                '/predict',
                json={'responses': NORMAL_RESPONSES, 'respondent_id': 'user_123'},
            )

        served = [r for r in caplog.records if r.getMessage() == 'PREDICT_SERVED']
        assert len(served) == 1
        assert len(served[0].respondent_hash) == 64
        assert 'user_123' not in caplog.text

    def test_models_unavailable_returns_503(self, unavailable_client):
        """Unavailable models should return 503 without scores."""
        response = unavailable_client.post('/predict', json={'responses': NORMAL_RESPONSES})

        assert response.status_code == 503
        error = json.loads(response.data)['error']
        assert error['kind'] == 'MODEL_UNAVAILABLE'
        assert 'comprehensive_score' not in json.loads(response.data)

    def test_inference_error_returns_500(self, handler_module):
        """Inference errors should return 500."""
        broken = MagicMock()
        broken.predict.side_effect = InferenceError("depression model failed during scoring")
        handler_module.set_predictor(broken)

        with handler_module.app.test_client() as client:
            response = client.post('/predict', json={'responses': NORMAL_RESPONSES})

        assert response.status_code == 500
        assert json.loads(response.data)['error']['kind'] == 'INFERENCE_ERROR'

    def test_unexpected_error_has_no_trace(self, handler_module):
        """Unexpected errors should return 500 without a trace."""
        broken = MagicMock()
        broken.predict.side_effect = KeyError("boom")
        handler_module.set_predictor(broken)

        with handler_module.app.test_client() as client:
            response = client.post('/predict', json={'responses': NORMAL_RESPONSES})

        assert response.status_code == 500
        error = json.loads(response.data)['error']
        assert error['kind'] == 'PREDICTION_ERROR'
        assert 'Traceback' not in error['message']


class TestSelfTestEndpoint:

    def test_self_test_returns_both_cases(self, client):
        """Self-test should return both cases."""
        response = client.post('/self-test')

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['normal_case']['depression_score'] == 1
        assert data['depressed_case']['depression_score'] == 23
        assert data['depressed_case']['anxiety_score'] == 19

    def test_self_test_without_models(self, unavailable_client):
        """Self-test without models should return 503."""
        response = unavailable_client.post('/self-test')

        assert response.status_code == 503
        assert json.loads(response.data)['error']['kind'] == 'MODEL_UNAVAILABLE'
