# tests/test_operational_features.py
"""
Tests for operational features (health endpoints, metrics, security headers, logging, CLI)
"""

import logging
import os
from unittest.mock import patch

from werkzeug.security import check_password_hash

from conftest import build_app
from Journal_app.logging_config import SecretMaskingFilter
from Journal_app.rate_limiting import RATE_LIMITS


class TestHealthEndpoints:
    """Test health endpoints"""

    def test_healthz_endpoint(self, client):
        """Test /healthz endpoint returns ok with metadata"""
        with patch.dict(os.environ, {'APP_VERSION': 'test-1.0'}):
            response = client.get('/healthz')

        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'ok'
        assert data['version'] == 'test-1.0'
        assert data['service'] == 'trade-journal-server'
        assert 'timestamp' in data

    def test_api_healthcheck(self, client):
        response = client.get('/api/healthcheck')
        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok'}

    def test_livez_endpoint(self, client):
        response = client.get('/livez')
        assert response.status_code == 200
        assert response.get_json()['status'] == 'ok'

    def test_readyz_reports_backend(self, app, client):
        response = client.get('/readyz')
        assert response.status_code == 200
        data = response.get_json()
        assert data['checks']['storage'] is True
        assert data['backend'] == app.config['STORAGE_BACKEND']

    def test_readyz_when_storage_unavailable(self, memory_app):
        client = memory_app.test_client()
        with patch.object(memory_app.storage, 'ping', side_effect=RuntimeError('down')):
            response = client.get('/readyz')

        assert response.status_code == 503
        data = response.get_json()
        assert data['status'] == 'error'
        assert data['checks']['storage'] is False


class TestMetricsEndpoint:
    """Test metrics endpoint"""

    def test_metrics_disabled_by_default(self, memory_app):
        response = memory_app.test_client().get('/metrics')
        assert response.status_code == 404

    def test_metrics_enabled(self):
        app = build_app(ENABLE_METRICS=True)
        client = app.test_client()
        client.post('/api/login', json={'username': 'demo', 'password': 'demo'})
        client.post('/api/journal', json={
            'title': 'note', 'content': 'flat day', 'date': '2024-03-04T21:00:00Z'})

        response = client.get('/metrics')
        assert response.status_code == 200
        body = response.get_data(as_text=True)
        assert 'http_requests_total' in body
        assert app._metrics_registry.get_sample_value(
            'journal_writes_total', {'kind': 'journal', 'action': 'create'}) == 1.0


class TestSecurityMiddleware:
    """Security headers and request limits"""

    def test_security_headers(self, memory_app):
        response = memory_app.test_client().get('/api/healthcheck')
        assert response.headers['X-Frame-Options'] == 'DENY'
        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['Cache-Control'] == 'no-store'

    def test_request_id_propagated(self, memory_app):
        client = memory_app.test_client()
        response = client.get('/livez', headers={'X-Request-ID': 'req-123'})
        assert response.headers['X-Request-ID'] == 'req-123'

        generated = client.get('/livez').headers['X-Request-ID']
        assert len(generated) == 36

    def test_oversized_body_rejected(self):
        app = build_app(MAX_REQUEST_BYTES=256)
        client = app.test_client()
        client.post('/api/login', json={'username': 'demo', 'password': 'demo'})
        response = client.post('/api/journal', json={
            'title': 'long', 'content': 'x' * 1024, 'date': '2024-03-04'})
        assert response.status_code == 413


class TestRateLimiting:
    """Rate limit configuration"""

    def test_rate_limit_defaults(self):
        assert RATE_LIMITS['login'] == os.environ.get('RATE_LIMITS_LOGIN', '10/minute')
        assert RATE_LIMITS['register'] == os.environ.get('RATE_LIMITS_REGISTER', '5/minute')
        assert 'write' in RATE_LIMITS
        assert 'global_ceiling' in RATE_LIMITS


class TestLogging:
    """Secret masking in log records"""

    def test_password_masked(self):
        masked = SecretMaskingFilter.mask('login payload password=hunter2 user=demo')
        assert 'hunter2' not in masked
        assert 'user=demo' in masked

    def test_filter_masks_record_args(self):
        record = logging.LogRecord('test', logging.INFO, __file__, 1,
                                   'body %s', ('{"newPassword": "s3cret"}',), None)
        assert SecretMaskingFilter().filter(record) is True
        assert 's3cret' not in record.getMessage()


class TestCli:
    """Flask CLI commands"""

    def test_hash_password(self, memory_app):
        result = memory_app.test_cli_runner().invoke(args=['hash-password', 'pw-123'])
        assert result.exit_code == 0
        assert check_password_hash(result.output.strip(), 'pw-123')

    def test_create_user(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['create-user', 'cli-user', '--password', 'pw-123', '--name', 'Cli'])
        assert result.exit_code == 0, result.output
        assert 'Created user cli-user' in result.output

        with app.app_context():
            user = app.storage.get_user_by_username('cli-user')
            assert user.name == 'Cli'
            assert user.check_password('pw-123')

        duplicate = runner.invoke(args=['create-user', 'cli-user', '--password', 'pw-123'])
        assert duplicate.exit_code != 0
