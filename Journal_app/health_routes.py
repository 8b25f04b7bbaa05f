# Journal_app/health_routes.py
"""
Health and observability endpoints for operational monitoring
"""

import os
from datetime import datetime
from flask import Blueprint, jsonify, current_app

from .storage import get_storage

health_bp = Blueprint('health', __name__)


@health_bp.route('/healthz', methods=['GET'])
def health_check():
    """
    Fast, in-process health check - returns ok + version + time
    This should always be fast and not depend on external services.
    """
    return jsonify({
        'status': 'ok',
        'version': os.environ.get('APP_VERSION', 'unknown'),
        'timestamp': datetime.utcnow().isoformat() + 'Z',
        'service': 'trade-journal-server'
    })


@health_bp.route('/api/healthcheck', methods=['GET'])
def api_healthcheck():
    return jsonify({'status': 'ok'})


@health_bp.route('/livez', methods=['GET'])
def liveness_check():
    """Liveness check - always ok while the process is alive"""
    return jsonify({
        'status': 'ok',
        'timestamp': datetime.utcnow().isoformat() + 'Z'
    })


@health_bp.route('/readyz', methods=['GET'])
def readiness_check():
    """
    Readiness check - verifies the storage backend answers
    """
    checks = {'storage': False}
    overall_status = 'ok'

    try:
        checks['storage'] = bool(get_storage().ping())
    except Exception as e:
        current_app.logger.error(f"Storage health check failed: {e}")

    if not checks['storage']:
        overall_status = 'error'

    response_data = {
        'status': overall_status,
        'timestamp': datetime.utcnow().isoformat() + 'Z',
        'backend': current_app.config.get('STORAGE_BACKEND', 'memory'),
        'checks': checks
    }

    status_code = 200 if overall_status == 'ok' else 503
    return jsonify(response_data), status_code
