# Journal_app/metrics_setup.py
"""
Prometheus metrics setup and the /metrics endpoint (opt-in via ENABLE_METRICS=true)
"""

import os
import time
from flask import Blueprint, Response, current_app, g, request
from werkzeug.exceptions import NotFound
from prometheus_client import (
    CollectorRegistry, Counter, Histogram, Info, generate_latest, CONTENT_TYPE_LATEST
)

metrics_bp = Blueprint('prometheus', __name__)


def metrics_enabled(app):
    flag = app.config.get('ENABLE_METRICS')
    if flag is None:
        flag = os.environ.get('ENABLE_METRICS', '')
    return str(flag).lower() == 'true'


def setup_metrics(app):
    """Setup Prometheus metrics if enabled"""

    if not metrics_enabled(app):
        app.logger.info("Metrics disabled - set ENABLE_METRICS=true to enable")
        return None

    # one registry per app so test apps don't collide on metric names
    registry = CollectorRegistry()
    app._metrics_registry = registry
    app._metrics = {
        'request_count': Counter(
            'http_requests_total',
            'Total HTTP requests',
            ['method', 'endpoint', 'status'],
            registry=registry,
        ),
        'request_latency': Histogram(
            'http_request_duration_seconds',
            'HTTP request latency',
            ['method', 'endpoint'],
            registry=registry,
        ),
        'journal_writes_total': Counter(
            'journal_writes_total',
            'Trades and journal entries created, updated or deleted',
            ['kind', 'action'],
            registry=registry,
        ),
        'app_info': Info(
            'app_info',
            'Application information',
            registry=registry,
        ),
    }

    app._metrics['app_info'].info({
        'version': os.environ.get('APP_VERSION', 'unknown'),
        'storage_backend': str(app.config.get('STORAGE_BACKEND', 'memory')),
    })

    @app.before_request
    def start_timer():
        g.start_time = time.time()

    @app.after_request
    def record_request(response):
        if hasattr(g, 'start_time'):
            duration = time.time() - g.start_time
            endpoint = request.endpoint or 'unknown'
            app._metrics['request_count'].labels(
                method=request.method,
                endpoint=endpoint,
                status=response.status_code
            ).inc()
            app._metrics['request_latency'].labels(
                method=request.method,
                endpoint=endpoint
            ).observe(duration)
        return response

    app.logger.info("Prometheus metrics initialized")
    return app._metrics


def record_write(app, kind, action):
    """Count a trade/journal write when metrics are on"""
    metrics = getattr(app, '_metrics', None)
    if metrics:
        metrics['journal_writes_total'].labels(kind=kind, action=action).inc()


@metrics_bp.route('/metrics', methods=['GET'])
def prometheus_metrics():
    registry = getattr(current_app, '_metrics_registry', None)
    if registry is None:
        raise NotFound("Metrics endpoint is disabled")
    return Response(generate_latest(registry), content_type=CONTENT_TYPE_LATEST)
