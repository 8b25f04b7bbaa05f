#!/usr/bin/env python3
"""
Gunicorn configuration for the Trade Journal server

Usage:
    gunicorn -c gunicorn.conf.py run:app

The in-memory storage backend lives inside one process, so it runs with a
single worker. Switch STORAGE_BACKEND=sql (and SESSION_TYPE=redis) to scale out.
"""

import multiprocessing
import os

# =============================================================================
# Server Configuration
# =============================================================================

# Bind to localhost only - use a reverse proxy for external access
bind = os.environ.get("GUNICORN_BIND", "127.0.0.1:8000")

# =============================================================================
# Worker Configuration
# =============================================================================

if os.environ.get("STORAGE_BACKEND", "memory").lower() == "memory":
    workers = 1
else:
    workers = min(multiprocessing.cpu_count() * 2 + 1, 4)

worker_class = "sync"
threads = 4

# Restart workers after handling this many requests (memory store resets too)
max_requests = 0 if workers == 1 else 1000
max_requests_jitter = 0 if workers == 1 else 100

timeout = 60
keepalive = 5
graceful_timeout = 30

# =============================================================================
# Logging Configuration
# =============================================================================

access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

# =============================================================================
# Process Configuration
# =============================================================================

proc_name = "trade-journal-server"

limit_request_line = 4094
limit_request_field_size = 8190
limit_request_fields = 100

preload_app = True

# =============================================================================
# Hooks
# =============================================================================


def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info(f"Starting Trade Journal server with {workers} worker(s)")

    if os.environ.get('ENABLE_METRICS', '').lower() == 'true' and workers > 1:
        multiproc_dir = os.environ.get('PROMETHEUS_MULTIPROC_DIR', '/tmp/prometheus_multiproc')
        os.makedirs(multiproc_dir, exist_ok=True)
        server.log.info(f"Prometheus multiprocess directory: {multiproc_dir}")


def when_ready(server):
    server.log.info("Trade Journal server is ready to accept connections")


def on_exit(server):
    server.log.info("Trade Journal server is shutting down")
