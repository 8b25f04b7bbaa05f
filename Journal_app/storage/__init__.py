from flask import current_app

from ..pnl import get_timezone
from .base import Storage
from .memory import MemStorage
from .sql import SqlStorage

BACKENDS = {
    'memory': MemStorage,
    'sql': SqlStorage,
}


def make_storage(app) -> Storage:
    backend = (app.config.get('STORAGE_BACKEND') or 'memory').lower()
    if backend not in BACKENDS:
        raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")
    tz = get_timezone(app.config.get('JOURNAL_TIMEZONE'))
    return BACKENDS[backend](tz)


def get_storage() -> Storage:
    return current_app.storage


__all__ = ['Storage', 'MemStorage', 'SqlStorage', 'make_storage', 'get_storage']
