# Journal_app/config.py
import os
from pathlib import Path
from datetime import timedelta

from sqlalchemy import event
from sqlalchemy.engine import Engine


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "y")


# ===== Paths / DB =====
BASE_DIR = Path(__file__).resolve().parents[1]

JOURNAL_DB_PATH = os.environ.get('JOURNAL_DB_PATH')
if JOURNAL_DB_PATH:
    DB_PATH = Path(JOURNAL_DB_PATH).resolve()
else:
    DB_PATH = BASE_DIR / "instance" / "journal.db"

SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or f"sqlite:///{DB_PATH.as_posix()}"
SQLALCHEMY_TRACK_MODIFICATIONS = False

SQLALCHEMY_ENGINE_OPTIONS = {
    "pool_pre_ping": True,
}

# ===== Storage =====
# "memory" keeps everything in process; "sql" uses the SQLAlchemy tables
STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'memory').lower()

# Seed the demo/demo account on start-up
SEED_DEMO_USER = _env_flag('SEED_DEMO_USER', True)

# Session buckets and calendar days are computed in this timezone
JOURNAL_TIMEZONE = os.environ.get('JOURNAL_TIMEZONE', 'America/New_York')

# ===== Flask session / cookies =====
SECRET_KEY = (
    os.environ.get("JOURNAL_SECRET_KEY")
    or os.environ.get("SECRET_KEY")
    or "development-secret-key"
)

SESSION_COOKIE_NAME = os.environ.get("JOURNAL_SESSION_COOKIE", "journal_session")

# Server-side sessions (set SESSION_TYPE=redis with SESSION_REDIS_URL in production)
SESSION_TYPE = os.environ.get("SESSION_TYPE", "filesystem")
# "filesystem" is served by a cachelib FileSystemCache in this directory
JOURNAL_SESSION_DIR = os.environ.get("JOURNAL_SESSION_DIR", str(BASE_DIR / "instance" / "flask_session"))
SESSION_REDIS_URL = os.environ.get("SESSION_REDIS_URL", "redis://127.0.0.1:6379/0")
SESSION_PERMANENT = True
PERMANENT_SESSION_LIFETIME = timedelta(days=1)
SESSION_COOKIE_SAMESITE = "Lax"

# ===== Rate limiting =====
RATELIMIT_ENABLED = _env_flag('RATELIMIT_ENABLED', True)
RATELIMIT_STORAGE_URI = os.environ.get('RATE_LIMIT_REDIS_URL', 'memory://')

# ===== Logging / limits / metrics =====
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
MAX_REQUEST_BYTES = int(os.environ.get('MAX_REQUEST_BYTES', 1024 * 1024))
ENABLE_METRICS = os.environ.get('ENABLE_METRICS', 'false')

DEBUG = False

# ===== SQLite PRAGMA =====
@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(dbapi_conn, connection_record):
    # only sqlite connections understand PRAGMA
    if dbapi_conn.__class__.__module__.split('.')[0] not in ('sqlite3', 'pysqlite2'):
        return
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON;")
    cursor.execute("PRAGMA busy_timeout=30000;")
    cursor.close()
