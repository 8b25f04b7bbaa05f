# Journal_app/__init__.py

from pathlib import Path

from cachelib import FileSystemCache
from flask import Flask
from flask_session import Session
from redis import from_url
from werkzeug.security import generate_password_hash

from .extensions import db, login_manager, migrate
from .models import User, Trade, JournalEntry
from .storage import make_storage
from .logging_config import setup_logging, setup_request_id_middleware
from .security_middleware import setup_security_middleware
from .rate_limiting import setup_rate_limiting
from .metrics_setup import setup_metrics, metrics_bp
from .errors import register_error_handlers
from .health_routes import health_bp
from .auth_routes import auth
from .trade_routes import trades_bp
from .journal_routes import journal_bp
from .analytics_routes import analytics_bp
from .cli import register_cli

DEMO_USER = {
    'username': 'demo',
    'password': 'demo',
    'name': 'Demo User',
    'email': 'demo@example.com',
}


def _setup_sessions(app):
    session_type = (app.config.get("SESSION_TYPE") or "").lower()
    if not session_type:
        # signed cookie sessions (Flask default)
        return

    if session_type == "redis":
        redis_url = app.config.get("SESSION_REDIS_URL", "redis://127.0.0.1:6379/0")
        app.config["SESSION_REDIS"] = from_url(redis_url, decode_responses=False)
    elif session_type in ("filesystem", "cachelib"):
        if app.config.get("SESSION_CACHELIB") is None:
            session_dir = Path(app.config["JOURNAL_SESSION_DIR"])
            session_dir.mkdir(parents=True, exist_ok=True)
            app.config["SESSION_CACHELIB"] = FileSystemCache(str(session_dir), threshold=500)
        app.config["SESSION_TYPE"] = "cachelib"

    Session(app)


def _seed_demo_user(app):
    storage = app.storage
    if storage.get_user_by_username(DEMO_USER['username']):
        return
    storage.create_user(
        username=DEMO_USER['username'],
        password_hash=generate_password_hash(DEMO_USER['password']),
        name=DEMO_USER['name'],
        email=DEMO_USER['email'],
    )
    app.logger.info("Demo user created", extra={'username': DEMO_USER['username']})


def create_app(config_overrides=None):
    app = Flask(__name__, instance_relative_config=False)
    app.config.from_object('Journal_app.config')
    if config_overrides:
        app.config.update(config_overrides)
    app.json.sort_keys = False

    setup_logging(app)
    setup_request_id_middleware(app)
    setup_security_middleware(app)

    db_uri = app.config["SQLALCHEMY_DATABASE_URI"]
    if db_uri.startswith("sqlite:///") and db_uri != "sqlite:///:memory:":
        Path(db_uri[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)

    _setup_sessions(app)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    setup_rate_limiting(app)

    app.storage = make_storage(app)

    register_error_handlers(app)
    app.register_blueprint(health_bp)
    app.register_blueprint(auth)
    app.register_blueprint(trades_bp)
    app.register_blueprint(journal_bp)
    app.register_blueprint(analytics_bp)

    setup_metrics(app)
    app.register_blueprint(metrics_bp)
    register_cli(app)

    @app.shell_context_processor
    def make_shell_context():
        return {
            'db': db,
            'storage': app.storage,
            'User': User,
            'Trade': Trade,
            'JournalEntry': JournalEntry,
        }

    with app.app_context():
        if app.config.get("STORAGE_BACKEND") == "sql":
            db.create_all()
        if app.config.get("SEED_DEMO_USER"):
            _seed_demo_user(app)

    app.logger.info("Trade journal app created", extra={
        'storage_backend': app.config.get("STORAGE_BACKEND"),
        'timezone': app.config.get("JOURNAL_TIMEZONE"),
    })
    return app
