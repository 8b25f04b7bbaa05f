# Journal_app/extensions.py

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_limiter import Limiter

from .rate_limiting import get_user_id, RATE_LIMITS

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
limiter = Limiter(key_func=get_user_id, default_limits=[RATE_LIMITS['global_ceiling']])
