# Journal_app/storage/sql.py

from sqlalchemy import func

from ..extensions import db
from ..models import User, Trade, JournalEntry
from .base import Storage


class SqlStorage(Storage):
    """Storage over the Flask-SQLAlchemy tables. Needs an app context."""

    def _commit(self):
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    # ---------------------------------------------------------------- users

    def get_user(self, user_id):
        return db.session.get(User, user_id)

    def get_user_by_username(self, username):
        return User.query.filter(func.lower(User.username) == (username or '').lower()).first()

    def create_user(self, username, password_hash, name=None, email=None):
        user = User(username=username, password_hash=password_hash, name=name, email=email)
        db.session.add(user)
        self._commit()
        return user

    def update_user(self, user_id, fields):
        user = self.get_user(user_id)
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        self._commit()
        return user

    # ---------------------------------------------------------------- trades

    def get_trades(self, user_id):
        return Trade.query.filter_by(user_id=user_id)\
            .order_by(Trade.exit_date.desc(), Trade.id.desc()).all()

    def get_trades_by_date_range(self, user_id, start, end):
        return Trade.query.filter(
            Trade.user_id == user_id,
            Trade.exit_date >= start,
            Trade.exit_date <= end,
        ).order_by(Trade.exit_date.desc(), Trade.id.desc()).all()

    def get_trade(self, trade_id):
        return db.session.get(Trade, trade_id)

    def create_trade(self, user_id, fields):
        trade = Trade(user_id=user_id, **fields)
        db.session.add(trade)
        self._commit()
        return trade

    def update_trade(self, trade_id, fields):
        trade = self.get_trade(trade_id)
        if trade is None:
            return None
        for key, value in fields.items():
            setattr(trade, key, value)
        self._commit()
        return trade

    def delete_trade(self, trade_id):
        trade = self.get_trade(trade_id)
        if trade is None:
            return False
        db.session.delete(trade)
        self._commit()
        return True

    # ---------------------------------------------------------------- journal

    def get_journal_entries(self, user_id):
        return JournalEntry.query.filter_by(user_id=user_id)\
            .order_by(JournalEntry.date.desc(), JournalEntry.id.desc()).all()

    def get_journal_entry(self, entry_id):
        return db.session.get(JournalEntry, entry_id)

    def create_journal_entry(self, user_id, fields):
        entry = JournalEntry(user_id=user_id, **fields)
        db.session.add(entry)
        self._commit()
        return entry

    def update_journal_entry(self, entry_id, fields):
        entry = self.get_journal_entry(entry_id)
        if entry is None:
            return None
        for key, value in fields.items():
            setattr(entry, key, value)
        self._commit()
        return entry

    def delete_journal_entry(self, entry_id):
        entry = self.get_journal_entry(entry_id)
        if entry is None:
            return False
        db.session.delete(entry)
        self._commit()
        return True

    def ping(self):
        db.session.execute(db.text('SELECT 1'))
        return True
