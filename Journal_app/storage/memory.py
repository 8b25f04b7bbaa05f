# Journal_app/storage/memory.py

import threading
from datetime import datetime

from ..models import User, Trade, JournalEntry
from .base import Storage


class MemStorage(Storage):
    """Process-local maps keyed by id. Nothing survives a restart."""

    def __init__(self, tz):
        super().__init__(tz)
        self._lock = threading.Lock()
        self.users = {}
        self.trades = {}
        self.journal_entries = {}
        self.user_id_counter = 1
        self.trade_id_counter = 1
        self.journal_id_counter = 1

    # ---------------------------------------------------------------- users

    def get_user(self, user_id):
        return self.users.get(user_id)

    def get_user_by_username(self, username):
        wanted = (username or '').lower()
        for user in self.users.values():
            if user.username.lower() == wanted:
                return user
        return None

    def create_user(self, username, password_hash, name=None, email=None):
        with self._lock:
            user = User(
                id=self.user_id_counter,
                username=username,
                password_hash=password_hash,
                name=name,
                email=email,
                created_at=datetime.utcnow(),
            )
            self.users[user.id] = user
            self.user_id_counter += 1
        return user

    def update_user(self, user_id, fields):
        user = self.users.get(user_id)
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        return user

    # ---------------------------------------------------------------- trades

    def get_trades(self, user_id):
        return sorted(
            (t for t in self.trades.values() if t.user_id == user_id),
            key=lambda t: (t.exit_date, t.id),
            reverse=True,
        )

    def get_trades_by_date_range(self, user_id, start, end):
        return [t for t in self.get_trades(user_id) if start <= t.exit_date <= end]

    def get_trade(self, trade_id):
        return self.trades.get(trade_id)

    def create_trade(self, user_id, fields):
        values = {'fees': 0.0, 'tags': [], 'screenshots': []}
        values.update(fields)
        with self._lock:
            trade = Trade(id=self.trade_id_counter, user_id=user_id,
                          created_at=datetime.utcnow(), **values)
            self.trades[trade.id] = trade
            self.trade_id_counter += 1
        return trade

    def update_trade(self, trade_id, fields):
        trade = self.trades.get(trade_id)
        if trade is None:
            return None
        for key, value in fields.items():
            setattr(trade, key, value)
        return trade

    def delete_trade(self, trade_id):
        return self.trades.pop(trade_id, None) is not None

    # ---------------------------------------------------------------- journal

    def get_journal_entries(self, user_id):
        return sorted(
            (e for e in self.journal_entries.values() if e.user_id == user_id),
            key=lambda e: (e.date, e.id),
            reverse=True,
        )

    def get_journal_entry(self, entry_id):
        return self.journal_entries.get(entry_id)

    def create_journal_entry(self, user_id, fields):
        values = {'tags': []}
        values.update(fields)
        with self._lock:
            entry = JournalEntry(id=self.journal_id_counter, user_id=user_id,
                                 created_at=datetime.utcnow(), **values)
            self.journal_entries[entry.id] = entry
            self.journal_id_counter += 1
        return entry

    def update_journal_entry(self, entry_id, fields):
        entry = self.journal_entries.get(entry_id)
        if entry is None:
            return None
        for key, value in fields.items():
            setattr(entry, key, value)
        return entry

    def delete_journal_entry(self, entry_id):
        return self.journal_entries.pop(entry_id, None) is not None

    def ping(self):
        return True
