# Journal_app/storage/base.py

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from ..analytics import compute_trading_metrics, compute_analytics
from ..models import User, Trade, JournalEntry


class Storage(ABC):
    """
    Persistence contract shared by the in-memory and SQL backends.

    Records are the ORM model classes in both cases; the memory backend keeps
    transient instances. Ownership is not checked here, the route layer does
    that.
    """

    def __init__(self, tz):
        self.tz = tz

    # ---------------------------------------------------------------- users

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, username: str, password_hash: str,
                    name: Optional[str] = None, email: Optional[str] = None) -> User: ...

    @abstractmethod
    def update_user(self, user_id: int, fields: Dict) -> Optional[User]: ...

    # ---------------------------------------------------------------- trades

    @abstractmethod
    def get_trades(self, user_id: int) -> List[Trade]: ...

    @abstractmethod
    def get_trades_by_date_range(self, user_id: int, start: datetime, end: datetime) -> List[Trade]: ...

    @abstractmethod
    def get_trade(self, trade_id: int) -> Optional[Trade]: ...

    @abstractmethod
    def create_trade(self, user_id: int, fields: Dict) -> Trade: ...

    @abstractmethod
    def update_trade(self, trade_id: int, fields: Dict) -> Optional[Trade]: ...

    @abstractmethod
    def delete_trade(self, trade_id: int) -> bool: ...

    # ---------------------------------------------------------------- journal

    @abstractmethod
    def get_journal_entries(self, user_id: int) -> List[JournalEntry]: ...

    @abstractmethod
    def get_journal_entry(self, entry_id: int) -> Optional[JournalEntry]: ...

    @abstractmethod
    def create_journal_entry(self, user_id: int, fields: Dict) -> JournalEntry: ...

    @abstractmethod
    def update_journal_entry(self, entry_id: int, fields: Dict) -> Optional[JournalEntry]: ...

    @abstractmethod
    def delete_journal_entry(self, entry_id: int) -> bool: ...

    # ---------------------------------------------------------------- misc

    @abstractmethod
    def ping(self) -> bool: ...

    def trades_in_window(self, user_id: int, start: Optional[datetime] = None,
                         end: Optional[datetime] = None) -> List[Trade]:
        """Trades filtered on exit date; either bound may be omitted"""
        trades = self.get_trades(user_id)
        if start is not None:
            trades = [t for t in trades if t.exit_date >= start]
        if end is not None:
            trades = [t for t in trades if t.exit_date <= end]
        return trades

    def get_trading_metrics(self, user_id: int, start: Optional[datetime] = None,
                            end: Optional[datetime] = None) -> Dict:
        return compute_trading_metrics(self.trades_in_window(user_id, start, end), self.tz)

    def get_trading_analytics(self, user_id: int, start: Optional[datetime] = None,
                              end: Optional[datetime] = None) -> Dict:
        return compute_analytics(self.trades_in_window(user_id, start, end), self.tz)
