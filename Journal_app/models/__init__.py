from .user import User
from .trade import Trade
from .journal_entry import JournalEntry

__all__ = ['User', 'Trade', 'JournalEntry']
