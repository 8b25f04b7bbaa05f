# Journal_app/pnl.py

import pytz
from datetime import datetime

SESSIONS = ('morning', 'midday', 'afternoon', 'evening')
PRICING_FIELDS = ('entry_price', 'exit_price', 'position_size', 'trade_type', 'fees')


def calculate_profit_loss(entry_price: float, exit_price: float, position_size: float,
                          trade_type: str, fees: float = 0.0) -> float:
    """
    Net P/L of a closed trade.

    long:  (exit - entry) * size - fees
    short: (entry - exit) * size - fees
    """
    if str(trade_type).lower() == 'short':
        price_diff = entry_price - exit_price
    else:
        price_diff = exit_price - entry_price
    return round(price_diff * position_size - (fees or 0.0), 4)


def trade_status(profit_loss: float) -> str:
    if profit_loss > 0:
        return 'win'
    if profit_loss < 0:
        return 'loss'
    return 'breakeven'


def session_bucket(hour: int) -> str:
    """Time-of-day bucket for an entry hour (0-23)"""
    if 4 <= hour < 10:
        return 'morning'
    if 10 <= hour < 14:
        return 'midday'
    if 14 <= hour < 18:
        return 'afternoon'
    return 'evening'


def get_timezone(name):
    try:
        return pytz.timezone(name or 'UTC')
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown timezone: {name}")


def to_local(timestamp: datetime, tz) -> datetime:
    """Naive UTC datetime -> aware datetime in the journal timezone"""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=pytz.UTC)
    return timestamp.astimezone(tz)


def apply_pnl(fields: dict, existing=None) -> dict:
    """
    Fill in profit_loss and status for a create (existing is None) or a
    partial update of an existing trade.

    An explicit profit_loss is kept as given. Otherwise it is computed from the
    pricing fields, on update only when one of them changed. Status always
    follows the resulting P/L.
    """
    fields = dict(fields)

    def current(name, default=None):
        if name in fields and fields[name] is not None:
            return fields[name]
        if existing is not None:
            value = getattr(existing, name)
            return default if value is None else value
        return default

    if fields.get('profit_loss') is None:
        fields.pop('profit_loss', None)
        repricing = existing is None or any(name in fields for name in PRICING_FIELDS)
        if repricing:
            fields['profit_loss'] = calculate_profit_loss(
                current('entry_price'),
                current('exit_price'),
                current('position_size'),
                current('trade_type'),
                current('fees', 0.0),
            )

    fields.pop('status', None)
    pnl = fields.get('profit_loss', existing.profit_loss if existing is not None else 0.0)
    fields['status'] = trade_status(pnl)
    return fields
