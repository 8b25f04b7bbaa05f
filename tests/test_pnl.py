# tests/test_pnl.py
"""
P/L arithmetic, status derivation and session buckets
"""

from datetime import datetime
from types import SimpleNamespace

import pytest
import pytz

from Journal_app.pnl import (
    calculate_profit_loss, trade_status, session_bucket, to_local, apply_pnl, get_timezone
)


def test_long_profit_loss_subtracts_fees():
    assert calculate_profit_loss(100.0, 110.0, 10, 'long', fees=1.0) == 99.0


def test_short_profit_loss_is_sign_adjusted():
    assert calculate_profit_loss(50.0, 45.0, 20, 'short') == 100.0
    assert calculate_profit_loss(50.0, 52.5, 20, 'short', fees=2.0) == -52.0


def test_trade_status():
    assert trade_status(12.5) == 'win'
    assert trade_status(-0.01) == 'loss'
    assert trade_status(0) == 'breakeven'


@pytest.mark.parametrize('hour,bucket', [
    (3, 'evening'),
    (4, 'morning'),
    (9, 'morning'),
    (10, 'midday'),
    (13, 'midday'),
    (14, 'afternoon'),
    (17, 'afternoon'),
    (18, 'evening'),
    (23, 'evening'),
])
def test_session_bucket_boundaries(hour, bucket):
    assert session_bucket(hour) == bucket


def test_to_local_converts_naive_utc():
    tz = pytz.timezone('America/New_York')
    local = to_local(datetime(2024, 3, 4, 14, 30), tz)
    assert local.hour == 9
    assert local.minute == 30


def test_unknown_timezone_rejected():
    with pytest.raises(ValueError):
        get_timezone('Mars/Olympus_Mons')


def test_apply_pnl_on_create_computes_missing_values():
    fields = apply_pnl({
        'entry_price': 100.0, 'exit_price': 95.0, 'position_size': 10,
        'trade_type': 'long', 'fees': 0.5, 'profit_loss': None,
    })
    assert fields['profit_loss'] == -50.5
    assert fields['status'] == 'loss'


def test_apply_pnl_keeps_explicit_profit_loss():
    fields = apply_pnl({
        'entry_price': 100.0, 'exit_price': 95.0, 'position_size': 10,
        'trade_type': 'long', 'fees': 0.0, 'profit_loss': 42.0,
    })
    assert fields['profit_loss'] == 42.0
    assert fields['status'] == 'win'


def test_apply_pnl_update_recomputes_when_pricing_changes():
    existing = SimpleNamespace(entry_price=100.0, exit_price=110.0, position_size=10,
                               trade_type='long', fees=0.0, profit_loss=100.0)
    fields = apply_pnl({'exit_price': 90.0}, existing=existing)
    assert fields['profit_loss'] == -100.0
    assert fields['status'] == 'loss'


def test_apply_pnl_update_leaves_pnl_alone_for_notes():
    existing = SimpleNamespace(entry_price=100.0, exit_price=110.0, position_size=10,
                               trade_type='long', fees=0.0, profit_loss=100.0)
    fields = apply_pnl({'notes': 'revisited'}, existing=existing)
    assert 'profit_loss' not in fields
    assert fields['status'] == 'win'
