# Journal_app/analytics.py

from collections import OrderedDict, defaultdict
from typing import Dict, Iterable, List, Optional

import pytz

from .pnl import SESSIONS, session_bucket, to_local

WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')
SIZE_BUCKETS = (
    ('1-10', 10),
    ('11-50', 50),
    ('51-100', 100),
    ('101-500', 500),
    ('500+', None),
)


def _money(value: float) -> float:
    return round(value, 2)


def _win_rate(wins: int, total: int) -> float:
    return round(wins / total * 100, 2) if total else 0.0


class MetricsService:
    """
    Performance aggregation over a user's closed trades.

    Everything here is computed on demand from the trade list and never
    persisted:
    - headline metrics (win rate, profit factor, largest win/loss)
    - P/L by instrument type and by time-of-day session
    - monthly, daily and grouped breakdowns for the analytics views

    Hours and calendar days are taken in the journal timezone.
    """

    @staticmethod
    def empty_metrics() -> Dict:
        return {
            'totalTrades': 0,
            'winRate': 0.0,
            'totalProfitLoss': 0.0,
            'avgTradeProfit': 0.0,
            'profitFactor': 0.0,
            'largestWin': 0.0,
            'largestLoss': 0.0,
            'profitByInstrument': {},
            'profitBySession': {name: 0.0 for name in SESSIONS},
        }

    @staticmethod
    def compute_trading_metrics(trades: Iterable, tz=pytz.UTC) -> Dict:
        trades = list(trades)
        total_trades = len(trades)
        if total_trades == 0:
            return MetricsService.empty_metrics()

        wins = 0
        total_pnl = 0.0
        gross_gain = 0.0
        gross_loss = 0.0
        largest_win = 0.0
        largest_loss = 0.0
        by_instrument = defaultdict(float)
        by_session = OrderedDict((name, 0.0) for name in SESSIONS)

        for trade in trades:
            pnl = trade.profit_loss or 0.0
            total_pnl += pnl
            if pnl > 0:
                wins += 1
                gross_gain += pnl
                largest_win = max(largest_win, pnl)
            elif pnl < 0:
                gross_loss += abs(pnl)
                largest_loss = max(largest_loss, abs(pnl))

            by_instrument[trade.instrument_type] += pnl
            hour = to_local(trade.entry_date, tz).hour
            by_session[session_bucket(hour)] += pnl

        # no losing trades: report the gross gain rather than dividing by zero
        profit_factor = gross_gain if gross_loss == 0 else gross_gain / gross_loss

        return {
            'totalTrades': total_trades,
            'winRate': _win_rate(wins, total_trades),
            'totalProfitLoss': _money(total_pnl),
            'avgTradeProfit': _money(total_pnl / total_trades),
            'profitFactor': round(profit_factor, 2),
            'largestWin': _money(largest_win),
            'largestLoss': _money(largest_loss),
            'profitByInstrument': {k: _money(v) for k, v in by_instrument.items()},
            'profitBySession': {k: _money(v) for k, v in by_session.items()},
        }

    # ------------------------------------------------------------ breakdowns

    @staticmethod
    def group_stats(trades: Iterable, key, default_label: Optional[str] = None) -> List[Dict]:
        """Trades/wins/losses/P&L per group, best performing group first"""
        groups = defaultdict(lambda: {'trades': 0, 'wins': 0, 'losses': 0, 'profitLoss': 0.0})
        for trade in trades:
            label = key(trade) or default_label
            if label is None:
                continue
            g = groups[label]
            g['trades'] += 1
            if trade.status == 'win':
                g['wins'] += 1
            elif trade.status == 'loss':
                g['losses'] += 1
            g['profitLoss'] += trade.profit_loss or 0.0

        result = []
        for label, g in groups.items():
            result.append({
                'name': label,
                'trades': g['trades'],
                'wins': g['wins'],
                'losses': g['losses'],
                'profitLoss': _money(g['profitLoss']),
                'winRate': _win_rate(g['wins'], g['trades']),
            })
        result.sort(key=lambda x: x['profitLoss'], reverse=True)
        return result

    @staticmethod
    def monthly_performance(trades: Iterable, tz=pytz.UTC) -> List[Dict]:
        months = {}
        for trade in trades:
            local = to_local(trade.exit_date, tz)
            key = local.strftime('%Y-%m')
            m = months.setdefault(key, {
                'month': key,
                'label': local.strftime('%B %Y'),
                'profitLoss': 0.0,
                'trades': 0,
                'wins': 0,
                'losses': 0,
            })
            m['profitLoss'] += trade.profit_loss or 0.0
            m['trades'] += 1
            if trade.status == 'win':
                m['wins'] += 1
            elif trade.status == 'loss':
                m['losses'] += 1

        result = []
        for key in sorted(months, reverse=True):
            m = months[key]
            m['profitLoss'] = _money(m['profitLoss'])
            m['winRate'] = _win_rate(m['wins'], m['trades'])
            result.append(m)
        return result

    @staticmethod
    def daily_performance(trades: Iterable, tz=pytz.UTC) -> List[Dict]:
        """Per-day P/L by local exit date, oldest first, with a running total"""
        days = defaultdict(lambda: {'profitLoss': 0.0, 'trades': 0, 'wins': 0, 'losses': 0})
        for trade in trades:
            day = to_local(trade.exit_date, tz).date().isoformat()
            d = days[day]
            d['profitLoss'] += trade.profit_loss or 0.0
            d['trades'] += 1
            if trade.status == 'win':
                d['wins'] += 1
            elif trade.status == 'loss':
                d['losses'] += 1

        result = []
        cumulative = 0.0
        for day in sorted(days):
            d = days[day]
            cumulative += d['profitLoss']
            result.append({
                'date': day,
                'profitLoss': _money(d['profitLoss']),
                'trades': d['trades'],
                'wins': d['wins'],
                'losses': d['losses'],
                'cumulative': _money(cumulative),
            })
        return result

    @staticmethod
    def streaks(trades: Iterable) -> Dict:
        """
        Longest run of consecutive wins and losses in exit order.
        A breakeven trade ends either streak.
        """
        ordered = sorted(trades, key=lambda t: (t.exit_date, t.id or 0))
        longest_win = longest_loss = 0
        run_status = None
        run_length = 0
        for trade in ordered:
            if trade.status == run_status and run_status in ('win', 'loss'):
                run_length += 1
            else:
                run_status = trade.status
                run_length = 1
            if run_status == 'win':
                longest_win = max(longest_win, run_length)
            elif run_status == 'loss':
                longest_loss = max(longest_loss, run_length)

        current = {'type': None, 'length': 0}
        if run_status in ('win', 'loss'):
            current = {'type': run_status, 'length': run_length}

        return {
            'longestWinStreak': longest_win,
            'longestLossStreak': longest_loss,
            'current': current,
        }

    @staticmethod
    def weekday_performance(trades: Iterable, tz=pytz.UTC) -> List[Dict]:
        counts = {day: {'trades': 0, 'wins': 0, 'profitLoss': 0.0} for day in WEEKDAYS}
        for trade in trades:
            day = WEEKDAYS[to_local(trade.exit_date, tz).weekday()]
            counts[day]['trades'] += 1
            counts[day]['profitLoss'] += trade.profit_loss or 0.0
            if trade.status == 'win':
                counts[day]['wins'] += 1
        return [
            {
                'day': day,
                'trades': c['trades'],
                'wins': c['wins'],
                'profitLoss': _money(c['profitLoss']),
                'winRate': _win_rate(c['wins'], c['trades']),
            }
            for day, c in counts.items()
        ]

    @staticmethod
    def session_win_rates(trades: Iterable, tz=pytz.UTC) -> List[Dict]:
        counts = OrderedDict((name, {'trades': 0, 'wins': 0}) for name in SESSIONS)
        for trade in trades:
            bucket = session_bucket(to_local(trade.entry_date, tz).hour)
            counts[bucket]['trades'] += 1
            if trade.status == 'win':
                counts[bucket]['wins'] += 1
        return [
            {
                'session': name,
                'trades': c['trades'],
                'wins': c['wins'],
                'winRate': _win_rate(c['wins'], c['trades']),
            }
            for name, c in counts.items()
        ]

    @staticmethod
    def position_size_distribution(trades: Iterable) -> Dict[str, int]:
        distribution = OrderedDict((label, 0) for label, _ in SIZE_BUCKETS)
        for trade in trades:
            size = trade.position_size or 0
            for label, upper in SIZE_BUCKETS:
                if upper is None or size <= upper:
                    distribution[label] += 1
                    break
        return dict(distribution)

    @staticmethod
    def compute_analytics(trades: Iterable, tz=pytz.UTC) -> Dict:
        trades = list(trades)
        return {
            'totalTrades': len(trades),
            'monthly': MetricsService.monthly_performance(trades, tz),
            'daily': MetricsService.daily_performance(trades, tz),
            'streaks': MetricsService.streaks(trades),
            'bySetup': MetricsService.group_stats(trades, lambda t: t.setup, 'unspecified'),
            'bySymbol': MetricsService.group_stats(trades, lambda t: t.symbol),
            'byRiskReward': MetricsService.group_stats(trades, lambda t: t.risk_reward_ratio),
            'byWeekday': MetricsService.weekday_performance(trades, tz),
            'sessionWinRates': MetricsService.session_win_rates(trades, tz),
            'positionSizes': MetricsService.position_size_distribution(trades),
        }


def compute_trading_metrics(trades: Iterable, tz=pytz.UTC) -> Dict:
    return MetricsService.compute_trading_metrics(trades, tz)


def compute_analytics(trades: Iterable, tz=pytz.UTC) -> Dict:
    return MetricsService.compute_analytics(trades, tz)
