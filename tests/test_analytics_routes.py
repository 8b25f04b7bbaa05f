# tests/test_analytics_routes.py
"""
Metrics and analytics endpoints
"""

from conftest import build_app, login, register, trade_payload


def seed_trades(client):
    trades = [
        # long 100 -> 110 x10, fees 1: +99, morning
        trade_payload(),
        # short 50 -> 52 x20: -40, afternoon, futures
        trade_payload(symbol='es', tradeType='short', entryPrice=50, exitPrice=52, positionSize=20,
                      fees=0, instrumentType='futures', setup='fade',
                      entryDate='2024-03-05T14:00:00Z', exitDate='2024-03-05T15:00:00Z'),
        # long 20 -> 19 x30, fees 0: -30, April
        trade_payload(symbol='spy', entryPrice=20, exitPrice=19, positionSize=30, fees=0,
                      instrumentType='options', setup=None, riskRewardRatio=None,
                      entryDate='2024-04-02T11:00:00Z', exitDate='2024-04-02T12:00:00Z'),
    ]
    for body in trades:
        assert client.post('/api/trades', json=body).status_code == 201


def test_metrics_require_login(client):
    assert client.get('/api/metrics').status_code == 401
    assert client.get('/api/analytics').status_code == 401


def test_metrics_for_user_without_trades(client):
    register(client, 'fresh')
    metrics = client.get('/api/metrics').get_json()
    assert metrics['totalTrades'] == 0
    assert metrics['winRate'] == 0
    assert metrics['totalProfitLoss'] == 0


def test_metrics_over_all_trades(auth_client):
    seed_trades(auth_client)

    response = auth_client.get('/api/metrics')
    assert response.status_code == 200
    metrics = response.get_json()
    assert metrics['totalTrades'] == 3
    assert metrics['winRate'] == 33.33
    assert metrics['totalProfitLoss'] == 29.0
    assert metrics['profitFactor'] == 1.41
    assert metrics['largestWin'] == 99.0
    assert metrics['largestLoss'] == 40.0
    assert metrics['profitByInstrument'] == {'stocks': 99.0, 'futures': -40.0, 'options': -30.0}
    assert metrics['profitBySession']['morning'] == 99.0
    assert metrics['profitBySession']['afternoon'] == -40.0
    assert metrics['profitBySession']['midday'] == -30.0


def test_metrics_with_date_window(auth_client):
    seed_trades(auth_client)

    march = auth_client.get('/api/metrics?startDate=2024-03-01&endDate=2024-03-31').get_json()
    assert march['totalTrades'] == 2
    assert march['totalProfitLoss'] == 59.0

    april_on = auth_client.get('/api/metrics?startDate=2024-04-01').get_json()
    assert april_on['totalTrades'] == 1


def test_metrics_invalid_date(auth_client):
    response = auth_client.get('/api/metrics?startDate=03/01/2024')
    assert response.status_code == 400


def test_metrics_only_count_own_trades(client):
    login(client)
    seed_trades(client)
    client.post('/api/logout')

    register(client, 'someone-else')
    assert client.get('/api/metrics').get_json()['totalTrades'] == 0


def test_analytics_breakdowns(auth_client):
    seed_trades(auth_client)

    response = auth_client.get('/api/analytics')
    assert response.status_code == 200
    analytics = response.get_json()

    assert analytics['totalTrades'] == 3
    assert [m['month'] for m in analytics['monthly']] == ['2024-04', '2024-03']
    assert [d['cumulative'] for d in analytics['daily']] == [99.0, 59.0, 29.0]
    assert analytics['streaks']['longestLossStreak'] == 2
    assert analytics['streaks']['current'] == {'type': 'loss', 'length': 2}
    assert [s['name'] for s in analytics['bySymbol']] == ['AAPL', 'SPY', 'ES']
    assert [s['name'] for s in analytics['bySetup']] == ['breakout', 'unspecified', 'fade']
    assert len(analytics['byWeekday']) == 7
    assert analytics['positionSizes']['1-10'] == 1
    assert analytics['positionSizes']['11-50'] == 2


def test_date_only_windows_follow_journal_timezone():
    app = build_app(JOURNAL_TIMEZONE='America/New_York')
    client = app.test_client()
    login(client)
    # 22:00 in New York on Mar 4 is already Mar 5 in UTC
    response = client.post('/api/trades', json=trade_payload(
        entryDate='2024-03-04T21:00:00-05:00', exitDate='2024-03-04T22:00:00-05:00'))
    assert response.status_code == 201

    analytics = client.get('/api/analytics').get_json()
    assert [d['date'] for d in analytics['daily']] == ['2024-03-04']

    march_4 = client.get('/api/trades/range?startDate=2024-03-04&endDate=2024-03-04').get_json()
    assert len(march_4) == 1
    march_5 = client.get('/api/trades/range?startDate=2024-03-05&endDate=2024-03-05').get_json()
    assert march_5 == []

    metrics = client.get('/api/metrics?startDate=2024-03-04&endDate=2024-03-04').get_json()
    assert metrics['totalTrades'] == 1
