# Journal_app/trade_routes.py

from flask import Blueprint, jsonify, current_app, g
from flask_login import login_required, current_user

from .api_utils import json_body, owned_or_error, date_range_args
from .errors import ApiError
from .extensions import limiter
from .metrics_setup import record_write
from .pnl import apply_pnl
from .rate_limiting import RATE_LIMITS
from .schemas import TradeCreate, TradeUpdate
from .storage import get_storage

trades_bp = Blueprint('trades', __name__, url_prefix='/api/trades')


@trades_bp.route('', methods=['GET'])
@login_required
def list_trades():
    trades = get_storage().get_trades(current_user.id)
    return jsonify([t.to_dict() for t in trades])


@trades_bp.route('/range', methods=['GET'])
@login_required
def trades_in_range():
    start, end = date_range_args(required=True)
    trades = get_storage().get_trades_by_date_range(current_user.id, start, end)
    return jsonify([t.to_dict() for t in trades])


@trades_bp.route('/<int:trade_id>', methods=['GET'])
@login_required
def get_trade(trade_id):
    trade = owned_or_error(get_storage().get_trade(trade_id), 'Trade')
    return jsonify(trade.to_dict())


@trades_bp.route('', methods=['POST'])
@login_required
@limiter.limit(lambda: RATE_LIMITS['write'])
def create_trade():
    data = TradeCreate.model_validate(json_body())
    fields = apply_pnl(data.to_fields())
    trade = get_storage().create_trade(current_user.id, fields)

    record_write(current_app, 'trade', 'create')
    current_app.logger.info("Trade created", extra={
        'trade_id': trade.id,
        'symbol': trade.symbol,
        'request_id': getattr(g, 'request_id', None)
    })
    return jsonify(trade.to_dict()), 201


@trades_bp.route('/<int:trade_id>', methods=['PUT', 'PATCH'])
@login_required
@limiter.limit(lambda: RATE_LIMITS['write'])
def update_trade(trade_id):
    storage = get_storage()
    existing = owned_or_error(storage.get_trade(trade_id), 'Trade')

    data = TradeUpdate.model_validate(json_body())
    fields = apply_pnl(data.to_fields(), existing=existing)

    entry_date = fields.get('entry_date', existing.entry_date)
    exit_date = fields.get('exit_date', existing.exit_date)
    if exit_date < entry_date:
        raise ApiError("Validation error: exitDate must not be before entryDate", 400)

    trade = storage.update_trade(trade_id, fields)
    record_write(current_app, 'trade', 'update')
    return jsonify(trade.to_dict())


@trades_bp.route('/<int:trade_id>', methods=['DELETE'])
@login_required
def delete_trade(trade_id):
    storage = get_storage()
    owned_or_error(storage.get_trade(trade_id), 'Trade')
    storage.delete_trade(trade_id)
    record_write(current_app, 'trade', 'delete')
    return '', 204
