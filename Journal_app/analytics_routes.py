# Journal_app/analytics_routes.py

from flask import Blueprint, jsonify
from flask_login import login_required, current_user

from .api_utils import date_range_args
from .storage import get_storage

analytics_bp = Blueprint('analytics', __name__, url_prefix='/api')


@analytics_bp.route('/metrics', methods=['GET'])
@login_required
def trading_metrics():
    """Headline metrics, optionally limited to an exit-date window"""
    start, end = date_range_args()
    return jsonify(get_storage().get_trading_metrics(current_user.id, start, end))


@analytics_bp.route('/analytics', methods=['GET'])
@login_required
def trading_analytics():
    start, end = date_range_args()
    return jsonify(get_storage().get_trading_analytics(current_user.id, start, end))
