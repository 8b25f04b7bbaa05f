# Journal_app/api_utils.py

from flask import request
from flask_login import current_user

from .errors import ApiError
from .storage import get_storage
from .utils import parse_datetime


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ApiError("Request body must be a JSON object", 400)
    return data


def owned_or_error(record, noun):
    """404 when the record is missing, 403 when it belongs to someone else"""
    if record is None:
        raise ApiError(f"{noun} not found", 404)
    if record.user_id != current_user.id:
        raise ApiError(f"Unauthorized access to this {noun.lower()}", 403)
    return record


def date_range_args(required=False):
    """
    startDate/endDate query args as naive UTC datetimes.
    Date-only values are days in the journal timezone; a date-only endDate
    covers the whole day.
    """
    raw_start = request.args.get('startDate') or None
    raw_end = request.args.get('endDate') or None

    if required and (raw_start is None or raw_end is None):
        raise ApiError("Start date and end date are required", 400)

    tz = get_storage().tz
    try:
        start = parse_datetime(raw_start, tz=tz) if raw_start else None
        end = parse_datetime(raw_end, end_of_day=True, tz=tz) if raw_end else None
    except ValueError:
        raise ApiError("Invalid date format, expected ISO-8601", 400)

    if start is not None and end is not None and start > end:
        raise ApiError("startDate must not be after endDate", 400)
    return start, end
