# Journal_app/journal_routes.py

from flask import Blueprint, jsonify, current_app
from flask_login import login_required, current_user

from .api_utils import json_body, owned_or_error
from .extensions import limiter
from .metrics_setup import record_write
from .rate_limiting import RATE_LIMITS
from .schemas import JournalEntryCreate, JournalEntryUpdate
from .storage import get_storage

journal_bp = Blueprint('journal', __name__, url_prefix='/api/journal')

NOUN = 'Journal entry'


@journal_bp.route('', methods=['GET'])
@login_required
def list_entries():
    entries = get_storage().get_journal_entries(current_user.id)
    return jsonify([e.to_dict() for e in entries])


@journal_bp.route('/<int:entry_id>', methods=['GET'])
@login_required
def get_entry(entry_id):
    entry = owned_or_error(get_storage().get_journal_entry(entry_id), NOUN)
    return jsonify(entry.to_dict())


@journal_bp.route('', methods=['POST'])
@login_required
@limiter.limit(lambda: RATE_LIMITS['write'])
def create_entry():
    data = JournalEntryCreate.model_validate(json_body())
    entry = get_storage().create_journal_entry(current_user.id, data.to_fields())
    record_write(current_app, 'journal', 'create')
    return jsonify(entry.to_dict()), 201


@journal_bp.route('/<int:entry_id>', methods=['PUT', 'PATCH'])
@login_required
@limiter.limit(lambda: RATE_LIMITS['write'])
def update_entry(entry_id):
    storage = get_storage()
    owned_or_error(storage.get_journal_entry(entry_id), NOUN)
    data = JournalEntryUpdate.model_validate(json_body())
    entry = storage.update_journal_entry(entry_id, data.to_fields())
    record_write(current_app, 'journal', 'update')
    return jsonify(entry.to_dict())


@journal_bp.route('/<int:entry_id>', methods=['DELETE'])
@login_required
def delete_entry(entry_id):
    storage = get_storage()
    owned_or_error(storage.get_journal_entry(entry_id), NOUN)
    storage.delete_journal_entry(entry_id)
    record_write(current_app, 'journal', 'delete')
    return '', 204
