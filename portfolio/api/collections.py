"""
Collection Routes

Education, experience, projects, skills and certifications share one set of
CRUD handlers. Reads are public; every write needs the admin session.
"""

from flask import Blueprint, jsonify, request
from flask_login import login_required

from portfolio.errors import NotFound
from portfolio.schema import COLLECTIONS
from portfolio.store import get_content_store


def _require(collection, record_id):
    record = get_content_store().get(collection.name, record_id)
    if record is None:
        raise NotFound(collection.not_found_message())
    return record


def make_collection_blueprint(collection):
    """Build the CRUD blueprint for one collection."""
    bp = Blueprint(collection.name, __name__)

    @bp.route('', methods=['GET'])
    @bp.route('/', methods=['GET'])
    def list_records():
        return jsonify(get_content_store().list(collection.name))

    @bp.route('/<int:record_id>', methods=['GET'])
    def get_record(record_id):
        return jsonify(_require(collection, record_id))

    @bp.route('', methods=['POST'])
    @bp.route('/', methods=['POST'])
    @login_required
    def add_record():
        fields = collection.build(request.get_json(silent=True) or {})
        record = get_content_store().add(collection.name, fields)
        return jsonify({'success': True, 'data': record}), 201

    @bp.route('/<int:record_id>', methods=['PUT'])
    @login_required
    def update_record(record_id):
        _require(collection, record_id)
        patch = collection.patch(request.get_json(silent=True) or {})
        record = get_content_store().update(collection.name, record_id, patch)
        return jsonify({'success': True, 'data': record})

    @bp.route('/<int:record_id>', methods=['DELETE'])
    @login_required
    def delete_record(record_id):
        _require(collection, record_id)
        get_content_store().delete(collection.name, record_id)
        return jsonify({'success': True, 'message': f'{collection.label} deleted'})

    return bp


def collection_blueprints():
    """A fresh blueprint per collection, keyed by its URL name."""
    return {name: make_collection_blueprint(collection) for name, collection in COLLECTIONS.items()}
