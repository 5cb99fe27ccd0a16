"""
Portfolio Routes

The public aggregate document plus get/update for the three singleton
records. Updates merge only the fields sent; nothing here is ever deleted.
"""

from flask import Blueprint, jsonify, request
from flask_login import login_required

from portfolio.errors import NotFound
from portfolio.schema import CONTACT_INFO, PERSONAL_INFO, SITE_SETTINGS
from portfolio.store import get_content_store

portfolio_bp = Blueprint('portfolio', __name__)

# URL segment -> singleton definition
SECTIONS = {
    'personal': PERSONAL_INFO,
    'contact': CONTACT_INFO,
    'settings': SITE_SETTINGS,
}


@portfolio_bp.route('')
@portfolio_bp.route('/')
def get_portfolio():
    """Everything the public page renders, in one request"""
    return jsonify(get_content_store().get_portfolio())


def _get_section(singleton):
    return jsonify(get_content_store().get_singleton(singleton.name) or {})


def _update_section(singleton):
    patch = singleton.patch(request.get_json(silent=True) or {})
    updated = get_content_store().update_singleton(singleton.name, patch)
    return jsonify({'success': True, 'data': updated})


@portfolio_bp.route('/<section>', methods=['GET'])
def get_section(section):
    singleton = SECTIONS.get(section)
    if singleton is None:
        raise NotFound()
    return _get_section(singleton)


@portfolio_bp.route('/<section>', methods=['PUT'])
@login_required
def update_section(section):
    singleton = SECTIONS.get(section)
    if singleton is None:
        raise NotFound()
    return _update_section(singleton)
