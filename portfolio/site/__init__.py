"""
Site Blueprint

The public portfolio page, the admin panel shells and locally stored uploads.
"""

from flask import Blueprint

site_bp = Blueprint('site', __name__)

from portfolio.site import routes  # noqa: E402, F401
