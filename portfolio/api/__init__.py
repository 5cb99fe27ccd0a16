"""
API Blueprints

Portfolio singletons and aggregate, one blueprint per content collection,
and the file manager.
"""

from portfolio.api.portfolio import portfolio_bp
from portfolio.api.collections import collection_blueprints
from portfolio.api.files import files_bp


def register_api(app):
    app.register_blueprint(portfolio_bp, url_prefix='/api/portfolio')
    for name, blueprint in collection_blueprints().items():
        app.register_blueprint(blueprint, url_prefix=f'/api/{name}')
    app.register_blueprint(files_bp, url_prefix='/api/files')


__all__ = ['register_api', 'portfolio_bp', 'files_bp', 'collection_blueprints']
