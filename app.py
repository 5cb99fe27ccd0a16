"""
Portfolio CMS
Application Entry Point

This file serves as the entry point for the Flask application.
It uses the application factory pattern defined in the portfolio package.
"""

import logging
import os

from portfolio import create_app
from portfolio.config import Config, ProductionConfig

config_class = ProductionConfig if Config.PRODUCTION else Config
logging.basicConfig(
    level=getattr(logging, str(config_class.LOG_LEVEL).upper(), logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

# Create the Flask application using the factory
app = create_app(config_class)

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 3000))
    app.run(debug=not config_class.PRODUCTION, host='0.0.0.0', port=port)
