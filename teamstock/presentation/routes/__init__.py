"""
Routes package for teamstock
All JSON endpoints live on the ``api`` blueprint under /api
"""

from teamstock.logger import get_logger

logger = get_logger("teamstock.routes")


def init_app(app):
    """Register the API blueprint with the Flask app"""
    from .api import api

    logger.debug("Initializing route blueprints")
    app.register_blueprint(api, url_prefix='/api')
    logger.info("Registered api blueprint")
