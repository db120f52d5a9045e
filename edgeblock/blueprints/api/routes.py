"""API routes for EDGEBLOCK."""

import logging
from flask import jsonify, current_app

from . import api_bp

logger = logging.getLogger(__name__)


@api_bp.route('/health')
def health_check():
    """Health check endpoint.

    Returns:
        JSON response with status, version and configuration state
    """
    manager = current_app.extensions.get('config_manager')
    return jsonify({
        'status': 'ok',
        'version': '0.1.0',
        'config_loaded': bool(manager and manager.is_loaded),
    }), 200


@api_bp.route('/settings')
def get_settings():
    """Get the settings the configuration was parsed with.

    Returns:
        JSON response with the settings bag
    """
    logger.debug('GET /api/settings called')

    settings = current_app.config.get('EDGEBLOCK_SETTINGS')
    if settings is None:
        return jsonify({
            'success': False,
            'error': {
                'code': 'SETTINGS_NOT_LOADED',
                'message': 'Settings have not been loaded',
                'details': {}
            }
        }), 500

    return jsonify({
        'success': True,
        'result': settings.to_dict(),
    }), 200
