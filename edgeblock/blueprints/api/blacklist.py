"""Blacklist configuration API endpoints for EDGEBLOCK.

Read-only diagnostics over the parsed configuration: the rendered tree,
views, exclusion checks, plus a reload trigger.
"""

import logging
from flask import jsonify, request, current_app

from . import api_bp
from edgeblock.core.edgeos import get_config_manager, render_config
from edgeblock.models.blacklist import CONFIG_NOT_LOADED, ConfigError

logger = logging.getLogger(__name__)


def _error(code, message, status, details=None):
    return jsonify({
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        },
    }), status


def _not_loaded():
    return _error(CONFIG_NOT_LOADED, "No configuration has been loaded", 503)


@api_bp.route('/config', methods=['GET'])
def get_config():
    """Get the rendered configuration tree and its statistics.

    Example Response:
        {
            "success": true,
            "result": {
                "stats": {"nodes_count": 3, ...},
                "rendered": "{\\n\\t\\"nodes\\": [..."
            }
        }
    """
    logger.debug("GET /api/config called")

    manager = get_config_manager()
    if not manager.is_loaded:
        return _not_loaded()

    return jsonify({
        "success": True,
        "result": {
            "stats": manager.get_stats().to_dict(),
            "rendered": render_config(manager.config),
        },
    }), 200


@api_bp.route('/config/nodes', methods=['GET'])
def get_config_nodes():
    """Get configured node names with their resolved blackhole IP."""
    logger.debug("GET /api/config/nodes called")

    manager = get_config_manager()
    if not manager.is_loaded:
        return _not_loaded()

    config = manager.config
    nodes = [
        {
            "name": name,
            "disabled": config.get(name).disabled,
            "ip": config.get_ip(name),
        }
        for name in config.nodes()
    ]
    return jsonify({"success": True, "result": nodes}), 200


@api_bp.route('/views/<kind>', methods=['GET'])
def get_view(kind):
    """Get one view of the configuration.

    Args:
        kind: View kind value (e.g. 'url-domains', 'exclusion-root')
    """
    logger.debug(f"GET /api/views/{kind} called")

    manager = get_config_manager()
    if not manager.is_loaded:
        return _not_loaded()

    try:
        view = manager.view(kind)
    except ConfigError as e:
        logger.warning(f"View request rejected (kind={kind}, code={e.code})")
        return _error(e.code, e.message, 400, e.details)

    settings = manager.settings
    result = view.to_dict()
    for data, obj in zip(result["objects"], view):
        data["target"] = obj.target_path(settings)

    return jsonify({"success": True, "result": result}), 200


@api_bp.route('/excludes/check', methods=['GET'])
def check_exclude():
    """Check whether a domain is excluded, directly or through a parent domain."""
    domain = request.args.get('domain', '').strip()
    if not domain:
        return _error("EXCLUDE_MISSING_DOMAIN", "Query parameter 'domain' is required", 400)

    manager = get_config_manager()
    if not manager.is_loaded:
        return _not_loaded()

    return jsonify({
        "success": True,
        "result": {
            "domain": domain,
            "excluded": manager.is_excluded(domain),
        },
    }), 200


@api_bp.route('/config/reload', methods=['POST'])
def reload_config():
    """Re-parse the configuration dump named in the settings."""
    logger.info("POST /api/config/reload called")

    settings = current_app.config.get('EDGEBLOCK_SETTINGS')
    manager = get_config_manager()

    try:
        manager.load_file(settings or manager.settings)
    except ConfigError as e:
        logger.error(f"Error reloading configuration (code={e.code}, error={e.message})")
        return _error(e.code, e.message, 422, e.details)

    return jsonify({
        "success": True,
        "message": "Configuration reloaded",
        "result": manager.get_stats().to_dict(),
    }), 200
