"""EDGEBLOCK Application Factory.

This module provides the application factory pattern for creating Flask
application instances with the appropriate configuration.
"""

from pathlib import Path

from flask import Flask

from edgeblock.config import config


def create_app(config_name='default'):
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name ('development', 'testing', 'production', 'default')

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Configure logging
    _configure_logging(app)

    # Load settings and parse the blacklist configuration
    _configure_blacklist(app)

    # Register blueprints
    _register_blueprints(app)

    # Register error handlers
    _register_error_handlers(app)

    app.logger.info(f'Application created (config={config_name})')

    return app


def _configure_logging(app):
    """Configure application logging with EDGEBLOCK structured format.

    Args:
        app: Flask application instance
    """
    from edgeblock.logging_config import configure_logging
    configure_logging(app)


def _configure_blacklist(app):
    """Load settings and parse the configuration dump at startup.

    Stores the manager in app.extensions. A missing, unreadable or empty dump is
    logged and leaves the manager unloaded; the API then answers 503.
    If reload_on_change is set, starts a file watcher for hot-reload.

    Args:
        app: Flask application instance
    """
    from edgeblock.core.edgeos import get_config_manager, start_config_watcher
    from edgeblock.models.blacklist import ConfigError
    from edgeblock.models.settings import load_settings

    base_path = Path(app.root_path).parent
    settings = load_settings(app.config['EDGEBLOCK_SETTINGS_PATH'], base_path=base_path)
    app.config['EDGEBLOCK_SETTINGS'] = settings

    manager = get_config_manager()
    app.extensions['config_manager'] = manager

    try:
        manager.load_file(settings)
    except ConfigError as e:
        app.logger.error(f'Failed to load configuration (code={e.code}, error={e.message})')
        return

    stats = manager.get_stats()
    app.logger.info(
        f'Blacklist configured (nodes={stats.nodes_count}, '
        f'sources={stats.sources_count}, excludes={stats.excludes_count})'
    )

    if settings.reload_on_change:
        watcher = start_config_watcher(settings)
        if watcher:
            app.extensions['config_watcher'] = watcher
        else:
            app.logger.warning('Failed to start configuration hot-reload watcher')


def _register_blueprints(app):
    """Register all application blueprints.

    Args:
        app: Flask application instance
    """
    from edgeblock.blueprints.api import api_bp

    app.register_blueprint(api_bp, url_prefix='/api')


def _register_error_handlers(app):
    """Register custom error handlers.

    Args:
        app: Flask application instance
    """
    from flask import jsonify

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({
            'success': False,
            'error': {
                'code': 'SYSTEM_NOT_FOUND',
                'message': 'The requested resource was not found',
                'details': {}
            }
        }), 404

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({
            'success': False,
            'error': {
                'code': 'SYSTEM_INTERNAL_ERROR',
                'message': 'An internal server error occurred',
                'details': {}
            }
        }), 500
