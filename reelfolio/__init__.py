"""
Reelfolio - Filmmaker Portfolio Site
====================================

A Flask portfolio for a filmmaker with:
- Public project list (title, year, role, synopsis, video, thumbnail)
- Shared-password admin session
- Project create/update/delete with media upload to object storage
- Single-page marketing site with a hidden admin panel

Usage:
    from flask import Flask
    from reelfolio import Reelfolio

    app = Flask(__name__)
    Reelfolio(app)
"""

__version__ = '0.1.0'

from flask import Flask
from flask_cors import CORS

from .core.config import load_config, validate_config
from .core.database import Database
from .core.errors import ConfigError, register_error_handlers
from .core.logging_service import LoggingService, schedule_log_cleanup
from .core.storage import configure_storage

DEFAULT_FEATURES = {
    'site': True,
    'ops': True,
}


class Reelfolio:
    """Flask extension wiring config, store, sessions, CORS and blueprints."""

    def __init__(self, app=None, config=None, mongo_client=None):
        self._config = dict(config or {})
        self._mongo_client = mongo_client
        self._registered = []
        self.db = None
        self.sessions = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        overrides = {k: v for k, v in self._config.items() if k.isupper()}
        load_config(app, overrides)

        missing = validate_config(app.config)
        if missing:
            raise ConfigError(missing)

        from .modules.admin import AdminSessionStore

        self.db = Database(app, client=self._mongo_client)
        self.sessions = AdminSessionStore(ttl=app.config['PERMANENT_SESSION_LIFETIME'])
        app.extensions['reelfolio_sessions'] = self.sessions

        configure_storage(app)

        # Credentialed CORS for the allow-list only; no Origin header means no CORS at all
        CORS(
            app,
            resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}},
            supports_credentials=True,
        )

        register_error_handlers(app)
        self._register_modules(app)

        app.extensions['reelfolio'] = self

        with app.app_context():
            LoggingService.info('system', 'Reelfolio initialised', {
                'modules': self._registered,
                'media_policy': app.config.get('MEDIA_INPUT_POLICY'),
            })
            schedule_log_cleanup()
        return self

    def _features(self):
        features = dict(DEFAULT_FEATURES)
        features.update(self._config.get('features') or {})
        return features

    def _register_modules(self, app):
        from .modules.admin import admin_bp
        from .modules.projects import projects_bp

        app.register_blueprint(admin_bp)
        app.register_blueprint(projects_bp)
        self._registered.extend(['admin', 'projects'])

        features = self._features()
        if features.get('ops'):
            from .modules.ops import ops_health_bp
            app.register_blueprint(ops_health_bp)
            self._registered.append('ops')
        if features.get('site'):
            from .modules.site import site_bp
            app.register_blueprint(site_bp)
            self._registered.append('site')

    def get_registered_modules(self):
        return list(self._registered)


def create_app(config=None, mongo_client=None):
    """Application factory used by app.py and the tests"""
    app = Flask(__name__)
    Reelfolio(app, config, mongo_client=mongo_client)
    return app


__all__ = ['Reelfolio', 'create_app', '__version__']
