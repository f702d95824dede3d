"""
Sponsorship Platform
Flask app for sponsors, events, tiers and their links, with role-based
access (user / manager / admin) and manager approval of new accounts.
"""

import logging

from flask import Flask, render_template, redirect, url_for, g

from .backend import BackendError, init_backend
from .config import config_by_name


def create_app(config_name='development', backend=None):
    """
    Application factory.

    Args:
        config_name (str): 'development', 'testing' or 'production'
        backend (DataService): data service to use instead of PostgreSQL
    """
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    logging.basicConfig(format='%(asctime)s %(levelname)s [%(name)s] %(message)s')
    app.logger.setLevel(app.config['LOG_LEVEL'])
    logging.getLogger(__package__).setLevel(app.config['LOG_LEVEL'])

    init_backend(app, backend)
    register_blueprints(app)
    register_error_handlers(app)

    @app.context_processor
    def inject_caller():
        return {'caller': g.get('caller')}

    return app


def register_blueprints(app):
    from .routes.auth import auth_bp
    from .routes.events import events_bp
    from .routes.main import main_bp
    from .routes.manage import manage_bp
    from .routes.sponsors import sponsors_bp
    from .routes.user import user_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(events_bp)
    app.register_blueprint(sponsors_bp)
    app.register_blueprint(manage_bp)


def register_error_handlers(app):

    @app.errorhandler(BackendError)
    def backend_failure(e):
        app.logger.error("Data service error: %s", e)
        return redirect(url_for('main.error'))

    @app.errorhandler(404)
    def not_found(e):
        return render_template('error.html', message='The page you requested does not exist.'), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return render_template('error.html', message='That action is not available here.'), 405
