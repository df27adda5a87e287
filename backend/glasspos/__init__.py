# backend/glasspos/__init__.py
from flask import Flask

from .config import Config, default_database_uri
from .extensions import db
from .store import PosStore


def create_app(test_config: dict | None = None) -> Flask:
    """
    Application factory and composition root.

    Owns the single store handle and the printer backend; both live in
    app.extensions for the lifetime of the process. Unless
    POS_AUTO_BOOTSTRAP is off, the schema is created and defaults are
    seeded before the app is returned. A bootstrap failure propagates.
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        app.config["SQLALCHEMY_DATABASE_URI"] = default_database_uri()

    # Initialize extensions
    db.init_app(app)

    # Import models so the table metadata is registered
    from . import models  # noqa: F401
    from .services.printer_service import create_printer_backend
    from .services.schema_service import initialize_database

    with app.app_context():
        store = PosStore(db.engine)
    app.extensions["pos_store"] = store
    app.extensions["pos_printer"] = create_printer_backend(app.config)

    if app.config.get("POS_AUTO_BOOTSTRAP", True):
        with app.app_context():
            initialize_database(store)

    # Register blueprints
    from .routes.system import system_bp
    from .routes.commands import commands_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(commands_bp)

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
