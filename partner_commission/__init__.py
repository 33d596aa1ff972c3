# ==============================================================================
# partner_commission/__init__.py
# ------------------------------------------------------------------------------
# Application factory for creating and configuring the Flask app instance.
# ==============================================================================

import os
import logging
import click
from flask import Flask
from config import Config
from flask_sqlalchemy import SQLAlchemy

# Initialize extensions globally to be accessible by other modules
db = SQLAlchemy()

def create_app(config_class=Config, record_store=None, credential_provider=None):
    """
    Application factory function. Creates and configures the Flask application.

    Args:
        config_class (class): The configuration class to use.
        record_store (RecordStore): Overrides the database-backed record store.
        credential_provider (CredentialProvider): Overrides the Partner-table provider.

    Returns:
        Flask: The configured Flask application instance.
    """
    from partner_commission.auth import DatabaseCredentialProvider
    from partner_commission.calculator.matcher import MatchPolicy
    from partner_commission.calculator.schema import FIELD_STYLES
    from partner_commission.store import SqlAlchemyRecordStore

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)

    # Configure logging
    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')

    # Fail at startup rather than on the first query
    MatchPolicy.from_config(app.config['PARTNER_MATCH_POLICY'])
    if app.config['RESPONSE_FIELD_STYLE'] not in FIELD_STYLES:
        raise ValueError(f"RESPONSE_FIELD_STYLE must be one of {FIELD_STYLES}")

    # Ensure the instance folder exists for the SQLite database
    os.makedirs(app.instance_path, exist_ok=True)

    db.init_app(app)

    app.extensions['record_store'] = record_store or \
        SqlAlchemyRecordStore(db, batch_size=app.config['UPLOAD_BATCH_SIZE'])
    app.extensions['credential_provider'] = credential_provider or DatabaseCredentialProvider()

    # Register blueprints with the application
    from partner_commission.main import bp as main_bp
    app.register_blueprint(main_bp)

    @app.cli.command("init-db")
    def init_db():
        """Creates all database tables."""
        from partner_commission import models  # noqa: F401
        db.create_all()
        app.logger.info("Database tables created.")

    @app.cli.command("seed")
    def seed():
        """Seeds the Partner table from PARTNER_CREDENTIALS."""
        from partner_commission.seed import seed_partners
        created = seed_partners(app.config['PARTNER_CREDENTIALS'])
        app.logger.info(f"Database has been seeded with {created} partners.")

    @app.cli.command("add-partner")
    @click.argument("code")
    @click.option("--display-name", default=None)
    @click.password_option()
    def add_partner(code, display_name, password):
        """Adds a single partner with a hashed password."""
        from partner_commission.seed import seed_partners
        created = seed_partners({code: {'password': password, 'displayName': display_name}})
        app.logger.info(f"Partner '{code}' {'added' if created else 'already exists'}.")

    app.logger.info(f"Partner commission service startup complete "
                    f"(match policy: {app.config['PARTNER_MATCH_POLICY']})")

    return app
