# ==============================================================================
# config.py
# ------------------------------------------------------------------------------
# Configuration settings for the partner commission service.
# Uses environment variables for sensitive data to keep them out of version control.
# ==============================================================================

import os
from dotenv import load_dotenv

# Determine the absolute path of the project directory
basedir = os.path.abspath(os.path.dirname(__file__))

# Load environment variables from a .env file located in the project root
load_dotenv(os.path.join(basedir, '.env'))

class Config:
    """
    Base configuration class. Contains default settings that can be overridden
    by environment-specific configurations.
    """
    # --- Security ---
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-should-really-set-a-secret-key-in-your-env-file'

    # JSON object of partner code -> {"password": ..., "displayName": ...}.
    # Only read by `flask seed`; the running service verifies against the Partner table.
    PARTNER_CREDENTIALS = os.environ.get('PARTNER_CREDENTIALS') or '{}'

    # --- Database Configuration ---
    # SQLite in the 'instance' folder unless DATABASE_URL points elsewhere.
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance/app.db')

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Rows per INSERT during an upload. Batches carry no ordering or atomicity meaning.
    UPLOAD_BATCH_SIZE = int(os.environ.get('UPLOAD_BATCH_SIZE') or 100)

    # --- File Upload Configuration ---
    ALLOWED_EXTENSIONS = {'.xlsx', '.xls'}

    MAX_CONTENT_LENGTH = 10 * 1024 * 1024

    # --- Commission Engine ---
    # 'substring' (bidirectional containment) or 'exact'
    PARTNER_MATCH_POLICY = os.environ.get('PARTNER_MATCH_POLICY') or 'substring'

    # 'camel' (orderDate, ...) or 'snake' (order_date, ...)
    RESPONSE_FIELD_STYLE = os.environ.get('RESPONSE_FIELD_STYLE') or 'camel'

    REPORTING_UTC_OFFSET_HOURS = int(os.environ.get('REPORTING_UTC_OFFSET_HOURS') or 7)

    APP_VERSION = '1.0.0'
