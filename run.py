# ==============================================================================
# run.py
# ------------------------------------------------------------------------------
# The main entry point to launch the partner commission API.
# ==============================================================================

import os
from partner_commission import create_app, db
from partner_commission.models import CommissionRecordRow, Partner, SystemInfo

# Create the Flask application instance using the factory function
app = create_app()

@app.shell_context_processor
def make_shell_context():
    """Provides a shell context for the `flask shell` command."""
    return {
        'db': db,
        'CommissionRecordRow': CommissionRecordRow,
        'Partner': Partner,
        'SystemInfo': SystemInfo
    }

if __name__ == '__main__':
    app.run(port=int(os.environ.get('PORT') or 3000), debug=True)
