import json
import logging
from partner_commission import db
from partner_commission.models import Partner


def seed_partners(credentials):
    """
    Adds partners that do not exist yet.

    Args:
        credentials (dict | str): code -> {'password': ..., 'displayName': ...},
            or the same mapping as a JSON string.

    Returns:
        int: Number of partners created.
    """
    if isinstance(credentials, str):
        credentials = json.loads(credentials or '{}')

    created = 0
    for code, entry in credentials.items():
        code = code.strip().lower()
        if Partner.query.filter_by(code=code).first():
            continue
        partner = Partner(code=code, display_name=entry.get('displayName') or code)
        partner.set_password(entry['password'])
        db.session.add(partner)
        created += 1
        logging.info(f'Seeding partner: {code}')

    db.session.commit()
    return created
