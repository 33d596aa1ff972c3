# ==============================================================================
# partner_commission/auth.py
# ------------------------------------------------------------------------------
# Credential providers used by the partner login and partner lookups.
# ==============================================================================

import hmac
import logging

from sqlalchemy.exc import SQLAlchemyError

from partner_commission.calculator.errors import StorageError


class CredentialProvider:
    """Looks up partners and checks their passwords. Codes are case-insensitive."""

    def get_partner(self, code):
        """Returns {'code': ..., 'displayName': ...} or None for an unknown partner."""
        raise NotImplementedError

    def verify(self, code, secret):
        raise NotImplementedError


class StaticCredentialProvider(CredentialProvider):
    """
    Credentials from a mapping of code -> {'password': ..., 'displayName': ...},
    e.g. the PARTNER_CREDENTIALS config value.
    """

    def __init__(self, credentials):
        self._credentials = {str(code).strip().lower(): entry for code, entry in credentials.items()}

    def get_partner(self, code):
        code = (code or '').strip().lower()
        entry = self._credentials.get(code)
        if entry is None:
            return None
        return {'code': code, 'displayName': entry.get('displayName') or code}

    def verify(self, code, secret):
        entry = self._credentials.get((code or '').strip().lower())
        if entry is None or secret is None:
            return False
        return hmac.compare_digest(str(entry.get('password', '')), str(secret))


class DatabaseCredentialProvider(CredentialProvider):
    """Credentials from the Partner table (password hashes only)."""

    def _find(self, code):
        from partner_commission import db
        from partner_commission.models import Partner
        try:
            return Partner.query.filter_by(code=(code or '').strip().lower()).first()
        except SQLAlchemyError as e:
            db.session.rollback()
            logging.error(f"Partner lookup failed: {e}", exc_info=True)
            raise StorageError('Failed to look up partner', details=str(e)) from e

    def get_partner(self, code):
        partner = self._find(code)
        if partner is None:
            return None
        return {'code': partner.code, 'displayName': partner.display_name or partner.code}

    def verify(self, code, secret):
        partner = self._find(code)
        return partner is not None and secret is not None and partner.check_password(secret)
