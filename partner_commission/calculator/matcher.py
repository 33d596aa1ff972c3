# ==============================================================================
# partner_commission/calculator/matcher.py
# ------------------------------------------------------------------------------
# Decides which commission tiers of a record belong to a partner.
# ==============================================================================

from enum import Enum
from typing import NamedTuple


class MatchPolicy(Enum):
    """
    How a partner identifier is compared with the recipient names.

    SUBSTRING accepts containment in either direction, so 'neenyweplus'
    matches a record paid to 'neeny'. EXACT requires the names to be equal.
    Both ignore case and surrounding whitespace.
    """
    SUBSTRING = 'substring'
    EXACT = 'exact'

    @classmethod
    def from_config(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown partner match policy '{value}'. "
                             f"Use one of: {', '.join(p.value for p in cls)}") from None


class Attribution(NamedTuple):
    is_affiliate_tier: bool
    is_invitor_tier: bool
    affiliate_amount: float = 0.0
    invitor_amount: float = 0.0

    @property
    def any_tier(self):
        return self.is_affiliate_tier or self.is_invitor_tier

    @property
    def affiliate_credit(self):
        return self.affiliate_amount if self.is_affiliate_tier and self.affiliate_amount > 0 else 0.0

    @property
    def invitor_credit(self):
        return self.invitor_amount if self.is_invitor_tier and self.invitor_amount > 0 else 0.0

    @property
    def is_credited(self):
        return self.affiliate_credit > 0 or self.invitor_credit > 0


def names_match(recipient, partner, policy=MatchPolicy.SUBSTRING):
    recipient = (recipient or '').strip().lower()
    partner = (partner or '').strip().lower()
    if not recipient or not partner:
        return False
    if policy is MatchPolicy.EXACT:
        return recipient == partner
    return partner in recipient or recipient in partner


def match_record(record, partner, policy=MatchPolicy.SUBSTRING):
    """Returns the tiers of `record` whose recipient name matches `partner`."""
    return Attribution(
        is_affiliate_tier=names_match(record.affiliate10_recipient, partner, policy),
        is_invitor_tier=names_match(record.invitor15_recipient, partner, policy),
        affiliate_amount=record.affiliate10_amount,
        invitor_amount=record.invitor15_amount,
    )
