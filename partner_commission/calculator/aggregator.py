# ==============================================================================
# partner_commission/calculator/aggregator.py
# ------------------------------------------------------------------------------
# Folds a partner's records into commission totals and a per-month breakdown.
# ==============================================================================

import logging
from dataclasses import dataclass

from .matcher import MatchPolicy, match_record


@dataclass
class Summary:
    total_orders: int = 0
    commission10: float = 0.0
    commission15: float = 0.0

    @property
    def grand_total(self):
        return self.commission10 + self.commission15

    def to_dict(self, style='camel'):
        if style == 'snake':
            return {'total_orders': self.total_orders, 'commission_10': self.commission10,
                    'commission_15': self.commission15, 'grand_total': self.grand_total}
        return {'totalOrders': self.total_orders, 'commission10': self.commission10,
                'commission15': self.commission15, 'grandTotal': self.grand_total}


@dataclass
class MonthlyBucket(Summary):

    @property
    def total(self):
        return self.grand_total

    def to_dict(self, style='camel'):
        data = super().to_dict(style)
        data.pop('grand_total' if style == 'snake' else 'grandTotal')
        data['total'] = self.total
        return data


def partner_records(records, partner, policy=MatchPolicy.SUBSTRING):
    """Records where either recipient name matches the partner, regardless of amounts."""
    return [record for record in records if match_record(record, partner, policy).any_tier]


def _credit(summary, attribution):
    summary.commission10 += attribution.affiliate_credit
    summary.commission15 += attribution.invitor_credit
    summary.total_orders += 1


def aggregate(records, partner, policy=MatchPolicy.SUBSTRING):
    """
    Totals the commission credited to `partner`.

    A tier is credited when its recipient matches and its amount is positive.
    A record credited on both tiers counts as one order.
    """
    summary = Summary()
    for record in records:
        attribution = match_record(record, partner, policy)
        if attribution.is_credited:
            _credit(summary, attribution)

    logging.debug(f"Summary for '{partner}': {summary.total_orders} orders, "
                  f"10%={summary.commission10:,.2f}, 15%={summary.commission15:,.2f}")
    return summary


def monthly_breakdown(records, partner, policy=MatchPolicy.SUBSTRING):
    """
    Splits the credited commission by calendar month of the order date.

    Returns:
        dict: 'YYYY-MM' (or 'unknown') -> MonthlyBucket, in key order. The
        bucket totals add up to the summary's grand total.
    """
    buckets = {}
    for record in records:
        attribution = match_record(record, partner, policy)
        if attribution.is_credited:
            _credit(buckets.setdefault(record.month_key, MonthlyBucket()), attribution)
    return {month: buckets[month] for month in sorted(buckets)}
