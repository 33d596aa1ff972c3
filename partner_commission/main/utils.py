# ==============================================================================
# partner_commission/main/utils.py
# ------------------------------------------------------------------------------
# Helpers shared by the API routes: access to the app-owned collaborators and
# shaping of engine output into response payloads.
# ==============================================================================
from datetime import datetime, timezone
from flask import current_app

from partner_commission.calculator.aggregator import aggregate, monthly_breakdown, partner_records
from partner_commission.calculator.dates import reporting_timezone
from partner_commission.calculator.matcher import MatchPolicy


def get_record_store():
    return current_app.extensions['record_store']


def get_credential_provider():
    return current_app.extensions['credential_provider']


def match_policy():
    return MatchPolicy.from_config(current_app.config['PARTNER_MATCH_POLICY'])


def field_style():
    return current_app.config['RESPONSE_FIELD_STYLE']


def reporting_tz():
    return reporting_timezone(current_app.config['REPORTING_UTC_OFFSET_HOURS'])


def now_iso():
    return datetime.now(timezone.utc).isoformat()


def prepare_partner_report(records, partner_code, include_monthly=False):
    """
    Runs the aggregation for one partner and shapes it for the frontend.

    Returns:
        dict: {'summary': {...}} plus {'monthly': {'YYYY-MM': {...}}} when requested.
    """
    policy, style = match_policy(), field_style()
    report = {'summary': aggregate(records, partner_code, policy).to_dict(style)}
    if include_monthly:
        report['monthly'] = {month: bucket.to_dict(style)
                             for month, bucket in monthly_breakdown(records, partner_code, policy).items()}
    return report


def prepare_partner_records(records, partner_code):
    """Records whose recipient names match the partner, serialized for the response."""
    matching = partner_records(records, partner_code, match_policy())
    style = field_style()
    return [record.to_dict(style) for record in matching]
