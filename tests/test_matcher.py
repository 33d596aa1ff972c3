# tests/test_matcher.py

import pytest

from partner_commission.calculator.matcher import MatchPolicy, match_record, names_match


@pytest.mark.parametrize('recipient, partner', [
    ('johnweplus', 'john'),         # recipient contains partner
    ('john', 'johnweplus'),         # partner contains recipient
    ('JohnWePlus', 'JOHN'),
    ('  neeny ', 'neenyweplus'),
    ('aeirweplus', 'aeirweplus'),
])
def test_substring_policy_matches_in_both_directions(recipient, partner):
    assert names_match(recipient, partner, MatchPolicy.SUBSTRING)


@pytest.mark.parametrize('recipient, partner, expected', [
    ('johnweplus', 'john', False),
    ('john', 'johnweplus', False),
    ('JohnWePlus', 'johnweplus', True),
    (' john ', 'JOHN', True),
])
def test_exact_policy_requires_equal_names(recipient, partner, expected):
    assert names_match(recipient, partner, MatchPolicy.EXACT) is expected


@pytest.mark.parametrize('policy', list(MatchPolicy))
def test_blank_names_never_match(policy):
    assert not names_match('', 'john', policy)
    assert not names_match('   ', 'john', policy)
    assert not names_match(None, 'john', policy)
    assert not names_match('john', '', policy)


def test_unrelated_names_do_not_match():
    assert not names_match('krufern', 'john')


def test_match_record_reports_each_tier(make_record):
    record = make_record(affiliate10_recipient='johnweplus', affiliate10_amount=100,
                         invitor15_recipient='neeny', invitor15_amount=50)

    john = match_record(record, 'john')
    assert john.is_affiliate_tier and not john.is_invitor_tier
    assert john.affiliate_credit == 100 and john.invitor_credit == 0

    neeny = match_record(record, 'neenyweplus')
    assert neeny.is_invitor_tier and not neeny.is_affiliate_tier
    assert neeny.invitor_credit == 50


def test_exact_policy_on_record(make_record):
    record = make_record(affiliate10_recipient='johnweplus', affiliate10_amount=100)
    assert not match_record(record, 'john', MatchPolicy.EXACT).any_tier
    assert match_record(record, 'JohnWePlus', MatchPolicy.EXACT).is_affiliate_tier


def test_tier_needs_positive_amount_to_be_credited(make_record):
    record = make_record(affiliate10_recipient='john', affiliate10_amount=0,
                         invitor15_recipient='john', invitor15_amount=20)
    attribution = match_record(record, 'john')

    assert attribution.is_affiliate_tier and attribution.is_invitor_tier
    assert attribution.affiliate_credit == 0
    assert attribution.invitor_credit == 20
    assert attribution.is_credited


def test_policy_from_config():
    assert MatchPolicy.from_config('substring') is MatchPolicy.SUBSTRING
    assert MatchPolicy.from_config(' EXACT ') is MatchPolicy.EXACT
    assert MatchPolicy.from_config(MatchPolicy.EXACT) is MatchPolicy.EXACT
    with pytest.raises(ValueError):
        MatchPolicy.from_config('fuzzy')
