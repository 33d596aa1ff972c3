# tests/test_auth.py

import json

import pytest

from partner_commission.auth import DatabaseCredentialProvider, StaticCredentialProvider
from partner_commission.calculator.errors import StorageError
from partner_commission.seed import seed_partners


def test_static_provider_is_case_insensitive_on_codes():
    provider = StaticCredentialProvider({'JohnWePlus': {'password': 'pw', 'displayName': 'John'}})

    assert provider.get_partner('JOHNWEPLUS') == {'code': 'johnweplus', 'displayName': 'John'}
    assert provider.verify('johnweplus', 'pw')
    assert not provider.verify('johnweplus', 'PW')
    assert not provider.verify('johnweplus', None)
    assert provider.get_partner('nobody') is None
    assert not provider.verify('nobody', 'pw')


def test_seeded_partners_verify_against_hashes(app):
    from partner_commission.models import Partner

    created = seed_partners(json.dumps({'AeirWePlus': {'password': 'secret-1', 'displayName': 'Aeir'}}))
    assert created == 1
    # seeding twice does not duplicate
    assert seed_partners({'aeirweplus': {'password': 'other'}}) == 0

    stored = Partner.query.filter_by(code='aeirweplus').one()
    assert stored.password_hash != 'secret-1'

    provider = DatabaseCredentialProvider()
    assert provider.get_partner('AEIRWEPLUS') == {'code': 'aeirweplus', 'displayName': 'Aeir'}
    assert provider.verify('aeirweplus', 'secret-1')
    assert not provider.verify('aeirweplus', 'other')
    assert provider.get_partner('ghost') is None
    assert not provider.verify('ghost', 'secret-1')


def test_database_lookup_failure_is_storage_error(app, fail_queries):
    from partner_commission.models import Partner

    seed_partners({'aeirweplus': {'password': 'secret-1'}})
    fail_queries(Partner)
    provider = DatabaseCredentialProvider()

    with pytest.raises(StorageError) as excinfo:
        provider.get_partner('aeirweplus')
    assert excinfo.value.message == 'Failed to look up partner'

    with pytest.raises(StorageError):
        provider.verify('aeirweplus', 'secret-1')
