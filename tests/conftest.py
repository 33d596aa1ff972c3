# tests/conftest.py

import pytest

from config import Config

PARTNERS = {
    'johnweplus': {'password': 'JohnTestPass', 'displayName': 'John WeePlus'},
    'neenyweplus': {'password': 'NeenyTestPass', 'displayName': 'Neeny WeePlus'},
    'john': {'password': 'ShortJohnPass', 'displayName': 'John'},
}


class ConfigForTests(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    UPLOAD_BATCH_SIZE = 2
    PARTNER_MATCH_POLICY = 'substring'
    RESPONSE_FIELD_STYLE = 'camel'


class ExactMatchConfig(ConfigForTests):
    PARTNER_MATCH_POLICY = 'exact'
    RESPONSE_FIELD_STYLE = 'snake'


def _build_app(config_class):
    from partner_commission import create_app, db
    from partner_commission import models  # noqa: F401
    from partner_commission.auth import StaticCredentialProvider

    app = create_app(config_class, credential_provider=StaticCredentialProvider(PARTNERS))
    with app.app_context():
        db.create_all()
        yield app  # The tests will run here
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app():
    """
    A fresh app per test with an in-memory database and a static partner table.
    Yields inside an application context.
    """
    yield from _build_app(ConfigForTests)


@pytest.fixture
def exact_app():
    yield from _build_app(ExactMatchConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_record():
    """Factory for CommissionRecord with sensible defaults."""
    from partner_commission.calculator.schema import CommissionRecord

    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        values = {'id': f"record_test_{counter['n']}", 'order_date': '2025-01-15',
                  'order_no': f"ORDER-{counter['n']}"}
        values.update(overrides)
        return CommissionRecord(**values)

    return _make


class _FailingQuery:
    """Stands in for Model.query; any use of it fails like a dead database."""

    def __getattr__(self, name):
        from sqlalchemy.exc import OperationalError
        raise OperationalError('SELECT', {}, Exception('database is locked'))


@pytest.fixture
def fail_queries(monkeypatch):
    """Makes every `<Model>.query` call on the given models raise OperationalError."""

    def _fail(*models):
        for model in models:
            monkeypatch.setattr(model, 'query', _FailingQuery())

    return _fail
