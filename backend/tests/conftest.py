"""
Pytest fixtures for Glass POS backend tests.

Every test gets its own SQLite file under tmp_path, a bootstrapped and
seeded store, low bcrypt rounds, and the file printer backend.
"""

import pytest
from glasspos import create_app
from glasspos.extensions import db

TEST_HASH_ROUNDS = 4


def make_app(tmp_path, **overrides):
    config = {
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{(tmp_path / 'glasspos.db').as_posix()}",
        'PASSWORD_HASH_ROUNDS': TEST_HASH_ROUNDS,
        'PRINTER_BACKEND': 'file',
        'PRINTER_OUTPUT_DIR': str(tmp_path / 'receipts'),
    }
    config.update(overrides)
    return create_app(config)


def shutdown_app(app):
    app.extensions['pos_store'].close()
    with app.app_context():
        db.engine.dispose()


@pytest.fixture(scope='function')
def app(tmp_path):
    """Application with schema created and defaults seeded."""
    app = make_app(tmp_path)
    yield app
    shutdown_app(app)


@pytest.fixture(scope='function')
def bare_app(tmp_path):
    """Application whose store file has no tables yet."""
    app = make_app(tmp_path, POS_AUTO_BOOTSTRAP=False)
    yield app
    shutdown_app(app)


@pytest.fixture(scope='function')
def store(app):
    return app.extensions['pos_store']


@pytest.fixture(scope='function')
def bare_store(bare_app):
    return bare_app.extensions['pos_store']


@pytest.fixture(scope='function')
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    return app.test_cli_runner()


def insert_user(store, user_id, username, password_hash, is_active=1, role='cashier'):
    store.execute(
        "INSERT INTO users (id, username, password_hash, full_name, role, is_active, created_at) "
        "VALUES (?, ?, ?, ?, ?, ?, ?)",
        [user_id, username, password_hash, username.title(), role, str(is_active), '2026-01-01T00:00:00+00:00'],
    )


def count_rows(store, table, where='1 = 1', params=()):
    return int(store.query(f"SELECT COUNT(*) FROM {table} WHERE {where}", params)[0][0])
