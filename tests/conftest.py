"""
Pytest configuration and fixtures for testing the blog.
"""

import os
import sys
import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from blogapp import create_app, db
from blogapp.models.user import User

fake = Faker()

TEST_PASSWORD = 'testpassword123'


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


def make_username():
    return fake.user_name() + fake.pystr(min_chars=4, max_chars=6)


def make_title():
    return fake.pystr(min_chars=20, max_chars=40)


def make_content():
    return fake.pystr(min_chars=100, max_chars=160)


def _create_user(password=TEST_PASSWORD, **overrides):
    """Helper to create a user with sensible defaults."""
    data = {'username': make_username()}
    data.update(overrides)
    user = User(**data)
    if password:
        user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return {
        'id': user.id,
        'username': user.username,
        'password': password,
    }


@pytest.fixture
def test_user(app, db_session):
    """Create a test user."""
    return _create_user()


@pytest.fixture
def logged_in_client(client, test_user):
    """Test client holding a session cookie for test_user."""
    response = client.post('/login', data={
        'username': test_user['username'],
        'password': test_user['password'],
    })
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/compose')
    return client


@pytest.fixture
def sms_outbox(monkeypatch):
    """Capture outgoing verification SMS instead of calling Twilio."""
    sent = []

    def fake_send_sms(phone, body):
        sent.append({'phone': phone, 'body': body})

    monkeypatch.setattr('blogapp.services.authenticators.send_sms', fake_send_sms)
    return sent


@pytest.fixture(autouse=True)
def _restore_limiter_state():
    """create_app() re-inits the module-global limiter; undo that leak between tests."""
    from blogapp import limiter
    enabled = limiter.enabled
    yield
    limiter.enabled = enabled
