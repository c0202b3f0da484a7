"""
Tests for Google OAuth sign-in.
"""

from urllib.parse import urlparse, parse_qs
import pytest
import requests

from blogapp.errors import InvalidCredential, UniquenessViolation
from blogapp.models import User, UserSession
from blogapp.services import google_oauth
from blogapp.services.authenticators import ProviderAuthenticator, save_user
from blogapp.services.google_oauth import ProviderProfile
from tests.conftest import _create_user


class FakeResponse:

    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload
        self.content = b'{}'

    def json(self):
        return self._payload


@pytest.fixture
def google_api(monkeypatch):
    """Stand in for Google's token and userinfo endpoints."""
    profile = {'id': '1098765', 'name': 'Ada Lovelace'}
    calls = []

    def fake_post(url, data=None, timeout=None):
        calls.append(('post', url, data))
        if data['code'] == 'good-code':
            return FakeResponse(200, {'access_token': 'access-123'})
        return FakeResponse(400, {'error': 'invalid_grant'})

    def fake_get(url, headers=None, timeout=None):
        calls.append(('get', url, headers))
        return FakeResponse(200, profile)

    monkeypatch.setattr(google_oauth.requests, 'post', fake_post)
    monkeypatch.setattr(google_oauth.requests, 'get', fake_get)
    return {'profile': profile, 'calls': calls}


def start_sign_in(client):
    """Begin sign-in and return the state Google would echo back."""
    response = client.get('/auth/google')
    return parse_qs(urlparse(response.headers['Location']).query)['state'][0]


def callback_url(client, code='good-code', state=None):
    state = state or start_sign_in(client)
    return f'/auth/google/success?code={code}&state={state}'


class TestGoogleStart:
    """Tests for GET /auth/google"""

    def test_redirects_to_google(self, client):
        response = client.get('/auth/google')

        assert response.status_code == 302
        location = urlparse(response.headers['Location'])
        assert location.netloc == 'accounts.google.com'
        params = parse_qs(location.query)
        assert params['client_id'] == ['test-client-id']
        assert params['scope'] == ['profile']
        assert params['redirect_uri'] == ['http://localhost/auth/google/success']
        assert 'state' in params

    def test_not_configured(self, app, client):
        app.config['GOOGLE_CLIENT_ID'] = None
        try:
            response = client.get('/auth/google')
        finally:
            app.config['GOOGLE_CLIENT_ID'] = 'test-client-id'

        assert response.status_code == 502
        assert 'error' in response.json


class TestGoogleCallback:
    """Tests for GET /auth/google/success"""

    def test_new_user_created_and_logged_in(self, app, client, db_session, google_api):
        response = client.get(callback_url(client))

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/compose')
        user = User.query.filter_by(google_id='1098765').one()
        assert user.username == 'Ada Lovelace'
        assert user.password_hash is None
        assert client.get('/compose').status_code == 200

    def test_existing_user_logged_in(self, app, client, db_session, google_api):
        """Returning Google users get a session too."""
        client.get(callback_url(client))
        client.get('/logout')

        response = client.get(callback_url(client))

        assert response.headers['Location'].endswith('/compose')
        assert User.query.count() == 1
        assert UserSession.query.count() == 1

    def test_bad_state_rejected(self, app, client, db_session, google_api):
        response = client.get(callback_url(client, state='forged'))

        assert response.headers['Location'].endswith('/login')
        assert google_api['calls'] == []
        assert User.query.count() == 0

    def test_rejected_code(self, app, client, db_session, google_api):
        response = client.get(callback_url(client, code='bad-code'))

        assert response.headers['Location'].endswith('/login')
        assert User.query.count() == 0

    def test_user_denied_consent(self, client, db_session):
        response = client.get('/auth/google/success?error=access_denied')

        assert response.headers['Location'].endswith('/login')

    def test_network_error(self, app, client, db_session, monkeypatch):
        def broken_post(*args, **kwargs):
            raise requests.ConnectionError('down')

        monkeypatch.setattr(google_oauth.requests, 'post', broken_post)

        response = client.get(callback_url(client))

        assert response.headers['Location'].endswith('/login')

    def test_display_name_taken_falls_back_to_google_id(self, app, client, db_session, google_api):
        """A Google user whose display name is already a username still signs in."""
        _create_user(username='Ada Lovelace')

        response = client.get(callback_url(client))

        assert response.headers['Location'].endswith('/compose')
        user = User.query.filter_by(google_id='1098765').one()
        assert user.username == 'google_1098765'
        assert User.query.filter_by(username='Ada Lovelace').one().google_id is None

    def test_state_from_another_browser_rejected(self, app, client, db_session, google_api):
        """A state issued to one browser cannot finish sign-in in another."""
        state = start_sign_in(client)
        other = app.test_client()

        response = other.get(f'/auth/google/success?code=good-code&state={state}')

        assert response.headers['Location'].endswith('/login')
        assert google_api['calls'] == []
        assert User.query.count() == 0
        assert UserSession.query.count() == 0

    def test_state_is_single_use(self, app, client, db_session, google_api):
        url = callback_url(client)
        client.get(url)
        client.get('/logout')

        response = client.get(url)

        assert response.headers['Location'].endswith('/login')
        assert UserSession.query.count() == 0


class TestProviderAuthenticator:

    def test_resolve_creates_once(self, app, db_session):
        profile = ProviderProfile(provider_id='42', display_name='Grace Hopper')

        first = ProviderAuthenticator().resolve(profile)
        second = ProviderAuthenticator().resolve(profile)

        assert first.id == second.id
        assert User.query.count() == 1

    def test_duplicate_google_id_reports_google_account(self, app, db_session):
        _create_user(username='first_owner', google_id='77')

        with pytest.raises(UniquenessViolation) as excinfo:
            save_user(User(username='second_owner', google_id='77'))

        assert 'Google account' in excinfo.value.message
        assert User.query.filter_by(google_id='77').count() == 1

    def test_check_state_rejects_missing(self, app):
        with app.test_request_context():
            with pytest.raises(InvalidCredential):
                google_oauth.check_state(None)
