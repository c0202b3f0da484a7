"""Google OAuth 2.0 helpers: authorize redirect, code exchange, profile fetch.

The ``state`` parameter is a short-lived JWT signed with the app secret.
Its nonce is also kept in the signed Flask session of the browser that
started sign-in, so a state issued to one browser is rejected in another.
"""

import logging
from collections import namedtuple
from datetime import datetime, timedelta
from urllib.parse import urlencode
import secrets
import jwt
import requests
from flask import current_app, session
from blogapp.errors import InvalidCredential, UpstreamFailure

logger = logging.getLogger(__name__)

AUTHORIZE_URL = 'https://accounts.google.com/o/oauth2/v2/auth'
TOKEN_URL = 'https://oauth2.googleapis.com/token'
USERINFO_URL = 'https://www.googleapis.com/oauth2/v2/userinfo'
REQUEST_TIMEOUT = 10
STATE_TTL_MINUTES = 10
STATE_SESSION_KEY = 'google_oauth_nonce'

ProviderProfile = namedtuple('ProviderProfile', ['provider_id', 'display_name'])


def is_configured():
    return bool(current_app.config.get('GOOGLE_CLIENT_ID') and current_app.config.get('GOOGLE_CLIENT_SECRET'))


def make_state():
    """Issue a signed state and remember its nonce in this browser's session."""
    nonce = secrets.token_urlsafe(16)
    session[STATE_SESSION_KEY] = nonce
    payload = {
        'nonce': nonce,
        'exp': datetime.utcnow() + timedelta(minutes=STATE_TTL_MINUTES)
    }
    return jwt.encode(payload, current_app.config['SECRET_KEY'], algorithm='HS256')


def check_state(state):
    """Raise InvalidCredential unless ``state`` was issued to this browser.

    The remembered nonce is single-use and cleared on every check.
    """
    expected = session.pop(STATE_SESSION_KEY, None)
    if not state:
        raise InvalidCredential('Missing OAuth state')
    try:
        payload = jwt.decode(state, current_app.config['SECRET_KEY'], algorithms=['HS256'])
    except jwt.ExpiredSignatureError:
        raise InvalidCredential('OAuth state has expired')
    except jwt.InvalidTokenError:
        raise InvalidCredential('OAuth state is invalid')

    nonce = payload.get('nonce')
    if not expected or not isinstance(nonce, str) or not secrets.compare_digest(nonce, expected):
        raise InvalidCredential('OAuth state does not match this browser')


def authorization_url():
    """Build the Google consent URL (scope: profile)."""
    params = {
        'client_id': current_app.config['GOOGLE_CLIENT_ID'],
        'redirect_uri': current_app.config['GOOGLE_CALLBACK_URL'],
        'response_type': 'code',
        'scope': 'profile',
        'state': make_state(),
    }
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


def get_google_access_token(code):
    """Exchange authorization code for Google access token."""
    try:
        response = requests.post(
            TOKEN_URL,
            data={
                'client_id': current_app.config['GOOGLE_CLIENT_ID'],
                'client_secret': current_app.config['GOOGLE_CLIENT_SECRET'],
                'code': code,
                'redirect_uri': current_app.config['GOOGLE_CALLBACK_URL'],
                'grant_type': 'authorization_code',
            },
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error(f"Google token exchange failed: {e}")
        raise UpstreamFailure('Google sign-in failed') from e

    data = response.json() if response.content else {}
    if response.status_code != 200 or 'access_token' not in data:
        logger.warning(f"Google token exchange rejected: {response.status_code} {data.get('error')}")
        raise InvalidCredential('Google sign-in was not authorized')
    return data['access_token']


def get_google_user(access_token):
    """Get Google user data using access token."""
    try:
        response = requests.get(
            USERINFO_URL,
            headers={'Authorization': f'Bearer {access_token}'},
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error(f"Google profile fetch failed: {e}")
        raise UpstreamFailure('Google sign-in failed') from e

    if response.status_code != 200:
        raise UpstreamFailure('Could not read Google profile')
    return response.json()


def fetch_profile(code, state):
    """Turn a callback's ``code``/``state`` into a verified ProviderProfile."""
    check_state(state)
    if not code:
        raise InvalidCredential('Missing authorization code')

    info = get_google_user(get_google_access_token(code))
    if not info.get('id'):
        raise UpstreamFailure('Google profile has no id')

    return ProviderProfile(
        provider_id=str(info['id']),
        display_name=info.get('name') or f"google_{info['id']}",
    )
