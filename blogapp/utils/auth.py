"""Session cookie handling and the route guard.

``load_current_user`` runs before every request and sets
``g.current_user`` from the session cookie (None when anonymous).
``login_required`` redirects anonymous requests to the login page.
"""

from functools import wraps
from flask import request, redirect, url_for, current_app, g
from blogapp.services import sessions


def session_token():
    """Return the session token sent by the client, if any."""
    return request.cookies.get(current_app.config['BLOG_SESSION_COOKIE'])


def load_current_user():
    g.current_user = sessions.resolve(session_token())


def start_session(response, user):
    """Establish a session for ``user`` and attach its cookie to ``response``."""
    token = sessions.establish(user)
    response.set_cookie(
        current_app.config['BLOG_SESSION_COOKIE'],
        token,
        max_age=current_app.config['SESSION_LIFETIME_DAYS'] * 24 * 60 * 60,
        httponly=True,
        secure=current_app.config['BLOG_SESSION_COOKIE_SECURE'],
        samesite='Lax'
    )
    return response


def end_session(response):
    """Destroy the current session and clear its cookie."""
    sessions.destroy(session_token())
    response.delete_cookie(current_app.config['BLOG_SESSION_COOKIE'])
    return response


def login_required(f):
    """
    Decorator that admits authenticated requests and redirects the rest.

    Usage:
        @blogs_bp.route('/compose')
        @login_required
        def compose():
            user = g.current_user
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        if g.get('current_user') is None:
            return redirect(url_for('auth.login'))
        return f(*args, **kwargs)
    return decorated
