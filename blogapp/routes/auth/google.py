"""Google OAuth sign-in routes."""

from flask import request, redirect, url_for, flash, current_app, make_response
from blogapp.errors import BlogError, UpstreamFailure
from blogapp.routes.auth import auth_bp
from blogapp.services import google_oauth
from blogapp.services.authenticators import ProviderAuthenticator
from blogapp.utils import start_session


@auth_bp.route('/auth/google', methods=['GET'])
def google_start():
    """Redirect to Google's consent page."""
    if not google_oauth.is_configured():
        current_app.logger.error("Google OAuth is not configured")
        raise UpstreamFailure('Google sign-in is not configured')
    return redirect(google_oauth.authorization_url())


@auth_bp.route('/auth/google/success', methods=['GET'])
def google_callback():
    """Finish Google sign-in for new and returning users alike."""
    if request.args.get('error'):
        current_app.logger.info(f"Google sign-in denied: {request.args['error']}")
        return redirect(url_for('auth.login'))

    try:
        profile = google_oauth.fetch_profile(request.args.get('code'), request.args.get('state'))
        user = ProviderAuthenticator().resolve(profile)
    except BlogError as e:
        current_app.logger.warning(f"Google sign-in failed: {e.message}")
        flash(e.message, 'error')
        return redirect(url_for('auth.login'))

    current_app.logger.info(f"Google sign-in: user {user.id}")
    return start_session(make_response(redirect(url_for('blogs.compose'))), user)
