"""Core authentication routes: registration, login and logout."""

from flask import render_template, redirect, url_for, flash, current_app, make_response
from blogapp import limiter
from blogapp.errors import NotFound, InvalidCredential
from blogapp.routes.auth import auth_bp
from blogapp.services.authenticators import register_local, LocalAuthenticator
from blogapp.utils import start_session, end_session, form_data


@auth_bp.route('/register', methods=['GET'])
def register_form():
    return render_template('register.html', title='Register')


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("5 per minute")
def register():
    """Register a new user account. The user logs in afterwards."""
    data = form_data()
    user = register_local(data.get('username'), data.get('password'))
    current_app.logger.info(f"User registered: {user.id}")
    return redirect(url_for('auth.login'))


@auth_bp.route('/login', methods=['GET'])
def login_form():
    return render_template('login.html', title='Login')


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    """Check username/password and start a session."""
    data = form_data()
    try:
        user = LocalAuthenticator().resolve(data.get('username'), data.get('password'))
    except (NotFound, InvalidCredential) as e:
        current_app.logger.info(f"Login failed: {e.message}")
        flash(e.message, 'error')
        return redirect(url_for('auth.login'))

    current_app.logger.info(f"Login successful: user {user.id}")
    return start_session(make_response(redirect(url_for('blogs.compose'))), user)


@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    return end_session(make_response(redirect(url_for('blogs.home'))))
