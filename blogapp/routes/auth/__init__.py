"""Auth routes package.

This package organizes authentication-related routes into logical submodules:
- core: Local registration, login and logout
- google: Google OAuth sign-in
- phone: OTP phone-verified registration (send, verify)
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

# Import all route modules (registers routes on auth_bp)
from blogapp.routes.auth import core  # noqa: E402,F401
from blogapp.routes.auth import google  # noqa: E402,F401
from blogapp.routes.auth import phone  # noqa: E402,F401
