"""Shared utilities for the blog application."""

from blogapp.utils.auth import (
    login_required,
    load_current_user,
    start_session,
    end_session
)
from blogapp.utils.forms import form_data

__all__ = [
    'login_required',
    'load_current_user',
    'start_session',
    'end_session',
    'form_data',
]
