"""Request body helpers."""

from flask import request


def form_data():
    """Return the submitted fields from a form post, or from a JSON body."""
    if request.form:
        return request.form
    return request.get_json(silent=True) or {}
