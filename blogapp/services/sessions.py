"""Session manager: binds client tokens to users across requests.

Only the user id is stored with the token; every ``resolve`` re-reads the
user row, so changes to the account are visible on the next request.
"""

import logging
from datetime import datetime
from flask import current_app
from blogapp import db
from blogapp.models import User, UserSession

logger = logging.getLogger(__name__)


def establish(user):
    """Start an authenticated session for ``user`` and return its token."""
    record = UserSession.issue(user.id, current_app.config['SESSION_LIFETIME_DAYS'])
    db.session.commit()
    logger.info(f"Session established for user {user.id}")
    return record.token


def resolve(token):
    """Return the user bound to ``token``, or None for anonymous clients.

    Expired sessions are deleted as they are found.
    """
    if not token:
        return None

    record = UserSession.query.filter_by(token=token).first()
    if not record:
        return None

    if record.is_expired:
        db.session.delete(record)
        db.session.commit()
        logger.info(f"Session expired for user {record.user_id}")
        return None

    return db.session.get(User, record.user_id)


def destroy(token):
    """Delete the session for ``token`` if there is one."""
    if not token:
        return
    deleted = UserSession.query.filter_by(token=token).delete()
    db.session.commit()
    if deleted:
        logger.info("Session destroyed")


def purge_expired():
    """Remove every expired session. Returns the number of rows deleted."""
    deleted = UserSession.query.filter(UserSession.expires_at <= datetime.utcnow()).delete()
    db.session.commit()
    return deleted
