"""Server-side session records referenced by the client cookie."""

import secrets
from datetime import datetime, timedelta
from blogapp import db


class UserSession(db.Model):
    """Binds an opaque client token to one user until ``expires_at``."""
    
    __tablename__ = 'user_sessions'
    
    id = db.Column(db.Integer, primary_key=True)
    token = db.Column(db.String(100), unique=True, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    expires_at = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    
    @classmethod
    def issue(cls, user_id, lifetime_days=30):
        """Create a session row for ``user_id`` and return it (not committed)."""
        now = datetime.utcnow()
        record = cls(
            user_id=user_id,
            token=secrets.token_urlsafe(48),
            created_at=now,
            expires_at=now + timedelta(days=lifetime_days)
        )
        db.session.add(record)
        return record
    
    @property
    def is_expired(self):
        return self.expires_at <= datetime.utcnow()
    
    def __repr__(self):
        return f'<UserSession user_id={self.user_id} expires_at={self.expires_at}>'
