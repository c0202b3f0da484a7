"""Pending phone-verification challenges for OTP registration."""

from datetime import datetime
from blogapp import db


class PendingChallenge(db.Model):
    """A 6-digit code sent to ``phone`` plus the account waiting on it.
    
    The password is kept only as a hash. The row is deleted once the code
    matches and the user exists.
    """
    
    __tablename__ = 'pending_challenges'
    
    id = db.Column(db.Integer, primary_key=True)
    phone = db.Column(db.String(20), unique=True, nullable=False, index=True)
    code = db.Column(db.String(6), nullable=False)
    username = db.Column(db.String(80), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    
    def __repr__(self):
        return f'<PendingChallenge {self.phone}>'
