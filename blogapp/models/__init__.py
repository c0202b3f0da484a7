"""Database models for the blog application."""

from .user import User
from .post import Post
from .user_session import UserSession
from .pending_challenge import PendingChallenge

__all__ = ['User', 'Post', 'UserSession', 'PendingChallenge']
