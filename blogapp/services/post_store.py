"""Content store for blog posts.

Two interchangeable backends share the ``PostStore`` interface:
``SqlPostStore`` persists through SQLAlchemy and ``MemoryPostStore`` keeps
posts in a process-local list behind a lock. The app builds one store at
startup (``POST_STORE`` config) and views reach it through
``get_post_store()``.
"""

import logging
import threading
from datetime import datetime
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from blogapp import db
from blogapp.errors import UpstreamFailure
from blogapp.models import Post
from blogapp.models.post import check_post_fields

logger = logging.getLogger(__name__)

# Returned by list() when there are no posts; the blogs page prints it as-is.
NO_POSTS = 'No Blogs Found'


class PostStore:
    """Interface for post persistence."""

    def create(self, title, content):
        """Validate and store a new post, returning it."""
        raise NotImplementedError

    def list(self):
        """Return all posts in storage order, or ``NO_POSTS`` when empty."""
        raise NotImplementedError

    def delete_by_id(self, post_id):
        """Delete the post if it exists. Missing ids are ignored."""
        raise NotImplementedError

    def count(self):
        posts = self.list()
        return 0 if posts == NO_POSTS else len(posts)


class SqlPostStore(PostStore):

    def create(self, title, content):
        post = Post(title=title, content=content)
        try:
            db.session.add(post)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to save post: {e}")
            raise UpstreamFailure('Failed to create blog post') from e
        return post

    def list(self):
        try:
            posts = Post.query.order_by(Post.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch posts: {e}")
            raise UpstreamFailure('Failed to fetch blogs') from e
        return posts if posts else NO_POSTS

    def delete_by_id(self, post_id):
        try:
            Post.query.filter_by(id=post_id).delete()
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to delete post {post_id}: {e}")
            raise UpstreamFailure('Failed to delete blog') from e


class MemoryPostStore(PostStore):
    """Posts held in memory for the lifetime of the process."""

    def __init__(self):
        self._posts = []
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, title, content):
        check_post_fields(title, content)
        with self._lock:
            now = datetime.utcnow()
            post = Post(title=title, content=content)
            post.id = self._next_id
            post.created_at = now
            post.updated_at = now
            self._next_id += 1
            self._posts.append(post)
        return post

    def list(self):
        with self._lock:
            posts = list(self._posts)
        return posts if posts else NO_POSTS

    def delete_by_id(self, post_id):
        with self._lock:
            self._posts = [p for p in self._posts if p.id != post_id]


STORES = {
    'sql': SqlPostStore,
    'memory': MemoryPostStore,
}


def init_post_store(app):
    """Create the configured store and attach it to ``app``."""
    kind = app.config.get('POST_STORE', 'sql')
    if kind not in STORES:
        raise ValueError(f"Unknown POST_STORE '{kind}'. Use one of: {', '.join(STORES)}")
    app.extensions['post_store'] = STORES[kind]()
    app.logger.info(f"Using {kind} post store")


def get_post_store():
    return current_app.extensions['post_store']
