"""Post model for blog entries."""

from datetime import datetime
from sqlalchemy.orm import validates
from blogapp import db
from blogapp.errors import ValidationError

TITLE_MIN_LENGTH = 20
CONTENT_MIN_LENGTH = 100


def check_post_fields(title, content):
    """Raise ValidationError unless title and content meet the minimum lengths."""
    check_length('title', title, TITLE_MIN_LENGTH)
    check_length('content', content, CONTENT_MIN_LENGTH)


def check_length(field, value, min_length):
    if not isinstance(value, str) or not value:
        raise ValidationError(f'{field} is required')
    if len(value) < min_length:
        raise ValidationError(f'{field} must be at least {min_length} characters')
    return value


class Post(db.Model):
    """A blog post."""
    
    __tablename__ = 'posts'
    
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    @validates('title')
    def validate_title(self, key, value):
        return check_length(key, value, TITLE_MIN_LENGTH)
    
    @validates('content')
    def validate_content(self, key, value):
        return check_length(key, value, CONTENT_MIN_LENGTH)
    
    def to_dict(self):
        """Convert post to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }
    
    def __repr__(self):
        return f'<Post {self.id}: {self.title}>'
