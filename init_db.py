#!/usr/bin/env python
"""Database initialization script for the blog.

Creates the users, posts, user_sessions and pending_challenges tables.
Run this once before starting the application for the first time.

Usage:
    python init_db.py
"""

import os
import sys
from blogapp import create_app, db


def init_database():
    """Initialize the database by creating all tables."""
    
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)
    
    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")
    
    with app.app_context():
        try:
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")
            
            db.create_all()
            
            tables_info = [
                ("users", "User accounts and credentials"),
                ("posts", "Blog posts"),
                ("user_sessions", "Server-side login sessions"),
                ("pending_challenges", "Phone verification codes awaiting entry"),
            ]
            
            print("Created tables:")
            for table_name, description in tables_info:
                print(f"  - {table_name:<25} {description}")
            
            print("\nNext steps:")
            print("  1. Start the server: python wsgi.py")
            print("  2. Open /register in a browser\n")
            
            return True
        except Exception as e:
            print(f"Error creating tables: {e}")
            return False


if __name__ == '__main__':
    sys.exit(0 if init_database() else 1)
