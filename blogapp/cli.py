"""Flask CLI commands: ``flask init-db`` and ``flask purge-sessions``."""

import click
from blogapp import db


def register_commands(app):

    @app.cli.command('init-db')
    def init_db_command():
        """Create all database tables."""
        db.create_all()
        click.echo(f"Database tables created ({app.config['SQLALCHEMY_DATABASE_URI']})")

    @app.cli.command('purge-sessions')
    def purge_sessions_command():
        """Delete expired login sessions."""
        from blogapp.services.sessions import purge_expired
        deleted = purge_expired()
        click.echo(f"Removed {deleted} expired session(s)")
