from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import logging
import os
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
limiter = Limiter(key_func=get_remote_address)


def create_app(config_name=None, **overrides):
    app = Flask(__name__)

    # Config
    from blogapp.config import get_config
    config_name = config_name or os.getenv('FLASK_ENV', 'development')
    app.config.from_object(get_config(config_name))
    app.config.update(overrides)
    if not app.config.get('SECRET_KEY'):
        raise ValueError("Secret key not configured. Set the SECRET environment variable.")

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Initialize extensions
    db.init_app(app)
    limiter.init_app(app)

    from blogapp.services.post_store import init_post_store
    init_post_store(app)

    # Create tables with error handling
    with app.app_context():
        from blogapp import models  # noqa: F401
        try:
            db.create_all()
        except Exception as e:
            app.logger.warning(f"Could not create database tables: {e}")

    from blogapp.errors import register_error_handlers
    register_error_handlers(app)

    # Register routes
    from blogapp.routes import register_routes
    register_routes(app)

    from blogapp.cli import register_commands
    register_commands(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
