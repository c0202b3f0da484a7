"""Routes package for the blog application."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from blogapp.utils import load_current_user
    from .auth import auth_bp
    from .blogs import blogs_bp
    
    app.before_request(load_current_user)
    
    app.register_blueprint(auth_bp)
    app.register_blueprint(blogs_bp)
    
    @app.context_processor
    def inject_globals():
        from datetime import datetime
        from flask import g
        return {
            'year': datetime.utcnow().year,
            'current_user': g.get('current_user'),
        }
