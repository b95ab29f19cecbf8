from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flasgger import Swagger
from werkzeug.exceptions import HTTPException

db = SQLAlchemy()
migrate = Migrate()
swagger = Swagger()

API_PREFIX = '/api/v1'


def create_app(config_class=None):
    """Application factory pattern"""
    if config_class is None:
        from config import Config
        config_class = Config

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Swagger configuration (read by init_app)
    app.config['SWAGGER'] = {
        'title': 'Properlia API Documentation',
        'uiversion': 3,
        'openapi': '3.0.0',
        'info': {
            'title': 'Properlia API',
            'description': 'Property catalog API for the Properlia site and dashboard',
            'version': '1.0.0',
        },
        'components': {
            'securitySchemes': {
                'Bearer': {
                    'type': 'http',
                    'scheme': 'bearer',
                    'bearerFormat': 'JWT',
                    'description': 'Token returned by /users/sign_in'
                }
            }
        }
    }

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    swagger.init_app(app)

    # Only the configured front-ends may call the API with credentials.
    # Authorization is exposed so the dashboard can read the token on sign in.
    cors_options = {
        "origins": app.config.get('CORS_ALLOWED_ORIGINS', []),
        "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
        "allow_headers": ["Content-Type", "Authorization"],
        "expose_headers": ["Authorization", "Content-Disposition"],
        "supports_credentials": True
    }
    CORS(app, resources={r"/api/*": cors_options, r"/users/*": cors_options, r"/users": cors_options})

    # Register blueprints - Clean resource-based structure
    from properlia.routes import (
        properties, attachments, property_types, statuses, listing_types,
        general_info, emails, users
    )

    app.register_blueprint(properties.bp, url_prefix=f'{API_PREFIX}/properties')
    app.register_blueprint(attachments.bp, url_prefix=f'{API_PREFIX}/attachments')
    app.register_blueprint(property_types.bp, url_prefix=f'{API_PREFIX}/property_types')
    app.register_blueprint(statuses.bp, url_prefix=f'{API_PREFIX}/statuses')
    app.register_blueprint(listing_types.bp, url_prefix=f'{API_PREFIX}/listing_types')
    app.register_blueprint(general_info.bp, url_prefix=f'{API_PREFIX}/general_info')
    app.register_blueprint(emails.bp, url_prefix=f'{API_PREFIX}/emails')
    app.register_blueprint(users.bp, url_prefix='/users')

    register_error_handlers(app)
    register_commands(app)

    @app.route('/health', methods=['GET'])
    def health():
        """
        Liveness probe
        ---
        tags:
          - Health
        responses:
          200:
            description: Service is up
        """
        return jsonify({'status': 'ok'}), 200

    return app


def register_error_handlers(app):
    from properlia.utils.errors import ProperliaError

    @app.errorhandler(ProperliaError)
    def handle_properlia_error(error):
        db.session.rollback()
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        # Keep every error JSON, including Flask's own 404/405/413
        return jsonify({'error': error.description}), error.code


def register_commands(app):
    @app.cli.command('init-db')
    def init_db_command():
        """Create tables and seed reference data."""
        from properlia.utils.db_init import initialize_database
        if initialize_database():
            print('Database initialized')
        else:
            print('Database initialization failed, check the logs')
