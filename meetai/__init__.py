from flask import Flask, jsonify
from flask_cors import CORS
import os
import logging
from .config import config as app_config


def create_app(config_name=None):
    # Set default environment to development if not specified
    APPLICATION_ENV = config_name or os.getenv('APPLICATION_ENV', 'development')

    # Initialize Flask app
    app = Flask(__name__)

    # Configure logging
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)

    # Load configuration
    app.config.from_object(app_config.get(APPLICATION_ENV, app_config['development']))

    # Enable CORS for API endpoints; session cookies only travel to listed origins
    cors_origins = app.config['CORS_ORIGINS']
    CORS(
        app,
        resources={r'/api/*': {'origins': cors_origins}},
        supports_credentials='*' not in cors_origins,
    )
    if '*' in cors_origins:
        logger.warning("CORS_ORIGINS allows any origin; credentialed requests are disabled")

    # Health check endpoint (required for Cloud Run and health checks)
    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({
            'status': 'healthy',
            'service': 'meetai-backend',
            'environment': APPLICATION_ENV
        }), 200

    # Root endpoint
    @app.route('/', methods=['GET'])
    def home():
        return jsonify({
            'message': 'Welcome to the Meet.AI API',
            'service': 'meetai-backend',
            'version': '1.0.0',
            'environment': APPLICATION_ENV
        }), 200

    # Status endpoint
    @app.route('/status', methods=['GET'])
    def status():
        return jsonify({
            'message': 'Meet.AI API Status: Running!',
            'status': 'operational',
            'environment': APPLICATION_ENV
        }), 200

    from .agents.constants import API_PREFIX as AGENTS_API_PREFIX
    from .agents.routes import agents_bp
    app.register_blueprint(agents_bp, url_prefix=AGENTS_API_PREFIX)
    logger.info("Successfully registered Agents blueprint")

    from .auth.routes import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/api/v1/auth')
    logger.info("Successfully registered Auth blueprint")

    from .live.routes import live_bp
    app.register_blueprint(live_bp, url_prefix='/api/live')
    logger.info("Successfully registered Live blueprint")

    return app
