from os import getenv
from flask import Flask

from theme_helper.config import config
from theme_helper.services.theme import Theme

# Initialize extensions
theme = Theme()

def create_app(config_name='default'):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # Initialize extensions
    theme.init_app(app)

    # Register blueprints
    with app.app_context():
        from theme_helper.routes import index
        app.register_blueprint(index.bp)

    return app


if __name__ == '__main__':
    create_app(getenv('FLASK_ENV', 'production')).run(host='0.0.0.0', port=5000)
