import os
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


class Config:
    """Base configuration for the quiz portal"""

    # ==================== BASICS ====================
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SITE_NAME = os.environ.get('SITE_NAME') or 'Sharks Quiz'

    # ==================== REST API ====================
    API_BASE_URL = (os.environ.get('API_BASE_URL') or 'http://localhost:5000').rstrip('/')
    API_TIMEOUT = float(os.environ.get('API_TIMEOUT') or 15)  # seconds
    # Optional httpx transport (tests inject httpx.MockTransport here)
    API_TRANSPORT = None

    # ==================== SESSION ====================
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # ==================== UPLOAD FILE ====================
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10MB
    PROFILE_PICTURE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}
    ASSIGNMENT_EXTENSIONS = {'pdf', 'doc', 'docx', 'txt', 'zip'}

    # ==================== DISPLAY ====================
    DISPLAY_TIMEZONE = os.environ.get('DISPLAY_TIMEZONE') or 'UTC'
    SUCCESS_REDIRECT_DELAY = 2  # seconds, after quiz/assignment creation
    SIGNUP_REDIRECT_DELAY = 3  # seconds, long enough to read the username

    # ==================== FLASK-COMPRESS ====================
    COMPRESS_MIMETYPES = [
        'text/html', 'text/css', 'text/xml', 'application/json',
        'application/javascript', 'text/javascript'
    ]
    COMPRESS_LEVEL = 6
    COMPRESS_MIN_SIZE = 500

    @staticmethod
    def init_app(app):
        """Logging setup"""
        import logging
        from logging.handlers import RotatingFileHandler

        if not app.debug and not app.testing:
            if not os.path.exists('logs'):
                os.mkdir('logs')
            file_handler = RotatingFileHandler(
                'logs/quizportal.log',
                maxBytes=1024 * 1024,  # 1MB
                backupCount=3
            )
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
            ))
            file_handler.setLevel(logging.INFO)
            app.logger.addHandler(file_handler)
            app.logger.setLevel(logging.INFO)
            app.logger.info('Quiz portal startup')


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False
    SESSION_COOKIE_SECURE = True
    API_TIMEOUT = float(os.environ.get('API_TIMEOUT') or 20)


class TestingConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    SECRET_KEY = 'testing-secret-key'
    API_BASE_URL = 'http://api.test'


# Config selected by FLASK_CONFIG
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': Config
}
