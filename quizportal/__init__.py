import os

from flask import Flask, request, render_template
from flask_login import LoginManager
from flask_compress import Compress
from dotenv import load_dotenv

from quizportal.config import config

# Extensions
login_manager = LoginManager()
compress = Compress()


def create_app(config_class=None):
    """Application factory"""
    app = Flask(__name__)
    load_dotenv()

    # ==================== CONFIG ====================
    if config_class is None:
        config_class = config[os.getenv('FLASK_CONFIG', 'default')]
    app.config.from_object(config_class)

    # ==================== INIT EXTENSIONS ====================
    login_manager.init_app(app)
    compress.init_app(app)

    # ==================== FLASK-LOGIN ====================
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'
    login_manager.login_message_category = 'warning'

    # ==================== REGISTER BLUEPRINTS ====================
    from quizportal.auth.routes import auth_bp
    from quizportal.admin.routes import admin_bp
    from quizportal.student.routes import student_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(student_bp, url_prefix='/student')

    # user_loader registration
    from quizportal import models  # noqa: F401

    config_class.init_app(app)

    from quizportal.api import close_api
    app.teardown_appcontext(close_api)

    # ==================== CONTEXT PROCESSOR ====================
    from quizportal.navigation import navigation_context

    @app.context_processor
    def inject_globals():
        from datetime import datetime
        context = {
            'site_name': app.config.get('SITE_NAME', 'Sharks Quiz'),
            'current_year': datetime.now().year,
        }
        context.update(navigation_context())
        return context

    # ==================== JINJA2 FILTERS ====================
    from quizportal import utils

    @app.template_filter('local_datetime')
    def local_datetime_filter(value, format='%a, %b %d, %Y, %I:%M %p'):
        """ISO string -> 'Mon, Oct 19, 2026, 02:30 PM' in DISPLAY_TIMEZONE"""
        dt = utils.parse_datetime(value)
        if dt is None:
            return ''
        return dt.astimezone(utils.display_timezone()).strftime(format)

    @app.template_filter('long_date')
    def long_date_filter(value):
        """ISO string -> 'October 19, 2026'"""
        dt = utils.parse_datetime(value)
        if dt is None:
            return ''
        dt = dt.astimezone(utils.display_timezone())
        return f'{dt:%B} {dt.day}, {dt.year}'

    @app.template_filter('short_date')
    def short_date_filter(value):
        dt = utils.parse_datetime(value)
        if dt is None:
            return ''
        dt = dt.astimezone(utils.display_timezone())
        return f'{dt.month}/{dt.day}/{dt.year}'

    @app.template_filter('number')
    def number_filter(value):
        """85.0 -> 85, 72.5 -> 72.5, None -> 0"""
        if value is None:
            return 0
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    @app.template_filter('time_remaining')
    def time_remaining_filter(value):
        dt = utils.parse_datetime(value)
        if dt is None:
            return ''
        return utils.time_remaining(dt, utils.utc_now())

    @app.template_filter('urgency_class')
    def urgency_class_filter(value):
        dt = utils.parse_datetime(value)
        if dt is None:
            return 'secondary'
        return utils.urgency_class(dt, utils.utc_now())

    app.add_template_filter(utils.score_class, 'score_class')
    app.add_template_filter(utils.format_file_size, 'file_size')

    # ==================== ERROR HANDLERS ====================
    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(413)
    def too_large_error(error):
        limit = app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)
        return render_template('errors/413.html', limit=limit), 413

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f'Internal error on {request.path}: {error}')
        return render_template('errors/500.html'), 500

    # ==================== AFTER REQUEST ====================
    @app.after_request
    def after_request(response):
        """Static caching + basic security headers"""
        if request.path.startswith('/static/'):
            response.cache_control.max_age = 31536000
            response.cache_control.public = True

        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-XSS-Protection'] = '1; mode=block'
        return response

    return app
