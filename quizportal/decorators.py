from functools import wraps

from flask import flash, redirect, url_for
from flask_login import current_user, logout_user

from quizportal import login_manager
from quizportal.api import forget_token

KNOWN_ROLES = ('admin', 'student')


def home_endpoint(role):
    """Dashboard a role lands on after login"""
    return 'admin.dashboard' if role == 'admin' else 'student.dashboard'


def role_required(role):
    """
    Restrict a view to one role

    Anonymous users go through Flask-Login's unauthorized flow; logged-in
    users with another role are sent back to their own dashboard.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                return login_manager.unauthorized()
            if current_user.role not in KNOWN_ROLES:
                logout_user()
                forget_token()
                flash('Your account has no portal role. Please log in again.', 'danger')
                return redirect(url_for('auth.login'))
            if current_user.role != role:
                flash('You do not have permission to access that page.', 'warning')
                return redirect(url_for(home_endpoint(current_user.role)))
            return f(*args, **kwargs)
        return decorated_function
    return decorator


admin_required = role_required('admin')
student_required = role_required('student')
