from flask import Blueprint, render_template, redirect, url_for, current_app, flash
from flask_login import login_user, logout_user, current_user

from quizportal.api import ApiError, get_api, remember_token, forget_token
from quizportal.decorators import home_endpoint
from quizportal.forms import LoginForm, SignupForm, REQUIRED_FIELDS_MESSAGE
from quizportal.models import User
from quizportal.utils import banner_error, image_preview

auth_bp = Blueprint('auth', __name__)


# ==================== LOGIN & LOGOUT ====================
@auth_bp.route('/', methods=['GET', 'POST'])
def login():
    """Username + PIN login, redirect by role"""
    if current_user.is_authenticated:
        return redirect(url_for(home_endpoint(current_user.role)))

    form = LoginForm()
    alert = None

    if form.is_submitted():
        if not form.validate():
            alert = {'type': 'error', 'message': banner_error(form)}
            return render_template('auth/login.html', form=form, alert=alert)

        username = form.username.data
        try:
            data = get_api().login(username, form.pin.data)
        except ApiError as e:
            alert = {'type': 'error', 'message': e.message}
            return render_template('auth/login.html', form=form, alert=alert)

        data = data if isinstance(data, dict) else {}
        role = data.get('role')
        token = data.get('token')
        if token:
            user = User.from_token(token, username=username, role=role)
            remember_token(token, user.role)
            login_user(user)
            current_app.logger.info(f'Login: {username} ({user.role})')
            role = user.role

        flash(data.get('message') or 'Login successful.', 'success')
        return redirect(url_for(home_endpoint(role)))

    return render_template('auth/login.html', form=form, alert=alert)


@auth_bp.route('/logout')
def logout():
    """Drop the token and the login session"""
    logout_user()
    forget_token()
    return redirect(url_for('auth.login'))


# ==================== SIGNUP ====================
@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup():
    """Account creation; the API generates the username"""
    form = SignupForm()
    alert = None
    preview = None

    if form.is_submitted():
        preview = image_preview(form.profile_picture.data)

        if not form.validate():
            alert = {'type': 'error', 'message': banner_error(form, REQUIRED_FIELDS_MESSAGE)}
            return render_template('auth/signup.html', form=form, alert=alert, preview=preview)

        try:
            data = get_api().register(
                email=form.email.data,
                phone=form.phone.data,
                first_name=form.first_name.data,
                last_name=form.last_name.data,
                pin=form.pin.data,
                profile_picture=form.profile_picture.data,
            )
        except ApiError as e:
            alert = {'type': 'error', 'message': e.message}
            return render_template('auth/signup.html', form=form, alert=alert, preview=preview)

        data = data if isinstance(data, dict) else {}
        current_app.logger.info(f"New account registered: {data.get('username')}")
        alert = {
            'type': 'success',
            'message': data.get('message') or 'Account created successfully!',
            'username': data.get('username'),
        }
        return render_template('auth/signup.html', form=form, alert=alert, preview=preview,
                               redirect_url=url_for('auth.login'),
                               redirect_delay=current_app.config['SIGNUP_REDIRECT_DELAY'])

    return render_template('auth/signup.html', form=form, alert=alert, preview=preview)
