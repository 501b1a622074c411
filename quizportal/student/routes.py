from flask import Blueprint, render_template, current_app
from pydantic import ValidationError

from quizportal.api import ApiError, get_api
from quizportal.decorators import student_required
from quizportal.models import StudentDashboard, QuizLists

student_bp = Blueprint('student', __name__)


@student_bp.route('/dashboard')
@student_required
def dashboard():
    """Average score, quiz counts and recent results"""
    try:
        data = StudentDashboard.model_validate(get_api().student_dashboard())
    except (ApiError, ValidationError) as e:
        current_app.logger.error(f'Error fetching student dashboard: {e}')
        return render_template('student/dashboard.html', data=None,
                               error='Failed to load dashboard data')
    return render_template('student/dashboard.html', data=data, error=None)


@student_bp.route('/test-quizzes')
@student_required
def quizzes():
    """Available quizzes with due-date badges, past quizzes with scores"""
    try:
        lists = QuizLists.model_validate(get_api().student_quizzes() or {})
    except (ApiError, ValidationError) as e:
        current_app.logger.error(f'Error fetching quizzes: {e}')
        return render_template('student/quizzes.html', quizzes=None,
                               error='Failed to fetch quizzes.')
    return render_template('student/quizzes.html', quizzes=lists, error=None)
