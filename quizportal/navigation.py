"""
Sidebar / top bar shared by every logged-in page

Menu entries depend on the user's role; students also get their profile
picture in the avatar, fetched once per request.
"""

from flask import current_app, g, request, url_for
from flask_login import current_user
from pydantic import ValidationError

from quizportal.api import ApiError, get_api
from quizportal.models import Profile

ADMIN_MENU = [
    ('Dashboard', 'admin.dashboard', 'bi-house'),
    ('Create Quiz', 'admin.create_quiz', 'bi-clipboard'),
    ('Upload Assignment', 'admin.upload_assignment', 'bi-file-earmark-text'),
]

STUDENT_MENU = [
    ('Dashboard', 'student.dashboard', 'bi-house'),
    ('Test & Quizzes', 'student.quizzes', 'bi-clipboard'),
]


def menu_for(role):
    """Menu entries for a role; unknown roles get no menu"""
    if role == 'admin':
        entries = ADMIN_MENU
    elif role == 'student':
        entries = STUDENT_MENU
    else:
        return []
    items = []
    for text, endpoint, icon in entries:
        path = url_for(endpoint)
        items.append({
            'text': text,
            'path': path,
            'icon': icon,
            'active': request.path == path,
        })
    return items


def student_profile():
    """Profile of the logged-in student, None when it can't be loaded"""
    if 'profile' not in g:
        g.profile = None
        try:
            g.profile = Profile.model_validate(get_api().student_profile())
        except (ApiError, ValidationError) as e:
            current_app.logger.error(f'Error fetching profile: {e}')
    return g.profile


def navigation_context():
    if not current_user.is_authenticated:
        return {'menu_items': [], 'user_role': None, 'profile': None, 'panel_title': None}

    role = current_user.role
    profile = student_profile() if role == 'student' else None
    return {
        'menu_items': menu_for(role),
        'user_role': role,
        'profile': profile,
        'panel_title': 'Admin Panel' if role == 'admin' else 'Student Portal',
    }
