"""
REST API client

Every page of the portal is a thin layer over the remote quiz API. This module
owns the HTTP side: one ``ApiClient`` per request, bearer token attached to
authenticated calls, and ``ApiError`` carrying the message to show in the
page's alert banner.
"""

import httpx
from flask import current_app, g, session

TOKEN_SESSION_KEY = 'api_token'


class ApiError(Exception):
    """API call failed; ``message`` is safe to show to the user"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _server_message(response):
    """Extract ``message`` from a JSON error body, if there is one"""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        message = data.get('message')
        if message:
            return str(message)
    return None


class ApiClient:
    """Thin wrapper around httpx.Client for the quiz REST API"""

    def __init__(self, base_url, token=None, timeout=15, transport=None):
        self.token = token
        self.client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={'Accept': 'application/json'},
        )

    def close(self):
        self.client.close()

    def _auth_headers(self):
        if not self.token:
            return {}
        return {'Authorization': f'Bearer {self.token}'}

    def _request(self, method, path, fallback, auth=True, **kwargs):
        headers = self._auth_headers() if auth else {}
        try:
            response = self.client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            current_app.logger.error(f'API {method} {path} failed: {e}')
            raise ApiError(fallback) from e

        if response.is_error:
            message = _server_message(response) or fallback
            current_app.logger.warning(f'API {method} {path} -> {response.status_code}: {message}')
            raise ApiError(message, response.status_code)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            current_app.logger.error(f'API {method} {path} returned invalid JSON')
            raise ApiError(fallback, response.status_code) from e

    # ==================== AUTH ====================
    def login(self, username, pin):
        return self._request('POST', '/api/auth/login',
                             'Invalid credentials. Please try again.',
                             auth=False, json={'username': username, 'pin': pin})

    def register(self, email, phone, first_name, last_name, pin, profile_picture):
        """Multipart sign-up; ``profile_picture`` is a werkzeug FileStorage"""
        data = {
            'email': email,
            'phone': phone,
            'first_name': first_name,
            'last_name': last_name,
            'pin': pin,
        }
        files = {
            'profile_picture': (
                profile_picture.filename,
                profile_picture.stream,
                profile_picture.mimetype or 'application/octet-stream',
            )
        }
        return self._request('POST', '/api/auth/register',
                             'Registration failed. Please try again.',
                             auth=False, data=data, files=files)

    # ==================== STUDENT ====================
    def student_profile(self):
        return self._request('GET', '/api/student/profile', 'Failed to load profile')

    def student_dashboard(self):
        return self._request('GET', '/api/student/dashboard', 'Failed to load dashboard data')

    def student_quizzes(self):
        return self._request('GET', '/api/student/quizzes', 'Failed to fetch quizzes.')

    # ==================== ADMIN ====================
    def admin_students(self):
        return self._request('GET', '/api/admin/students', 'Failed to load students.')

    def system_stats(self):
        return self._request('GET', '/api/admin/system-stats', 'Failed to load system statistics.')

    def student_details(self, student_id):
        return self._request('GET', f'/api/admin/students/{student_id}',
                             'Could not load student details.')

    def create_quiz(self, payload):
        return self._request('POST', '/api/admin/create-quiz', 'Error creating quiz.', json=payload)

    def upload_assignment(self, title, description, due_date, file):
        data = {'title': title, 'description': description, 'due_date': due_date}
        files = {
            'file': (file.filename, file.stream, file.mimetype or 'application/octet-stream')
        }
        return self._request('POST', '/api/admin/upload-assignment',
                             'Error uploading assignment.', data=data, files=files)


# ==================== PER-REQUEST CLIENT ====================
def get_api():
    """Client for the current request, bound to the session's bearer token"""
    if 'api_client' not in g:
        g.api_client = ApiClient(
            current_app.config['API_BASE_URL'],
            token=session.get(TOKEN_SESSION_KEY),
            timeout=current_app.config['API_TIMEOUT'],
            transport=current_app.config.get('API_TRANSPORT'),
        )
    return g.api_client


def close_api(exception=None):
    client = g.pop('api_client', None)
    if client is not None:
        client.close()


# ==================== SESSION TOKEN ====================
def remember_token(token, role=None):
    session[TOKEN_SESSION_KEY] = token
    session['role'] = role
    close_api()


def forget_token():
    session.pop(TOKEN_SESSION_KEY, None)
    session.pop('role', None)
    close_api()
