import httpx
import pytest
from jose import jwt

from quizportal import create_app
from quizportal.config import TestingConfig


class FakeApi:
    """In-memory quiz REST API served through httpx.MockTransport"""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, body=None, status_code=200):
        """``body`` is JSON data, or a callable taking the request and returning a response"""
        self.routes[(method, path)] = (status_code, body)

    def handler(self, request):
        request.read()
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={'message': f'No route for {request.method} {request.url.path}'})
        status_code, body = self.routes[key]
        if callable(body):
            return body(request)
        return httpx.Response(status_code, json=body)

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def app(api):
    app = create_app(TestingConfig)
    app.config['API_TRANSPORT'] = httpx.MockTransport(api.handler)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_token():
    def _make_token(role, name='', username=''):
        claims = {'role': role, 'name': name, 'username': username}
        return jwt.encode(claims, 'api-signing-key', algorithm='HS256')
    return _make_token


@pytest.fixture
def login_as(client, make_token):
    """Put a logged-in user straight into the session cookie"""
    def _login_as(username, role, name=''):
        token = make_token(role, name, username)
        with client.session_transaction() as sess:
            sess['api_token'] = token
            sess['role'] = role
            sess['_user_id'] = username
            sess['_fresh'] = True
        return token
    return _login_as


@pytest.fixture
def admin_client(client, login_as):
    login_as('admin', 'admin', 'Admin')
    return client


@pytest.fixture
def student_client(client, api, login_as):
    api.add('GET', '/api/student/profile', {'profile_picture': None, 'name': 'Sam Carter'})
    login_as('scarter', 'student', 'Sam Carter')
    return client
