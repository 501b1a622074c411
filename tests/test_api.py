import httpx
import pytest
from flask import session

from quizportal.api import ApiClient, ApiError, get_api, remember_token, forget_token, TOKEN_SESSION_KEY


def client_for(handler, token=None):
    return ApiClient('http://api.test', token=token, transport=httpx.MockTransport(handler))


def test_bearer_token_is_attached(app):
    seen = {}

    def handler(request):
        seen['auth'] = request.headers.get('Authorization')
        return httpx.Response(200, json={'name': 'Sam'})

    with app.app_context():
        assert client_for(handler, token='abc').student_profile() == {'name': 'Sam'}
    assert seen['auth'] == 'Bearer abc'


def test_no_token_no_header(app):
    seen = {}

    def handler(request):
        seen['auth'] = request.headers.get('Authorization')
        return httpx.Response(200, json=[])

    with app.app_context():
        client_for(handler).admin_students()
    assert seen['auth'] is None


def test_empty_body_is_empty_dict(app):
    with app.app_context():
        assert client_for(lambda request: httpx.Response(204)).system_stats() == {}


@pytest.mark.parametrize('response, message, status', [
    (httpx.Response(400, json={'message': 'Title already used'}), 'Title already used', 400),
    (httpx.Response(500, text='<html>oops</html>'), 'Error creating quiz.', 500),
    (httpx.Response(422, json={'detail': 'bad'}), 'Error creating quiz.', 422),
])
def test_error_message_or_fallback(app, response, message, status):
    with app.app_context():
        with pytest.raises(ApiError) as excinfo:
            client_for(lambda request: response).create_quiz({'title': 'x'})
    assert excinfo.value.message == message
    assert excinfo.value.status_code == status


def test_invalid_json_success_raises(app):
    with app.app_context():
        with pytest.raises(ApiError) as excinfo:
            client_for(lambda request: httpx.Response(200, text='not json')).student_quizzes()
    assert excinfo.value.message == 'Failed to fetch quizzes.'


def test_timeout_uses_fallback(app):
    def handler(request):
        raise httpx.ReadTimeout('timed out', request=request)

    with app.app_context():
        with pytest.raises(ApiError) as excinfo:
            client_for(handler).student_details(5)
    assert excinfo.value.message == 'Could not load student details.'
    assert excinfo.value.status_code is None


def test_request_client_follows_session_token(app):
    with app.test_request_context('/'):
        assert get_api().token is None
        remember_token('tok-1', 'student')
        assert session[TOKEN_SESSION_KEY] == 'tok-1'
        assert get_api().token == 'tok-1'
        forget_token()
        assert get_api().token is None
