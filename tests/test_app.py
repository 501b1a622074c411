import io

from quizportal import create_app
from quizportal.config import config, TestingConfig


def test_config_mapping():
    assert config['testing'] is TestingConfig
    assert config['default'].API_BASE_URL
    assert TestingConfig.WTF_CSRF_ENABLED is False


def test_factory_reads_flask_config(monkeypatch):
    monkeypatch.setenv('FLASK_CONFIG', 'testing')
    app = create_app()
    assert app.testing
    assert app.config['API_BASE_URL'] == 'http://api.test'


def test_routes_registered(app):
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    for path in ['/', '/signup', '/logout', '/admin/dashboard', '/admin/students/<int:student_id>',
                 '/admin/create-quiz', '/admin/upload-assignment', '/student/dashboard',
                 '/student/test-quizzes']:
        assert path in rules


def test_not_found_page(client):
    response = client.get('/no-such-page')
    assert response.status_code == 404
    assert b'does not exist' in response.data


def test_security_headers(client):
    response = client.get('/')
    assert response.headers['X-Content-Type-Options'] == 'nosniff'
    assert response.headers['X-Frame-Options'] == 'SAMEORIGIN'


def test_upload_over_limit(admin_client, app, api):
    app.config['MAX_CONTENT_LENGTH'] = 1024
    data = {
        'title': 'Big',
        'description': 'Too big',
        'due_date': '2026-11-05T23:59',
        'file': (io.BytesIO(b'x' * 4096), 'big.pdf'),
    }

    response = admin_client.post('/admin/upload-assignment', data=data, content_type='multipart/form-data')

    assert response.status_code == 413
    assert b'too large' in response.data
    assert api.requests == []
