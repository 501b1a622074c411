import io
from datetime import datetime, timedelta

import pytest
import pytz
from werkzeug.datastructures import FileStorage

from quizportal.forms import LoginForm, SignupForm, REQUIRED_FIELDS_MESSAGE
from quizportal.utils import (
    time_remaining, urgency_class, score_class, format_file_size, parse_datetime,
    image_preview, file_size, banner_error,
)

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=pytz.utc)


# ==================== DUE DATE BADGES ====================
@pytest.mark.parametrize('delta, label, css', [
    (timedelta(minutes=-5), 'Due now', 'danger'),
    (timedelta(0), 'Due now', 'danger'),
    (timedelta(hours=11, minutes=59), '11h remaining', 'danger'),
    (timedelta(hours=12), '12h remaining', 'warning'),
    (timedelta(hours=23, minutes=59), '23h remaining', 'warning'),
    (timedelta(hours=24), '1 day 0h', 'success'),
    (timedelta(days=1, hours=3), '1 day 3h', 'success'),
    (timedelta(days=2, hours=5, minutes=40), '2 days 5h', 'success'),
])
def test_due_badge_boundaries(delta, label, css):
    due = NOW + delta
    assert time_remaining(due, NOW) == label
    assert urgency_class(due, NOW) == css


@pytest.mark.parametrize('score, css', [
    (100, 'success'), (80, 'success'), (79.9, 'warning'), (60, 'warning'),
    (59, 'danger'), (0, 'danger'), (None, 'secondary'),
])
def test_score_class(score, css):
    assert score_class(score) == css


# ==================== FILES ====================
@pytest.mark.parametrize('size, text', [
    (0, '0 Bytes'),
    (500, '500 Bytes'),
    (1024, '1 KB'),
    (1536, '1.5 KB'),
    (1024 * 1024, '1 MB'),
    (int(2.25 * 1024 * 1024), '2.25 MB'),
])
def test_format_file_size(size, text):
    assert format_file_size(size) == text


def test_image_preview_and_size_leave_stream_untouched():
    upload = FileStorage(stream=io.BytesIO(b'abc'), filename='me.png', content_type='image/png')

    assert image_preview(upload) == 'data:image/png;base64,YWJj'
    assert file_size(upload) == 3
    assert upload.stream.read() == b'abc'


def test_image_preview_ignores_non_images():
    upload = FileStorage(stream=io.BytesIO(b'%PDF'), filename='brief.pdf', content_type='application/pdf')
    assert image_preview(upload) is None
    assert image_preview(None) is None


# ==================== DATES ====================
def test_parse_datetime(app):
    with app.app_context():
        assert parse_datetime('2026-10-19T14:30:00Z') == datetime(2026, 10, 19, 14, 30, tzinfo=pytz.utc)
        assert parse_datetime('2026-10-19T16:30:00+02:00') == datetime(2026, 10, 19, 14, 30, tzinfo=pytz.utc)
        assert parse_datetime('2026-10-19T14:30:00').tzinfo is not None
        assert parse_datetime('next tuesday') is None
        assert parse_datetime(None) is None


def test_naive_dates_use_display_timezone(app):
    app.config['DISPLAY_TIMEZONE'] = 'America/New_York'
    with app.app_context():
        dt = parse_datetime('2026-10-19T10:00:00')
        assert dt.astimezone(pytz.utc).hour == 14


def test_date_filters(app):
    filters = app.jinja_env.filters
    with app.app_context():
        assert filters['local_datetime']('2026-10-19T14:30:00Z') == 'Mon, Oct 19, 2026, 02:30 PM'
        assert filters['long_date']('2026-10-01T10:00:00Z') == 'October 1, 2026'
        assert filters['short_date']('2026-10-02T09:00:00Z') == '10/2/2026'
        assert filters['local_datetime'](None) == ''
    assert filters['number'](85.0) == 85
    assert filters['number'](72.5) == 72.5
    assert filters['number'](None) == 0


# ==================== FORMS ====================
def test_banner_error_follows_field_order(app):
    with app.test_request_context(method='POST', data={'username': '', 'pin': ''}):
        form = LoginForm()
        assert not form.validate()
        assert banner_error(form) == 'Please enter both username and PIN.'


def test_banner_error_prefers_required_message(app):
    data = {'email': 'not-an-email', 'phone': '', 'first_name': 'Jane', 'last_name': 'Carter', 'pin': '1'}
    with app.test_request_context(method='POST', data=data):
        form = SignupForm()
        assert not form.validate()
        assert banner_error(form, REQUIRED_FIELDS_MESSAGE) == REQUIRED_FIELDS_MESSAGE
        assert banner_error(form) == 'Please enter a valid email address.'


def test_parse_datetime_accepts_any_fraction_precision(app):
    with app.app_context():
        dt = parse_datetime('2026-10-19T14:30:00.12345+00:00')
    assert dt is not None
    assert dt.replace(microsecond=0) == datetime(2026, 10, 19, 14, 30, tzinfo=pytz.utc)
