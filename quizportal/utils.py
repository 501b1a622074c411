import base64
import math
from datetime import datetime

import pytz
from flask import current_app

SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR


# ==================== TIMEZONE ====================
def display_timezone():
    return pytz.timezone(current_app.config.get('DISPLAY_TIMEZONE', 'UTC'))


def parse_datetime(value, tz=None):
    """
    Parse an API date into an aware datetime

    Args:
        value: ISO-8601 string (``Z`` suffix accepted) or datetime
        tz: timezone used for naive values, defaults to DISPLAY_TIMEZONE

    Returns:
        datetime | None: None when the value is empty or unparseable
    """
    if not value:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = (tz or display_timezone()).localize(dt)
    return dt


def utc_now():
    return datetime.now(pytz.utc)


# ==================== DUE DATE BADGES ====================
def time_remaining(due, now):
    """Badge text for an available quiz: "Due now", "2 days 5h", "7h remaining"."""
    diff = (due - now).total_seconds()
    if diff <= 0:
        return 'Due now'

    days = math.floor(diff / SECONDS_PER_DAY)
    hours = math.floor((diff % SECONDS_PER_DAY) / SECONDS_PER_HOUR)

    if days > 0:
        return f"{days} day{'s' if days > 1 else ''} {hours}h"
    return f'{hours}h remaining'


def urgency_class(due, now):
    """Badge colour: < 12h danger, < 24h warning, otherwise success"""
    hours = (due - now).total_seconds() / SECONDS_PER_HOUR
    if hours < 12:
        return 'danger'
    if hours < 24:
        return 'warning'
    return 'success'


def score_class(score):
    if score is None:
        return 'secondary'
    if score >= 80:
        return 'success'
    if score >= 60:
        return 'warning'
    return 'danger'


# ==================== FILES ====================
def format_file_size(size):
    """1536 -> '1.5 KB'"""
    if not size:
        return '0 Bytes'
    units = ['Bytes', 'KB', 'MB', 'GB']
    value = float(size)
    i = 0
    while value >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    value = round(value, 2)
    if value == int(value):
        value = int(value)
    return f'{value} {units[i]}'


def file_size(file_storage):
    """Size of an uploaded FileStorage without consuming it"""
    stream = file_storage.stream
    position = stream.tell()
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(position)
    return size


def image_preview(file_storage):
    """data: URL so a re-rendered form can still show the chosen picture"""
    if not file_storage or not file_storage.filename:
        return None
    mimetype = file_storage.mimetype or ''
    if not mimetype.startswith('image/'):
        return None
    stream = file_storage.stream
    position = stream.tell()
    stream.seek(0)
    encoded = base64.b64encode(stream.read()).decode('ascii')
    stream.seek(position)
    return f'data:{mimetype};base64,{encoded}'


# ==================== FORMS ====================
def banner_error(form, required_message=None):
    """
    Single message for the alert banner of an invalid form

    Required-field errors win over everything else, then errors follow
    field declaration order.
    """
    messages = []
    for field in form:
        messages.extend(str(e) for e in field.errors)
    if required_message and required_message in messages:
        return required_message
    return messages[0] if messages else None
