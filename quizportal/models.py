# ==================== VIEW MODELS ====================
# Transient shapes of the REST API responses. Nothing here is persisted: a model
# is parsed from JSON, rendered, and dropped at the end of the request.

from typing import List, Optional

from flask import current_app, session
from flask_login import UserMixin
from jose import jwt
from jose.exceptions import JWTError
from pydantic import BaseModel, ConfigDict, Field, model_validator

from quizportal import login_manager
from quizportal.api import TOKEN_SESSION_KEY


class ApiModel(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    @model_validator(mode='before')
    @classmethod
    def drop_nulls(cls, data):
        """An explicit null (e.g. AVG over no submissions) falls back to the field default"""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# ==================== USER MODEL ====================
def token_claims(token):
    """Unverified JWT claims; the API verifies the signature, we only read role/name"""
    if not token:
        return {}
    try:
        return jwt.get_unverified_claims(token)
    except JWTError as e:
        current_app.logger.error(f'Error decoding token: {e}')
        return {}


class User(UserMixin):
    """Logged-in user, rebuilt from the session on every request"""

    def __init__(self, username, role=None, name=None, token=None):
        self.username = username
        self.role = role
        self.name = name or ''
        self.token = token

    def __repr__(self):
        return f'<User {self.username} ({self.role})>'

    def get_id(self):
        return self.username

    @property
    def is_admin(self):
        return self.role == 'admin'

    @property
    def is_student(self):
        return self.role == 'student'

    @property
    def initial(self):
        """Avatar letter when there is no profile picture"""
        if self.is_admin:
            return 'A'
        return self.name[:1] or 'U'

    @classmethod
    def from_token(cls, token, username=None, role=None):
        claims = token_claims(token)
        return cls(
            username=username or claims.get('username') or str(claims.get('sub') or claims.get('id') or ''),
            role=role or claims.get('role'),
            name=claims.get('name'),
            token=token,
        )


@login_manager.user_loader
def load_user(user_id):
    """Rebuild the session user for Flask-Login"""
    token = session.get(TOKEN_SESSION_KEY)
    if not token:
        return None
    return User.from_token(token, username=user_id, role=session.get('role'))


# ==================== STUDENT PROFILE ====================
class Profile(ApiModel):
    profile_picture: Optional[str] = None
    name: Optional[str] = None


# ==================== QUIZ MODELS ====================
class Quiz(ApiModel):
    id: int
    title: str = ''
    due_date: Optional[str] = None
    duration_minutes: Optional[int] = None
    score: Optional[float] = None


class QuizLists(ApiModel):
    available: List[Quiz] = Field(default_factory=list)
    past: List[Quiz] = Field(default_factory=list)


class Question(ApiModel):
    """Question as sent to /api/admin/create-quiz"""
    text: str = ''
    type: str = 'mcq'
    options: List[str] = Field(default_factory=lambda: ['', '', '', ''])
    correct_answers: List[str] = Field(default_factory=list)


class QuizResult(ApiModel):
    id: Optional[int] = None
    title: str = ''
    score: float = 0
    submitted_at: Optional[str] = None


# ==================== ADMIN MODELS ====================
class StudentSummary(ApiModel):
    """Row of the admin roster"""
    id: int
    first_name: str = ''
    last_name: str = ''
    email: str = ''
    username: str = ''
    quizzes_taken: int = 0
    average_score: float = 0

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'.strip()

    def matches(self, term):
        """Case-insensitive match on first name, last name or email"""
        term = (term or '').lower()
        return (term in self.first_name.lower() or
                term in self.last_name.lower() or
                term in self.email.lower())


class StudentInfo(ApiModel):
    first_name: str = ''
    last_name: str = ''
    email: str = ''
    username: str = ''

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'.strip()


class StudentDetails(ApiModel):
    student: StudentInfo = Field(default_factory=StudentInfo)
    quiz_results: List[QuizResult] = Field(default_factory=list, alias='quizResults')


class Overview(ApiModel):
    total_students: int = 0
    total_quizzes: int = 0
    total_submissions: int = 0
    average_score: float = 0


class MonthlyStat(ApiModel):
    month: str = ''
    submissions: int = 0
    average_score: float = 0


class SystemStats(ApiModel):
    overview: Overview = Field(default_factory=Overview)
    monthly_stats: List[MonthlyStat] = Field(default_factory=list, alias='monthlyStats')


# ==================== STUDENT DASHBOARD ====================
class StudentName(ApiModel):
    name: str = ''


class StudentDashboard(ApiModel):
    student: StudentName = Field(default_factory=StudentName)
    average_score: float = Field(0, alias='averageScore')
    upcoming_quizzes: int = Field(0, alias='upcomingQuizzes')
    completed_quizzes: int = Field(0, alias='completedQuizzes')
    recent_results: List[QuizResult] = Field(default_factory=list, alias='recentResults')
