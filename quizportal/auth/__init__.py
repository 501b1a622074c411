"""
Auth module - login with username + PIN, sign-up, logout

The API issues the bearer token; the portal keeps it in the session.
"""

from quizportal.auth.routes import auth_bp

__all__ = ['auth_bp']
