"""Student module - dashboard and quiz lists"""

from quizportal.student.routes import student_bp

__all__ = ['student_bp']
