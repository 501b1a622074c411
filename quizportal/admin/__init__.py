"""
Admin module

- Dashboard: system stats, monthly charts, searchable student roster
- Per-student quiz history
- Quiz builder (MCQ / fill-in questions)
- Assignment upload
"""

from quizportal.admin.routes import admin_bp

__all__ = ['admin_bp']
