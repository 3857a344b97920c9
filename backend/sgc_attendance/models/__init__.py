"""Models package with all models."""
from .base import BaseModel
from .member import Member, MemberRole, AcademicYear, YEAR_ORDER
from .attendance import AttendanceRecord
from .feedback import Feedback, FeedbackStatus

__all__ = [
    'BaseModel', 'Member', 'MemberRole', 'AcademicYear', 'YEAR_ORDER',
    'AttendanceRecord', 'Feedback', 'FeedbackStatus'
]
