"""Visitor feedback model."""
from datetime import datetime, timezone
from enum import Enum
from sgc_attendance import db
from sgc_attendance.models.base import BaseModel

class FeedbackStatus(Enum):
    """Triage states of a feedback submission."""
    PENDING = 'pending'
    IN_PROGRESS = 'in-progress'
    RESOLVED = 'resolved'
    REJECTED = 'rejected'

def _utcnow():
    return datetime.now(timezone.utc)

class Feedback(BaseModel):
    """Feedback submitted from the public site."""
    
    __tablename__ = 'feedback'
    
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    feedback_type = db.Column(db.String(50), nullable=False)
    message = db.Column(db.Text, nullable=False)
    status = db.Column(
        db.Enum(FeedbackStatus, values_callable=lambda e: [s.value for s in e],
                native_enum=False, length=16),
        nullable=False,
        default=FeedbackStatus.PENDING
    )
    
    def matches(self, query: str) -> bool:
        """Case-insensitive search across every text field."""
        if not query:
            return True
        needle = query.lower()
        fields = (self.name, self.email, self.feedback_type, self.message,
                  self.status.value if self.status else '')
        return any(needle in (field or '').lower() for field in fields)
    
    def __repr__(self) -> str:
        return f'<Feedback {self.id} {self.status}>'
