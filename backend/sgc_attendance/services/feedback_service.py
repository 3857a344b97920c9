# backend/sgc_attendance/services/feedback_service.py
"""Feedback console service."""
from typing import List, Optional, Tuple
from sgc_attendance import db
from sgc_attendance.models.feedback import Feedback, FeedbackStatus
from sgc_attendance.utils.validators import Validator, ValidationError

REQUIRED_FIELDS = ['name', 'email', 'feedback_type', 'message']
MAX_MESSAGE_LENGTH = 5000


class FeedbackService:
    """Service for visitor feedback."""

    @staticmethod
    def list_feedback(query: str = None, status: str = None) -> List[Feedback]:
        """Newest first, filtered by search text and optional status."""
        feedback_query = Feedback.query
        if status:
            feedback_query = feedback_query.filter(
                Feedback.status == Validator.parse_enum(FeedbackStatus, status, 'status'))

        items = feedback_query.order_by(Feedback.created_at.desc(), Feedback.id.desc()).all()
        return [item for item in items if item.matches(query)]

    @staticmethod
    def create_feedback(data: dict) -> Tuple[Optional[dict], Optional[str]]:
        """Store a public submission with status pending."""
        result = Validator.validate_required_fields(data, REQUIRED_FIELDS)
        if not result['is_valid']:
            return None, '; '.join(result['errors'])

        try:
            Validator.validate_text_fields(data, REQUIRED_FIELDS)
        except ValidationError as e:
            return None, str(e)

        name_check = Validator.validate_name(str(data['name']))
        if not name_check['is_valid']:
            return None, '; '.join(name_check['errors'])

        email = str(data['email']).strip().lower()
        if not Validator.validate_email(email):
            return None, "Invalid email format"

        message = str(data['message']).strip()
        if len(message) > MAX_MESSAGE_LENGTH:
            return None, f"Message must be at most {MAX_MESSAGE_LENGTH} characters"

        try:
            feedback = Feedback(
                name=str(data['name']).strip(),
                email=email,
                feedback_type=str(data['feedback_type']).strip(),
                message=message,
                status=FeedbackStatus.PENDING
            )
            feedback.save()
            return feedback.to_dict(), None
        except Exception as e:
            db.session.rollback()
            return None, f"Error saving feedback: {str(e)}"

    @staticmethod
    def update_status(feedback: Feedback, status: str) -> dict:
        """Move a submission to another triage state; raises ValidationError."""
        feedback.update(status=Validator.parse_enum(FeedbackStatus, status, 'status'))
        return feedback.to_dict()

    @staticmethod
    def delete_feedback(feedback: Feedback, confirm: bool) -> None:
        if confirm is not True:
            raise ValidationError("Deletion must be confirmed")
        feedback.delete()
