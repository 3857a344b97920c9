# File: backend/sgc_attendance/api/feedback.py
"""Feedback API: admin console plus public submission."""
from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required
from sgc_attendance import limiter
from sgc_attendance.models.feedback import Feedback
from sgc_attendance.services.feedback_service import FeedbackService
from sgc_attendance.utils.decorators import admin_required
from sgc_attendance.utils.helpers import success_response, error_response
from sgc_attendance.utils.validators import Validator, ValidationError

feedback_bp = Blueprint('feedback', __name__)
public_feedback_bp = Blueprint('public_feedback', __name__)

@feedback_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Feedback service is running')

@feedback_bp.route('', methods=['GET'])
@jwt_required()
@admin_required
def get_feedback():
    """Newest first; ``q`` searches every field, ``status`` filters."""
    try:
        items = FeedbackService.list_feedback(
            request.args.get('q', '').strip(),
            request.args.get('status', '').strip() or None
        )
        return success_response(data={
            'feedback': [item.to_dict() for item in items],
            'total': len(items)
        })

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error fetching feedback: {str(e)}")
        return error_response(f"Error fetching feedback: {str(e)}", 500)

@feedback_bp.route('/<int:feedback_id>/status', methods=['PATCH'])
@jwt_required()
@admin_required
def update_status(feedback_id):
    try:
        feedback = Feedback.get_by_id(feedback_id)
        if not feedback:
            return error_response("Feedback not found", 404)

        data = Validator.validate_json_object(request.get_json(silent=True))
        result = FeedbackService.update_status(feedback, data.get('status'))
        return success_response(data=result, message="Status updated")

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error updating feedback: {str(e)}")
        return error_response(f"Error updating feedback: {str(e)}", 500)

@feedback_bp.route('/<int:feedback_id>', methods=['DELETE'])
@jwt_required()
@admin_required
def delete_feedback(feedback_id):
    """Delete one submission; requires ``confirm: true``."""
    try:
        feedback = Feedback.get_by_id(feedback_id)
        if not feedback:
            return error_response("Feedback not found", 404)

        data = Validator.validate_json_object(request.get_json(silent=True), required=False)
        FeedbackService.delete_feedback(feedback, data.get('confirm'))
        return success_response(message="Feedback deleted")

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error deleting feedback: {str(e)}")
        return error_response(f"Error deleting feedback: {str(e)}", 500)

@public_feedback_bp.route('', methods=['POST'])
@limiter.limit("10 per hour")
def submit_feedback():
    """Public feedback form."""
    try:
        data = Validator.validate_json_object(request.get_json(silent=True))
        result, error = FeedbackService.create_feedback(data)
        if error:
            return error_response(error, 400)

        return success_response(data=result, message="Thank you for your feedback"), 201

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error submitting feedback: {str(e)}")
        return error_response(f"Error submitting feedback: {str(e)}", 500)
