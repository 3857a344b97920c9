# File: backend/sgc_attendance/api/dashboard.py
"""Admin dashboard API."""
from flask import Blueprint, g, current_app
from flask_jwt_extended import jwt_required
from sgc_attendance.models.member import Member
from sgc_attendance.models.feedback import Feedback, FeedbackStatus
from sgc_attendance.utils.decorators import admin_required
from sgc_attendance.utils.helpers import success_response, error_response

dashboard_bp = Blueprint('dashboard', __name__)

SECTIONS = [
    {'key': 'members', 'title': 'Members', 'path': '/admin/members'},
    {'key': 'attendance', 'title': 'Attendance', 'path': '/admin/attendance'},
    {'key': 'reports', 'title': 'Reports', 'path': '/admin/reports'},
    {'key': 'feedback', 'title': 'Feedback', 'path': '/admin/feedback'},
]

@dashboard_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Dashboard service is running')

@dashboard_bp.route('', methods=['GET'])
@jwt_required()
@admin_required
def get_dashboard():
    """Signed-in user, the sections they can open and headline counts."""
    try:
        member = g.current_member
        return success_response(data={
            'user': {
                'email': member.email,
                'name': member.name,
                'role': member.role.value
            },
            'sections': SECTIONS,
            'counts': {
                'members': Member.query.count(),
                'feedback': Feedback.query.count(),
                'pending_feedback': Feedback.query.filter_by(status=FeedbackStatus.PENDING).count()
            }
        })

    except Exception as e:
        current_app.logger.error(f"Error loading dashboard: {str(e)}")
        return error_response(f"Error loading dashboard: {str(e)}", 500)
