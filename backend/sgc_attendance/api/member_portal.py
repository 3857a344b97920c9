# File: backend/sgc_attendance/api/member_portal.py
"""Public member self-view."""
from flask import Blueprint, request, current_app
from sqlalchemy import func
from sgc_attendance import limiter
from sgc_attendance.models.member import Member
from sgc_attendance.services.report_service import ReportService
from sgc_attendance.utils.helpers import success_response, error_response
from sgc_attendance.utils.validators import Validator, ValidationError

member_portal_bp = Blueprint('member_portal', __name__)

NOT_FOUND_MESSAGE = "Member not found. Please check your details and try again."

@member_portal_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Member portal is running')

@member_portal_bp.route('/lookup', methods=['POST'])
@limiter.limit("20 per minute")
def lookup():
    """Find one member by email or mobile and return their attendance."""
    try:
        data = Validator.validate_json_object(request.get_json(silent=True))
        by = data.get('by')
        value = str(data.get('value') or '').strip()

        if by not in ('email', 'mobile'):
            return error_response("Lookup must be by email or mobile", 400)
        if not value:
            return error_response(f"Please enter your {by}", 400)

        if by == 'email':
            matches = Member.query.filter(func.lower(Member.email) == value.lower())
        else:
            matches = Member.query.filter(Member.mobile == value)

        # Exactly one member, an ambiguous value reveals nobody
        found = matches.limit(2).all()
        if len(found) != 1:
            return error_response(NOT_FOUND_MESSAGE, 404)
        member = found[0]

        return success_response(data={
            'member': {
                'name': member.name,
                'department': member.department,
                'role': member.role.value if member.role else None,
                'academic_year': member.academic_year.value if member.academic_year else None
            },
            'attendance': ReportService.member_summary(member)
        })

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error looking up member: {str(e)}")
        return error_response(f"Error looking up member: {str(e)}", 500)
