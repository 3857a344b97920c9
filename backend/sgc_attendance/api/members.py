# File: backend/sgc_attendance/api/members.py
"""Roster Management API - Admin Only."""
from datetime import date
from flask import Blueprint, request, current_app, send_file
from flask_jwt_extended import jwt_required
from sgc_attendance import db
from sgc_attendance.models.member import Member
from sgc_attendance.services.member_service import MemberService
from sgc_attendance.utils.decorators import admin_required
from sgc_attendance.utils.helpers import success_response, error_response
from sgc_attendance.utils.validators import Validator, ValidationError
import io

members_bp = Blueprint('members', __name__)

@members_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Members service is running')

@members_bp.route('', methods=['GET'])
@jwt_required()
@admin_required
def get_members():
    """List the roster, optionally filtered by ``q``."""
    try:
        members = MemberService.list_members(request.args.get('q', '').strip())
        return success_response(data={
            'members': [m.to_dict() for m in members],
            'total': len(members)
        })

    except Exception as e:
        current_app.logger.error(f"Error fetching members: {str(e)}")
        return error_response(f"Error fetching members: {str(e)}", 500)

@members_bp.route('', methods=['POST'])
@jwt_required()
@admin_required
def create_member():
    """Add a member to the roster."""
    try:
        data = Validator.validate_json_object(request.get_json(silent=True))
        member, error = MemberService.create_member(data)
        if error:
            return error_response(error, 400)

        return success_response(data=member, message="Member added successfully"), 201

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error adding member: {str(e)}")
        return error_response(f"Error adding member: {str(e)}", 500)

@members_bp.route('/<int:member_id>', methods=['PUT'])
@jwt_required()
@admin_required
def update_member(member_id):
    """Change a member's academic year or role."""
    try:
        member = Member.get_by_id(member_id)
        if not member:
            return error_response("Member not found", 404)

        result, error = MemberService.update_member(
            member, Validator.validate_json_object(request.get_json(silent=True)))
        if error:
            return error_response(error, 400)

        return success_response(data=result, message="Member updated successfully")

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error updating member: {str(e)}")
        return error_response(f"Error updating member: {str(e)}", 500)

@members_bp.route('', methods=['DELETE'])
@jwt_required()
@admin_required
def delete_members():
    """Bulk delete; requires ``confirm: true``."""
    try:
        data = Validator.validate_json_object(request.get_json(silent=True))
        ids = Validator.validate_id_list(data.get('ids'))

        if data.get('confirm') is not True:
            count = Member.query.filter(Member.id.in_(ids)).count()
            return error_response(
                f"Confirm deletion of {count} member(s) by sending confirm: true", 400)

        deleted = MemberService.delete_members(ids)
        current_app.logger.info(f"Deleted {deleted} member(s)")
        return success_response(data={'deleted': deleted}, message=f"{deleted} member(s) deleted")

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting members: {str(e)}")
        return error_response(f"Error deleting members: {str(e)}", 500)

@members_bp.route('/export', methods=['GET'])
@jwt_required()
@admin_required
def export_members():
    """Download the (filtered) roster as CSV."""
    try:
        members = MemberService.list_members(request.args.get('q', '').strip())
        frame = MemberService.export_dataframe(members)

        output = io.BytesIO(frame.to_csv(index=False).encode('utf-8'))
        return send_file(
            output,
            as_attachment=True,
            download_name=f"members_{date.today().isoformat()}.csv",
            mimetype='text/csv'
        )

    except Exception as e:
        current_app.logger.error(f"Error exporting members: {str(e)}")
        return error_response(f"Error exporting members: {str(e)}", 500)
