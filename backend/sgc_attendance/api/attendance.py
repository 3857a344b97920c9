# File: backend/sgc_attendance/api/attendance.py
"""Daily Attendance API - Admin Only."""
from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required
from sgc_attendance.models.member import Member
from sgc_attendance.services.attendance_service import AttendanceService
from sgc_attendance.services.member_service import MemberService
from sgc_attendance.utils.decorators import admin_required
from sgc_attendance.utils.helpers import success_response, error_response
from sgc_attendance.utils.validators import Validator, ValidationError

attendance_bp = Blueprint('attendance', __name__)

def _parse_cells(raw, allow_unmarked=False) -> dict:
    """``{"12": true}`` from JSON into ``{12: True}``."""
    if not isinstance(raw, dict):
        raise ValidationError("Attendance must be an object of member id to true/false")

    cells = {}
    for key, value in raw.items():
        try:
            member_id = int(key)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid member id: {key!r}")
        if value is None and allow_unmarked:
            cells[member_id] = None
        elif isinstance(value, bool):
            cells[member_id] = value
        else:
            raise ValidationError(f"Attendance for member {member_id} must be true or false")
    return cells

def _grouped_roster(members) -> list:
    return [
        {'academic_year': year, 'members': [m.to_dict() for m in group]}
        for year, group in MemberService.group_by_year(members).items()
    ]

@attendance_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Attendance service is running')

@attendance_bp.route('', methods=['GET'])
@jwt_required()
@admin_required
def get_attendance():
    """Roster grouped by year with the stored attendance for ``date``."""
    try:
        day = Validator.parse_date(request.args.get('date'))
        members = MemberService.list_members()
        snapshot = AttendanceService.snapshot(day)

        return success_response(data={
            'date': day.isoformat(),
            'groups': _grouped_roster(members),
            'attendance': {str(m.id): snapshot.get(m.id) for m in members}
        })

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error fetching attendance: {str(e)}")
        return error_response(f"Error fetching attendance: {str(e)}", 500)

@attendance_bp.route('', methods=['POST'])
@jwt_required()
@admin_required
def submit_attendance():
    """Save the cells that differ from the fetched snapshot."""
    try:
        data = Validator.validate_json_object(request.get_json(silent=True))
        day = Validator.parse_date(data.get('date'))
        submitted = _parse_cells(data.get('attendance', {}))
        original = None
        if data.get('original') is not None:
            original = _parse_cells(data['original'], allow_unmarked=True)

        known_ids = {m.id for m in Member.query.filter(Member.id.in_(list(submitted))).all()}
        unknown = sorted(set(submitted) - known_ids)
        if unknown:
            return error_response(f"Unknown member id(s): {', '.join(map(str, unknown))}", 400)

        sheet = AttendanceService.load_sheet(day, original)
        for member_id, is_present in submitted.items():
            sheet.set(member_id, is_present)

        if not sheet.changes():
            return success_response(data={'changes': 0}, message="No changes to submit")

        written = AttendanceService.submit(sheet)
        current_app.logger.info(f"Saved {written} attendance change(s) for {day.isoformat()}")

        members = MemberService.list_members()
        snapshot = AttendanceService.snapshot(day)
        return success_response(
            data={
                'changes': written,
                'attendance': {str(m.id): snapshot.get(m.id) for m in members},
                'summary': AttendanceService.summary(day, members, snapshot)
            },
            message=f"Attendance saved ({written} change(s))"
        )

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error saving attendance: {str(e)}")
        return error_response(f"Error saving attendance: {str(e)}", 500)

@attendance_bp.route('/summary', methods=['GET'])
@jwt_required()
@admin_required
def get_summary():
    """Share text and WhatsApp link for ``date``."""
    try:
        day = Validator.parse_date(request.args.get('date'))
        members = MemberService.list_members()
        summary = AttendanceService.summary(day, members, AttendanceService.snapshot(day))
        return success_response(data=summary)

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error building summary: {str(e)}")
        return error_response(f"Error building summary: {str(e)}", 500)
