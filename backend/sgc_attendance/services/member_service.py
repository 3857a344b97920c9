# backend/sgc_attendance/services/member_service.py
"""Roster management service."""
from typing import Dict, List, Tuple, Optional
from sqlalchemy import func
from sgc_attendance import db
from sgc_attendance.models.member import Member, MemberRole, AcademicYear
from sgc_attendance.utils.validators import Validator, ValidationError
import pandas as pd

REQUIRED_FIELDS = ['name', 'department', 'role', 'email', 'mobile', 'academic_year']
EDITABLE_FIELDS = ['academic_year', 'role']

class MemberService:
    """Service for managing the member roster."""

    @staticmethod
    def list_members(query: str = None) -> List[Member]:
        """All members matching ``query``, senior years first then by name."""
        members = [m for m in Member.query.all() if m.matches(query)]
        return sorted(members, key=Member.sort_key)

    @staticmethod
    def group_by_year(members: List[Member]) -> Dict[str, List[Member]]:
        """Group members by academic year; groups and names in roster order."""
        grouped = {}
        for member in sorted(members, key=Member.sort_key):
            grouped.setdefault(member.year_label, []).append(member)
        return grouped

    @staticmethod
    def validate(data: dict) -> dict:
        """Check a new member payload and convert enums, raising ValidationError."""
        result = Validator.validate_required_fields(data, REQUIRED_FIELDS)
        if not result['is_valid']:
            raise ValidationError('; '.join(result['errors']))
        Validator.validate_text_fields(data, ['name', 'department', 'email', 'mobile'])

        name_check = Validator.validate_name(data['name'])
        if not name_check['is_valid']:
            raise ValidationError('; '.join(name_check['errors']))

        email = str(data['email']).strip().lower()
        if not Validator.validate_email(email):
            raise ValidationError("Invalid email format")

        mobile = str(data['mobile']).strip()
        if not Validator.validate_mobile(mobile):
            raise ValidationError("Invalid mobile number")

        return {
            'name': data['name'].strip(),
            'department': str(data['department']).strip(),
            'role': Validator.parse_enum(MemberRole, data['role'], 'role'),
            'email': email,
            'mobile': mobile,
            'academic_year': Validator.parse_enum(AcademicYear, data['academic_year'], 'academic year'),
        }

    @staticmethod
    def create_member(data: dict) -> Tuple[Optional[dict], Optional[str]]:
        """Insert a member."""
        try:
            fields = MemberService.validate(data)
        except ValidationError as e:
            return None, str(e)

        if Member.query.filter(func.lower(Member.email) == fields['email']).first():
            return None, "A member with this email already exists"

        try:
            member = Member(**fields)
            member.save()
            return member.to_dict(), None
        except Exception as e:
            db.session.rollback()
            return None, f"Error adding member: {str(e)}"

    @staticmethod
    def update_member(member: Member, data: dict) -> Tuple[Optional[dict], Optional[str]]:
        """Edit a member; only academic year and role can change."""
        changes = {}
        try:
            if 'academic_year' in data:
                changes['academic_year'] = Validator.parse_enum(
                    AcademicYear, data['academic_year'], 'academic year')
            if 'role' in data:
                changes['role'] = Validator.parse_enum(MemberRole, data['role'], 'role')
        except ValidationError as e:
            return None, str(e)

        if not changes:
            return None, f"Nothing to update. Editable fields: {', '.join(EDITABLE_FIELDS)}"

        try:
            member.update(**changes)
            return member.to_dict(), None
        except Exception as e:
            db.session.rollback()
            return None, f"Error updating member: {str(e)}"

    @staticmethod
    def delete_members(member_ids: List[int]) -> int:
        """Delete the given members in one statement; returns the number removed."""
        deleted = Member.query.filter(Member.id.in_(member_ids)).delete(synchronize_session=False)
        db.session.commit()
        return deleted

    @staticmethod
    def export_dataframe(members: List[Member]) -> pd.DataFrame:
        """Roster as a table for CSV export."""
        rows = [{
            'name': m.name,
            'department': m.department,
            'role': m.role.value if m.role else '',
            'academic_year': m.year_label,
            'email': m.email,
            'mobile': m.mobile
        } for m in members]
        return pd.DataFrame(rows, columns=['name', 'department', 'role', 'academic_year', 'email', 'mobile'])
