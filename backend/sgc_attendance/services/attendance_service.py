# backend/sgc_attendance/services/attendance_service.py
"""Daily attendance editor: snapshot, change tracking and upsert."""
from datetime import date
from typing import Dict, List, Optional
from urllib.parse import quote
from sqlalchemy.dialects import postgresql, sqlite
from sgc_attendance import db
from sgc_attendance.models.attendance import AttendanceRecord
from sgc_attendance.models.member import Member

WHATSAPP_SHARE_URL = 'https://wa.me/?text='


class AttendanceSheet:
    """Attendance of every member for one date, tracking edits against a snapshot.

    ``original`` is the state last fetched (or last saved); ``current`` holds
    the edits. A cell is changed while its current value differs from the
    snapshot, and setting it back removes it from the change set.
    """

    def __init__(self, day: date, original: Dict[int, Optional[bool]]):
        self.date = day
        self.original = dict(original)
        self.current = dict(original)
        self.changed = set()

    def set(self, member_id: int, is_present: bool) -> None:
        self.current[member_id] = is_present
        if self.original.get(member_id) != is_present:
            self.changed.add(member_id)
        else:
            self.changed.discard(member_id)

    def changes(self) -> List[dict]:
        """Rows to upsert: changed cells that hold a value."""
        return [
            {'member_id': member_id, 'date': self.date, 'is_present': self.current[member_id]}
            for member_id in sorted(self.changed)
            if self.current.get(member_id) is not None
        ]

    def mark_saved(self) -> None:
        """Reconcile the snapshot with the saved state."""
        self.original = dict(self.current)
        self.changed = set()


class AttendanceService:
    """Service for the per-date attendance grid."""

    @staticmethod
    def snapshot(day: date) -> Dict[int, bool]:
        """Stored ``{member_id: is_present}`` for a date."""
        rows = db.session.query(AttendanceRecord.member_id, AttendanceRecord.is_present).filter(
            AttendanceRecord.date == day
        ).all()
        return {member_id: is_present for member_id, is_present in rows}

    @staticmethod
    def load_sheet(day: date, original: Dict[int, Optional[bool]] = None) -> AttendanceSheet:
        """Start a sheet from the client's fetched snapshot, or from the store."""
        if original is None:
            original = AttendanceService.snapshot(day)
        return AttendanceSheet(day, original)

    @staticmethod
    def upsert(rows: List[dict]) -> int:
        """Insert-or-update rows keyed on (member_id, date) in one statement."""
        if not rows:
            return 0

        dialect = db.session.get_bind().dialect.name
        insert = postgresql.insert if dialect == 'postgresql' else sqlite.insert

        stmt = insert(AttendanceRecord.__table__).values(rows)
        stmt = stmt.on_conflict_do_update(
            index_elements=['member_id', 'date'],
            set_={'is_present': stmt.excluded.is_present}
        )
        db.session.execute(stmt)
        db.session.commit()
        return len(rows)

    @staticmethod
    def submit(sheet: AttendanceSheet) -> int:
        """Upsert the sheet's changed cells; returns how many were written."""
        rows = sheet.changes()
        if not rows:
            return 0

        try:
            written = AttendanceService.upsert(rows)
        except Exception:
            db.session.rollback()
            raise

        sheet.mark_saved()
        return written

    @staticmethod
    def summary(day: date, members: List[Member], attendance: Dict[int, Optional[bool]]) -> dict:
        """Shareable text listing who was present and absent on a date."""
        ordered = sorted(members, key=Member.sort_key)
        present = [m for m in ordered if attendance.get(m.id) is True]
        absent = [m for m in ordered if attendance.get(m.id) is False]

        def lines(group):
            return "\n".join(f"- {m.name} ({m.year_label} Year)" for m in group) or "None"

        message = (
            f"*Attendance Report - {day.isoformat()}* \n\n"
            f" *Present ({len(present)}):* \n{lines(present)}\n\n"
            f" *Absent ({len(absent)}):* \n{lines(absent)}\n\n"
            f" *Stay consistent and keep learning!* "
        )

        return {
            'date': day.isoformat(),
            'present_count': len(present),
            'absent_count': len(absent),
            'unmarked_count': len(ordered) - len(present) - len(absent),
            'message': message,
            'share_url': share_link(message)
        }


def share_link(message: str) -> str:
    """wa.me deep link carrying the message."""
    return WHATSAPP_SHARE_URL + quote(message, safe='')
