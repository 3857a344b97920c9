# backend/sgc_attendance/services/report_service.py
"""Monthly attendance aggregation."""
from collections import defaultdict
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional
from flask import current_app
from sgc_attendance import db
from sgc_attendance.models.attendance import AttendanceRecord
from sgc_attendance.models.member import Member
import pandas as pd

REPORT_COLUMNS = ['name', 'department', 'role', 'academic_year', 'working_days',
                  'present', 'absent', 'percentage', 'absence_dates']


def month_bounds(month: str):
    """First day of ``month`` and first day of the following month."""
    start = datetime.strptime(month, '%Y-%m').date()
    if start.month == 12:
        end = date(start.year + 1, 1, 1)
    else:
        end = date(start.year, start.month + 1, 1)
    return start, end


def percentage(present: int, total: int) -> float:
    if not total:
        return 0.0
    return round(present / total * 100, 2)


class ReportService:
    """Service for monthly reports and the member self-view."""

    @staticmethod
    def available_months() -> List[str]:
        """Months (``YYYY-MM``) that have attendance rows, oldest first."""
        dates = db.session.query(AttendanceRecord.date).distinct().all()
        return sorted({d.strftime('%Y-%m') for (d,) in dates})

    @staticmethod
    def working_days(records: Iterable[AttendanceRecord], month: str,
                     weekdays_only: bool = False) -> List[date]:
        """Distinct dates of ``month`` that have at least one row."""
        days = {
            r.date for r in records
            if r.date.strftime('%Y-%m') == month and (not weekdays_only or r.date.weekday() < 5)
        }
        return sorted(days)

    @staticmethod
    def month_records(month: str) -> List[AttendanceRecord]:
        """Rows of one month belonging to members still on the roster."""
        start, end = month_bounds(month)
        return AttendanceRecord.query.join(Member).filter(
            AttendanceRecord.date >= start,
            AttendanceRecord.date < end
        ).all()

    @staticmethod
    def member_row(member: Member, working_days: List[date],
                   present_dates: Iterable[date]) -> dict:
        """Figures of one member for one month.

        Only presences on a working day count, so present + absent always
        equals the number of working days.
        """
        working = set(working_days)
        present = set(present_dates) & working
        absences = [d for d in working_days if d not in present]
        pct = percentage(len(present), len(working_days))

        return {
            'member_id': member.id,
            'name': member.name,
            'department': member.department,
            'role': member.role.value if member.role else None,
            'academic_year': member.academic_year.value if member.academic_year else None,
            'working_days': len(working_days),
            'present': len(present),
            'absent': len(working_days) - len(present),
            'percentage': pct,
            'absence_dates': [d.isoformat() for d in absences],
            'has_records': bool(working_days),
            'below_threshold': bool(working_days) and pct < current_app.config['ATTENDANCE_THRESHOLD']
        }

    @staticmethod
    def monthly_report(month: Optional[str] = None, query: str = None) -> dict:
        """Per-member report for ``month`` (latest month when omitted)."""
        months = ReportService.available_months()
        if month is None:
            month = months[-1] if months else date.today().strftime('%Y-%m')

        records = ReportService.month_records(month)
        working_days = ReportService.working_days(
            records, month, current_app.config['REPORT_WEEKDAYS_ONLY'])

        present_by_member: Dict[int, List[date]] = defaultdict(list)
        for record in records:
            if record.is_present:
                present_by_member[record.member_id].append(record.date)

        members = sorted(Member.query.all(), key=Member.sort_key)
        rows = [
            ReportService.member_row(m, working_days, present_by_member.get(m.id, []))
            for m in members
            if ReportService._row_matches(m, query)
        ]

        return {
            'month': month,
            'months': months,
            'working_days': len(working_days),
            'threshold': current_app.config['ATTENDANCE_THRESHOLD'],
            'rows': rows,
            'chart': [{'name': r['name'], 'present': r['present'], 'absent': r['absent']} for r in rows]
        }

    @staticmethod
    def _row_matches(member: Member, query: str) -> bool:
        if not query:
            return True
        needle = query.lower()
        return any(
            needle in (field or '').lower()
            for field in (member.name, member.department, member.role.value if member.role else '')
        )

    @staticmethod
    def report_dataframe(report: dict) -> pd.DataFrame:
        """Report rows as a table for CSV export."""
        frame = pd.DataFrame(report['rows'], columns=REPORT_COLUMNS)
        frame['absence_dates'] = frame['absence_dates'].apply(
            lambda dates: ', '.join(dates) if isinstance(dates, list) else '')
        return frame

    @staticmethod
    def member_summary(member: Member) -> dict:
        """Overall totals over every row of ``member`` plus a per-month breakdown."""
        records = AttendanceRecord.query.filter_by(member_id=member.id).order_by(
            AttendanceRecord.date).all()

        total = len(records)
        present = sum(1 for r in records if r.is_present)
        pct = percentage(present, total)

        months = sorted({r.month_key for r in records})
        weekdays_only = current_app.config['REPORT_WEEKDAYS_ONLY']
        monthly = []
        for month in months:
            working_days = ReportService.working_days(
                ReportService.month_records(month), month, weekdays_only)
            row = ReportService.member_row(
                member, working_days, [r.date for r in records if r.is_present and r.month_key == month])
            row['month'] = month
            monthly.append(row)

        return {
            'total_days': total,
            'present': present,
            'absent': total - present,
            'percentage': pct,
            'absence_dates': [r.date.isoformat() for r in records if not r.is_present],
            'below_threshold': total > 0 and pct < current_app.config['ATTENDANCE_THRESHOLD'],
            'has_records': total > 0,
            'monthly': monthly
        }
