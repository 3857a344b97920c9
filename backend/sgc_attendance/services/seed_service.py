# backend/sgc_attendance/services/seed_service.py
"""Database seeding service for sample data."""
from datetime import date, timedelta
import random
from sgc_attendance import db
from sgc_attendance.models.member import Member, MemberRole, AcademicYear
from sgc_attendance.models.feedback import Feedback, FeedbackStatus
from sgc_attendance.services.attendance_service import AttendanceService

DEPARTMENTS = ['CSE', 'ECE', 'EEE', 'MECH', 'CIVIL', 'IT']

MEMBERS = [
    ('Aarav Sharma', MemberRole.PRESIDENT, AcademicYear.IV),
    ('Diya Patel', MemberRole.VICE_PRESIDENT, AcademicYear.IV),
    ('Kabir Rao', MemberRole.ADMINISTRATOR, AcademicYear.III),
    ('Meera Nair', MemberRole.ADVISOR, AcademicYear.IV),
    ('Rohan Gupta', MemberRole.MEMBER, AcademicYear.III),
    ('Ananya Iyer', MemberRole.MEMBER, AcademicYear.III),
    ('Vikram Singh', MemberRole.MEMBER, AcademicYear.II),
    ('Isha Reddy', MemberRole.MEMBER, AcademicYear.II),
    ('Arjun Menon', MemberRole.TRAINEE, AcademicYear.I),
    ('Sara Khan', MemberRole.TRAINEE, AcademicYear.I),
]


class SeedService:
    """Service to seed the database with a sample roster."""

    @staticmethod
    def seed_all(days: int = 20):
        """Seed members, recent attendance and a few feedback entries."""
        members = SeedService.seed_members()
        SeedService.seed_attendance(members, days)
        SeedService.seed_feedback()

    @staticmethod
    def seed_members():
        members = []
        for index, (name, role, year) in enumerate(MEMBERS):
            handle = name.lower().replace(' ', '.')
            member = Member(
                name=name,
                department=DEPARTMENTS[index % len(DEPARTMENTS)],
                role=role,
                email=f"{handle}@example.edu",
                mobile=f"98765{index:05d}",
                academic_year=year
            )
            db.session.add(member)
            members.append(member)

        db.session.commit()
        print(f"✅ Created {len(members)} members")
        return members

    @staticmethod
    def seed_attendance(members, days: int):
        """Mark the last ``days`` weekdays, most members present."""
        rows = []
        day = date.today()
        marked = 0
        while marked < days:
            day -= timedelta(days=1)
            if day.weekday() >= 5:
                continue
            for member in members:
                rows.append({'member_id': member.id, 'date': day, 'is_present': random.random() < 0.8})
            marked += 1

        AttendanceService.upsert(rows)
        print(f"✅ Created {len(rows)} attendance records")

    @staticmethod
    def seed_feedback():
        entries = [
            ('Priya Das', 'priya.das@example.com', 'suggestion', 'Please share session notes after each meeting.'),
            ('Nikhil Jain', 'nikhil.jain@example.com', 'complaint', 'The sign-up form rejected my phone number.'),
            ('Farah Ali', 'farah.ali@example.com', 'appreciation', 'The resume workshop was very useful.'),
        ]
        for name, email, feedback_type, message in entries:
            db.session.add(Feedback(
                name=name, email=email, feedback_type=feedback_type,
                message=message, status=FeedbackStatus.PENDING
            ))

        db.session.commit()
        print(f"✅ Created {len(entries)} feedback entries")
