"""Shared fixtures."""
from datetime import date
import pytest
from flask_jwt_extended import create_access_token
from sgc_attendance import create_app, db
from sgc_attendance.models import Member, MemberRole, AcademicYear, AttendanceRecord

@pytest.fixture
def app():
    """Create test app."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()

@pytest.fixture
def make_member(app):
    """Factory for roster entries."""
    counter = {'n': 0}

    def _make(name, role=MemberRole.MEMBER, year=AcademicYear.I, email=None,
              mobile=None, department='CSE'):
        counter['n'] += 1
        member = Member(
            name=name,
            department=department,
            role=role,
            email=email or f"{name.lower().replace(' ', '.')}@example.edu",
            mobile=mobile or f"90000{counter['n']:05d}",
            academic_year=year
        )
        return member.save()

    return _make

@pytest.fixture
def mark(app):
    """Store one attendance cell."""
    def _mark(member, day, is_present=True):
        if isinstance(day, str):
            day = date.fromisoformat(day)
        return AttendanceRecord(member_id=member.id, date=day, is_present=is_present).save()

    return _mark

@pytest.fixture
def admin(make_member):
    return make_member('Asha President', role=MemberRole.PRESIDENT, year=AcademicYear.IV,
                       email='president@example.edu')

@pytest.fixture
def auth_headers(admin):
    """Bearer header for a signed-in administrator."""
    token = create_access_token(
        identity=admin.email,
        additional_claims={'role': admin.role.value, 'member_id': admin.id, 'hosted_token': 'hosted-abc'}
    )
    return {'Authorization': f'Bearer {token}'}
