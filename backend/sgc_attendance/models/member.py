"""Roster member model."""
from enum import Enum
from sgc_attendance import db
from sgc_attendance.models.base import BaseModel

class MemberRole(Enum):
    """Organizational roles."""
    TRAINEE = 'Trainee'
    MEMBER = 'Member'
    ADVISOR = 'Advisor'
    VICE_PRESIDENT = 'Vice President'
    PRESIDENT = 'President'
    ADMINISTRATOR = 'Administrator'

class AcademicYear(Enum):
    """Year of study."""
    I = 'I'
    II = 'II'
    III = 'III'
    IV = 'IV'

# Senior years first
YEAR_ORDER = {'IV': 1, 'III': 2, 'II': 3, 'I': 4}

def _enum_values(enum_class):
    return [member.value for member in enum_class]

class Member(BaseModel):
    """A member of the organization."""
    
    __tablename__ = 'members'
    
    name = db.Column(db.String(255), nullable=False)
    department = db.Column(db.String(100), nullable=False)
    role = db.Column(
        db.Enum(MemberRole, values_callable=_enum_values, native_enum=False, length=32),
        nullable=False,
        default=MemberRole.MEMBER
    )
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    mobile = db.Column(db.String(20), nullable=False, index=True)
    # Column name matches the hosted table
    academic_year = db.Column(
        'academicYear',
        db.Enum(AcademicYear, values_callable=_enum_values, native_enum=False, length=4),
        nullable=True
    )
    
    @property
    def year_label(self) -> str:
        """Academic year as shown in groupings, 'Other' when unset."""
        return self.academic_year.value if self.academic_year else 'Other'
    
    def sort_key(self) -> tuple:
        """Roster order: senior years first, then name."""
        return (YEAR_ORDER.get(self.year_label, 999), self.name.lower())
    
    def has_role(self, roles) -> bool:
        return self.role is not None and self.role.value in roles
    
    def matches(self, query: str) -> bool:
        """Roster search: text fields ignore case, mobile is a plain substring."""
        if not query:
            return True
        needle = query.lower()
        return (
            needle in (self.name or '').lower() or
            needle in (self.department or '').lower() or
            needle in (self.role.value if self.role else '').lower() or
            needle in (self.email or '').lower() or
            query in (self.mobile or '')
        )
    
    def __repr__(self) -> str:
        return f'<Member {self.email}>'
