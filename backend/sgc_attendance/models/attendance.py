"""Daily attendance model."""
from sgc_attendance import db
from sgc_attendance.models.base import BaseModel

class AttendanceRecord(BaseModel):
    """Presence of one member on one date."""
    
    __tablename__ = 'attendance'
    __table_args__ = (
        db.UniqueConstraint('member_id', 'date', name='attendance_member_id_date_key'),
    )
    
    member_id = db.Column(
        db.Integer,
        db.ForeignKey('members.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    date = db.Column(db.Date, nullable=False, index=True)
    is_present = db.Column(db.Boolean, nullable=False, default=False)
    
    member = db.relationship(
        'Member',
        backref=db.backref('attendance_records', lazy='dynamic', passive_deletes=True)
    )
    
    @property
    def month_key(self) -> str:
        return self.date.strftime('%Y-%m')
    
    def __repr__(self):
        return f'<AttendanceRecord {self.member_id}-{self.date}>'
