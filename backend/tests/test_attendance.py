"""Test the daily attendance editor."""
from datetime import date
from urllib.parse import unquote
from sgc_attendance import db
from sgc_attendance.models import AttendanceRecord, AcademicYear
from sgc_attendance.services.attendance_service import AttendanceService, AttendanceSheet

DAY = date(2024, 5, 1)

def test_sheet_tracks_only_real_changes():
    sheet = AttendanceSheet(DAY, {1: True, 2: None})

    sheet.set(1, False)
    sheet.set(2, True)
    assert {row['member_id'] for row in sheet.changes()} == {1, 2}

    # Back to the snapshot value is no longer a change
    sheet.set(1, True)
    assert [row['member_id'] for row in sheet.changes()] == [2]

    sheet.mark_saved()
    assert sheet.changes() == []
    assert sheet.original == {1: True, 2: True}

def test_upsert_is_idempotent(app, make_member):
    member = make_member('Anil Kumar')
    row = {'member_id': member.id, 'date': DAY, 'is_present': True}

    AttendanceService.upsert([row])
    AttendanceService.upsert([row])

    assert AttendanceRecord.query.count() == 1
    assert AttendanceService.snapshot(DAY) == {member.id: True}

def test_upsert_updates_existing_cell(app, make_member, mark):
    member = make_member('Anil Kumar')
    mark(member, DAY, True)

    AttendanceService.upsert([{'member_id': member.id, 'date': DAY, 'is_present': False}])

    db.session.expire_all()
    assert AttendanceRecord.query.count() == 1
    assert AttendanceService.snapshot(DAY) == {member.id: False}

def test_get_attendance_groups_by_year(client, auth_headers, make_member, mark, admin):
    junior = make_member('Bina Das', year=AcademicYear.I)
    make_member('Chetan Rao', year=None)
    mark(junior, DAY, False)

    response = client.get('/api/admin/attendance?date=2024-05-01', headers=auth_headers)
    assert response.status_code == 200
    data = response.get_json()['data']
    assert [g['academic_year'] for g in data['groups']] == ['IV', 'I', 'Other']
    assert data['attendance'][str(junior.id)] is False
    assert data['attendance'][str(admin.id)] is None

def test_get_attendance_requires_valid_date(client, auth_headers):
    response = client.get('/api/admin/attendance?date=05/01/2024', headers=auth_headers)
    assert response.status_code == 400

def test_submit_writes_only_changes(client, auth_headers, make_member, mark, admin):
    a = make_member('Anil Kumar')
    b = make_member('Bina Das')
    mark(a, DAY, True)

    response = client.post('/api/admin/attendance', json={
        'date': '2024-05-01',
        'attendance': {str(a.id): True, str(b.id): False, str(admin.id): True},
        'original': {str(a.id): True, str(b.id): None, str(admin.id): None}
    }, headers=auth_headers)

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['changes'] == 2
    assert data['attendance'] == {str(a.id): True, str(b.id): False, str(admin.id): True}
    assert data['summary']['present_count'] == 2

    db.session.expire_all()
    assert AttendanceRecord.query.count() == 3

def test_submit_without_changes(client, auth_headers, make_member, mark):
    a = make_member('Anil Kumar')
    mark(a, DAY, True)

    response = client.post('/api/admin/attendance', json={
        'date': '2024-05-01',
        'attendance': {str(a.id): True}
    }, headers=auth_headers)

    assert response.status_code == 200
    body = response.get_json()
    assert body['message'] == 'No changes to submit'
    assert body['data']['changes'] == 0

def test_submit_rejects_unknown_member(client, auth_headers):
    response = client.post('/api/admin/attendance', json={
        'date': '2024-05-01',
        'attendance': {'9999': True}
    }, headers=auth_headers)
    assert response.status_code == 400

def test_submit_rejects_non_boolean(client, auth_headers, admin):
    response = client.post('/api/admin/attendance', json={
        'date': '2024-05-01',
        'attendance': {str(admin.id): 'yes'}
    }, headers=auth_headers)
    assert response.status_code == 400

def test_summary_message(app, make_member):
    senior = make_member('Yash Patil', year=AcademicYear.IV)
    junior = make_member('Bina Das', year=AcademicYear.I)

    summary = AttendanceService.summary(DAY, [junior, senior], {senior.id: True, junior.id: True})

    assert summary['message'] == (
        "*Attendance Report - 2024-05-01* \n\n"
        " *Present (2):* \n- Yash Patil (IV Year)\n- Bina Das (I Year)\n\n"
        " *Absent (0):* \nNone\n\n"
        " *Stay consistent and keep learning!* "
    )
    assert summary['share_url'].startswith('https://wa.me/?text=')
    assert unquote(summary['share_url'][len('https://wa.me/?text='):]) == summary['message']

def test_summary_endpoint(client, auth_headers, admin, mark):
    mark(admin, DAY, False)

    response = client.get('/api/admin/attendance/summary?date=2024-05-01', headers=auth_headers)
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['absent_count'] == 1
    assert '- Asha President (IV Year)' in data['message']

def test_submit_rejects_non_object_body(client, auth_headers):
    response = client.post('/api/admin/attendance', json=[1, 2], headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Request body must be a JSON object'
