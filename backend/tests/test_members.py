"""Test roster management."""
import pytest
from sqlalchemy.exc import IntegrityError
from sgc_attendance import db
from sgc_attendance.models import Member, MemberRole, AcademicYear, AttendanceRecord
from sgc_attendance.services.member_service import MemberService

def _new_member(**overrides):
    data = {
        'name': 'Neha Verma',
        'department': 'ECE',
        'role': 'Member',
        'email': 'Neha.Verma@Example.edu',
        'mobile': '9123456789',
        'academic_year': 'II'
    }
    data.update(overrides)
    return data

def test_search_by_mobile_substring(app, make_member):
    a = make_member('Anil Kumar', mobile='9876501234')
    b = make_member('Bina Das', mobile='9123401299')
    make_member('Chetan Rao', mobile='9000000000')

    found = MemberService.list_members('012')
    assert {m.id for m in found} == {a.id, b.id}

def test_search_text_fields_ignore_case(app, make_member):
    make_member('Anil Kumar', department='Mechanical')
    make_member('Bina Das', role=MemberRole.ADVISOR)

    assert [m.name for m in MemberService.list_members('KUMAR')] == ['Anil Kumar']
    assert [m.name for m in MemberService.list_members('mechan')] == ['Anil Kumar']
    assert [m.name for m in MemberService.list_members('advisor')] == ['Bina Das']
    assert [m.name for m in MemberService.list_members('bina.das@')] == ['Bina Das']

def test_roster_order_senior_years_first(app, make_member):
    make_member('zoe', year=AcademicYear.I)
    make_member('Yash', year=AcademicYear.IV)
    make_member('Amit', year=AcademicYear.IV)
    make_member('Kiran', year=None)
    make_member('Mona', year=AcademicYear.II)

    names = [m.name for m in MemberService.list_members()]
    assert names == ['Amit', 'Yash', 'Mona', 'zoe', 'Kiran']

    grouped = MemberService.group_by_year(MemberService.list_members())
    assert list(grouped) == ['IV', 'II', 'I', 'Other']

def test_list_members_endpoint(client, auth_headers, make_member):
    make_member('Anil Kumar', mobile='9876501234')

    response = client.get('/api/admin/members?q=98765', headers=auth_headers)
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['total'] == 1
    assert data['members'][0]['academic_year'] == 'I'

def test_create_member(client, auth_headers):
    response = client.post('/api/admin/members', json=_new_member(), headers=auth_headers)
    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['email'] == 'neha.verma@example.edu'
    assert data['role'] == 'Member'

def test_create_member_validation(client, auth_headers):
    response = client.post('/api/admin/members', json=_new_member(mobile='abc'), headers=auth_headers)
    assert response.status_code == 400

    response = client.post('/api/admin/members', json=_new_member(role='Captain'), headers=auth_headers)
    assert response.status_code == 400
    assert 'Allowed' in response.get_json()['message']

    response = client.post('/api/admin/members', json=_new_member(name=''), headers=auth_headers)
    assert response.status_code == 400

def test_create_member_rejects_duplicate_email(client, auth_headers):
    client.post('/api/admin/members', json=_new_member(), headers=auth_headers)
    response = client.post('/api/admin/members', json=_new_member(email='neha.verma@example.edu'),
                           headers=auth_headers)
    assert response.status_code == 400

def test_update_changes_only_year_and_role(client, auth_headers, make_member):
    member = make_member('Anil Kumar')

    response = client.put(f'/api/admin/members/{member.id}',
                          json={'academic_year': 'III', 'role': 'Advisor', 'name': 'Renamed'},
                          headers=auth_headers)
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['academic_year'] == 'III'
    assert data['role'] == 'Advisor'
    assert data['name'] == 'Anil Kumar'

def test_update_without_editable_fields(client, auth_headers, make_member):
    member = make_member('Anil Kumar')
    response = client.put(f'/api/admin/members/{member.id}', json={'name': 'X'}, headers=auth_headers)
    assert response.status_code == 400

def test_update_missing_member(client, auth_headers):
    response = client.put('/api/admin/members/9999', json={'role': 'Member'}, headers=auth_headers)
    assert response.status_code == 404

def test_bulk_delete_requires_confirmation(client, auth_headers, make_member):
    a = make_member('Anil Kumar')
    b = make_member('Bina Das')

    response = client.delete('/api/admin/members', json={'ids': [a.id, b.id]}, headers=auth_headers)
    assert response.status_code == 400
    assert '2 member(s)' in response.get_json()['message']
    assert Member.query.count() == 3

def test_bulk_delete(client, auth_headers, make_member, mark):
    a = make_member('Anil Kumar')
    b = make_member('Bina Das')
    mark(a, '2024-05-01')

    response = client.delete('/api/admin/members', json={'ids': [a.id, b.id], 'confirm': True},
                             headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['deleted'] == 2

    db.session.expire_all()
    assert Member.query.count() == 1
    assert AttendanceRecord.query.count() == 0

def test_export_members_csv(client, auth_headers, make_member):
    make_member('Anil Kumar')

    response = client.get('/api/admin/members/export', headers=auth_headers)
    assert response.status_code == 200
    assert response.mimetype == 'text/csv'
    lines = response.data.decode('utf-8').splitlines()
    assert lines[0] == 'name,department,role,academic_year,email,mobile'
    assert len(lines) == 3

def test_bulk_delete_rejects_boolean_ids(client, auth_headers, admin):
    response = client.delete('/api/admin/members', json={'ids': [True], 'confirm': True},
                             headers=auth_headers)
    assert response.status_code == 400

    db.session.expire_all()
    assert db.session.get(Member, admin.id) is not None

def test_bulk_delete_rejects_non_object_body(client, auth_headers):
    response = client.delete('/api/admin/members', json=[1, 2], headers=auth_headers)
    assert response.status_code == 400
    assert Member.query.count() == 1

def test_create_member_rejects_non_text_fields(client, auth_headers):
    response = client.post('/api/admin/members', json=_new_member(name=123), headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Name must be text'

    response = client.post('/api/admin/members', json=['Neha'], headers=auth_headers)
    assert response.status_code == 400

def test_update_rejects_non_object_body(client, auth_headers, make_member):
    member = make_member('Anil Kumar')
    response = client.put(f'/api/admin/members/{member.id}', json=['III'], headers=auth_headers)
    assert response.status_code == 400

def test_email_is_unique_in_the_table(app, make_member):
    make_member('Anil Kumar', email='anil@example.edu')
    with pytest.raises(IntegrityError):
        make_member('Anil Again', email='anil@example.edu')
    db.session.rollback()
