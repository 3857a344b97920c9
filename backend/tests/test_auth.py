"""Test authentication endpoints and the admin role gate."""
import json
from unittest.mock import patch
import pytest
from sgc_attendance.models import MemberRole
from sgc_attendance.services.hosted_auth import (
    hosted_auth, HostedSession, InvalidCredentials, AuthServiceError
)

def _session(email):
    return HostedSession(access_token='hosted-token', refresh_token='refresh', email=email)

def test_health_check(client):
    """Test auth health endpoint."""
    response = client.get('/api/auth/health')
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['message'] == 'Auth service is running'

def test_login_success(client, admin):
    with patch.object(hosted_auth, 'sign_in_with_password', return_value=_session(admin.email)), \
            patch.object(hosted_auth, 'sign_out') as sign_out:
        response = client.post('/api/auth/login', json={'email': admin.email, 'password': 'secret'})

    assert response.status_code == 200
    data = response.get_json()
    assert data['error'] is False
    assert data['data']['access_token']
    assert data['data']['user']['role'] == 'President'
    sign_out.assert_not_called()

@pytest.mark.parametrize('role', [MemberRole.MEMBER, MemberRole.TRAINEE, MemberRole.ADVISOR])
def test_role_gate_forces_sign_out(client, make_member, role):
    member = make_member('Ravi Member', role=role, email='ravi@example.edu')

    with patch.object(hosted_auth, 'sign_in_with_password', return_value=_session(member.email)), \
            patch.object(hosted_auth, 'sign_out') as sign_out:
        response = client.post('/api/auth/login', json={'email': member.email, 'password': 'secret'})

    assert response.status_code == 403
    data = response.get_json()
    assert data['redirect'] == '/admin/login'
    assert 'data' not in data
    sign_out.assert_called_once_with('hosted-token')

def test_role_gate_rejects_email_not_on_roster(client):
    with patch.object(hosted_auth, 'sign_in_with_password', return_value=_session('stranger@example.edu')), \
            patch.object(hosted_auth, 'sign_out') as sign_out:
        response = client.post('/api/auth/login', json={'email': 'stranger@example.edu', 'password': 'x'})

    assert response.status_code == 403
    sign_out.assert_called_once()

def test_login_invalid_credentials(client, admin):
    with patch.object(hosted_auth, 'sign_in_with_password',
                      side_effect=InvalidCredentials('Invalid login credentials')):
        response = client.post('/api/auth/login', json={'email': admin.email, 'password': 'wrong'})

    assert response.status_code == 401
    assert response.get_json()['message'] == 'Invalid login credentials'

def test_login_auth_service_down(client, admin):
    with patch.object(hosted_auth, 'sign_in_with_password', side_effect=AuthServiceError('timeout')):
        response = client.post('/api/auth/login', json={'email': admin.email, 'password': 'secret'})

    assert response.status_code == 502

def test_login_validation(client):
    response = client.post('/api/auth/login', json={'email': '', 'password': ''})
    assert response.status_code == 400

    response = client.post('/api/auth/login', json={'email': 'not-an-email', 'password': 'x'})
    assert response.status_code == 400

def test_missing_token_redirects_to_login(client):
    response = client.get('/api/admin/dashboard')
    assert response.status_code == 401
    assert response.get_json()['redirect'] == '/admin/login'

def test_demoted_member_loses_access(client, admin, auth_headers):
    admin.update(role=MemberRole.MEMBER)

    response = client.get('/api/admin/dashboard', headers=auth_headers)
    assert response.status_code == 403
    assert response.get_json()['redirect'] == '/admin/login'

def test_logout_revokes_token(client, auth_headers):
    with patch.object(hosted_auth, 'sign_out') as sign_out:
        response = client.post('/api/auth/logout', headers=auth_headers)

    assert response.status_code == 200
    sign_out.assert_called_once_with('hosted-abc')

    response = client.get('/api/admin/dashboard', headers=auth_headers)
    assert response.status_code == 401
    assert response.get_json()['redirect'] == '/admin/login'

def test_session_requires_live_hosted_session(client, auth_headers):
    with patch.object(hosted_auth, 'get_user', return_value={'email': 'president@example.edu'}):
        response = client.get('/api/auth/session', headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['user']['email'] == 'president@example.edu'

    with patch.object(hosted_auth, 'get_user', return_value=None):
        response = client.get('/api/auth/session', headers=auth_headers)
    assert response.status_code == 401
    assert response.get_json()['redirect'] == '/admin/login'

def test_dashboard(client, auth_headers, make_member):
    make_member('Someone Else')

    response = client.get('/api/admin/dashboard', headers=auth_headers)
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['user']['email'] == 'president@example.edu'
    assert data['counts']['members'] == 2
    assert [s['key'] for s in data['sections']] == ['members', 'attendance', 'reports', 'feedback']

def test_login_rejects_non_text_credentials(client):
    response = client.post('/api/auth/login', json={'email': 123, 'password': 'secret'})
    assert response.status_code == 400

    response = client.post('/api/auth/login', json=['president@example.edu', 'secret'])
    assert response.status_code == 400
