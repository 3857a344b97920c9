# backend/sgc_attendance/utils/decorators.py
"""Custom decorators for authorization."""
from functools import wraps
from flask import g
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from sgc_attendance import LOGIN_PAGE
from sgc_attendance.services.auth_service import AuthService
from sgc_attendance.utils.helpers import error_response

def admin_required(f):
    """Decorator to require a valid session whose member passes the role gate.

    The role is read from the roster on every request, so a demoted member
    loses access without waiting for the token to expire.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        verify_jwt_in_request()
        member = AuthService.find_member_by_email(get_jwt_identity())

        if not member:
            return error_response("User not found", 401, redirect=LOGIN_PAGE)

        if not AuthService.is_admin(member):
            return error_response("Admin access required", 403, redirect=LOGIN_PAGE)

        g.current_member = member
        return f(*args, **kwargs)
    return decorated_function
