# File: backend/sgc_attendance/api/auth.py
"""Authentication API: hosted sign-in behind the admin role gate."""
from flask import Blueprint, request, current_app, g
from flask_jwt_extended import jwt_required, get_jwt
from sgc_attendance import limiter, LOGIN_PAGE
from sgc_attendance.services.auth_service import AuthService, LoginRejected
from sgc_attendance.utils.decorators import admin_required
from sgc_attendance.utils.helpers import success_response, error_response
from sgc_attendance.utils.validators import Validator, ValidationError

auth_bp = Blueprint("auth", __name__)

@auth_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    return success_response(message="Auth service is running")

@auth_bp.route("/login", methods=["POST"])
@limiter.limit("5 per minute")
def login():
    """Admin login with email and password."""
    try:
        data = Validator.validate_json_object(request.get_json(silent=True))
        result = AuthService.login(data.get("email", ""), data.get("password", ""))

        return success_response(
            data=result,
            message="Login successful"
        )

    except LoginRejected as e:
        return error_response(e.message, e.status_code, redirect=e.redirect)
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Login error: {str(e)}")
        return error_response(f"Login error: {str(e)}", 500)

@auth_bp.route("/logout", methods=["POST"])
@jwt_required()
def logout():
    """End the dashboard session and the hosted session behind it."""
    try:
        AuthService.logout(get_jwt())
        return success_response(message="Logged out successfully")

    except Exception as e:
        current_app.logger.error(f"Logout error: {str(e)}")
        return error_response(f"Logout error: {str(e)}", 500)

@auth_bp.route("/session", methods=["GET"])
@jwt_required()
@admin_required
def session():
    """Current signed-in user, while the hosted session is still alive."""
    if not AuthService.hosted_session_active(get_jwt()):
        return error_response("Session has ended", 401, redirect=LOGIN_PAGE)

    return success_response(data={"user": AuthService.session_user(g.current_member)})
