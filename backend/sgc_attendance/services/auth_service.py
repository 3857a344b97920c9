"""Authentication service: hosted sign-in plus the admin role gate."""
from flask import current_app
from flask_jwt_extended import create_access_token
from sqlalchemy import func
from sgc_attendance import LOGIN_PAGE
from sgc_attendance.models.member import Member
from sgc_attendance.services.hosted_auth import hosted_auth, AuthServiceError, InvalidCredentials
from sgc_attendance.services.token_blocklist import token_blocklist
from sgc_attendance.utils.validators import Validator

class LoginRejected(Exception):
    """Sign-in refused; carries the HTTP status and where the client should go."""

    def __init__(self, message: str, status_code: int = 401, redirect: str = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.redirect = redirect

class AuthService:
    @staticmethod
    def find_member_by_email(email: str) -> Member:
        """Case-insensitive roster lookup of a signed-in email."""
        if not email:
            return None
        return Member.query.filter(func.lower(Member.email) == email.strip().lower()).first()

    @staticmethod
    def is_admin(member: Member) -> bool:
        """Role gate: only configured roles may use the dashboard."""
        return member is not None and member.has_role(current_app.config['ADMIN_ROLES'])

    @staticmethod
    def login(email: str, password: str) -> dict:
        """Sign in at the hosted auth service and apply the role gate.

        A member whose role is not allowed gets the hosted session signed out
        straight away and never receives a dashboard token.
        """
        if not isinstance(email, str) or not isinstance(password, str):
            raise LoginRejected("Email and password must be text", 400)
        if not email or not password:
            raise LoginRejected("Email and password are required", 400)

        email = email.strip().lower()
        if not Validator.validate_email(email):
            raise LoginRejected("Invalid email format", 400)

        try:
            session = hosted_auth.sign_in_with_password(email, password)
        except InvalidCredentials as e:
            current_app.logger.info(f"Failed sign-in for {email}: {e}")
            raise LoginRejected(str(e), 401)
        except AuthServiceError as e:
            current_app.logger.error(f"Auth service failure during sign-in: {e}")
            raise LoginRejected("Authentication service unavailable", 502)

        member = AuthService.find_member_by_email(session.email)
        if not AuthService.is_admin(member):
            AuthService._force_sign_out(session.access_token)
            current_app.logger.warning(
                f"Role gate rejected {session.email} "
                f"(role: {member.role.value if member and member.role else 'not on roster'})"
            )
            raise LoginRejected(
                "Access denied. Only Administrator, President or Vice President can access this dashboard.",
                403,
                redirect=LOGIN_PAGE
            )

        access_token = create_access_token(
            identity=session.email,
            additional_claims={
                'role': member.role.value,
                'member_id': member.id,
                'hosted_token': session.access_token
            }
        )

        return {
            "access_token": access_token,
            "user": AuthService.session_user(member)
        }

    @staticmethod
    def logout(jwt_payload: dict) -> None:
        """Revoke the dashboard token and end the hosted session."""
        token_blocklist.revoke(jwt_payload['jti'])
        AuthService._force_sign_out(jwt_payload.get('hosted_token'))

    @staticmethod
    def hosted_session_active(jwt_payload: dict) -> bool:
        """Whether the hosted session behind a dashboard token is still valid."""
        hosted_token = jwt_payload.get('hosted_token')
        if not hosted_token:
            return False
        return hosted_auth.get_user(hosted_token) is not None

    @staticmethod
    def session_user(member: Member) -> dict:
        return {
            'id': member.id,
            'email': member.email,
            'name': member.name,
            'role': member.role.value if member.role else None
        }

    @staticmethod
    def _force_sign_out(hosted_token: str) -> None:
        if not hosted_token:
            return
        try:
            hosted_auth.sign_out(hosted_token)
        except AuthServiceError as e:
            # The dashboard token is already refused; the hosted session expires on its own
            current_app.logger.error(f"Hosted sign-out failed: {e}")
