# backend/sgc_attendance/services/hosted_auth.py
"""Client for the hosted auth service (GoTrue-compatible REST API).

Passwords are never checked locally: sign-in, session lookup and sign-out are
all delegated to the hosted backend.
"""
from dataclasses import dataclass
from typing import Optional

import requests


class AuthServiceError(Exception):
    """The auth service could not be reached or answered unexpectedly."""


class InvalidCredentials(Exception):
    """The auth service rejected the email/password pair."""


@dataclass
class HostedSession:
    """Session returned by a password sign-in."""
    access_token: str
    refresh_token: Optional[str]
    email: str
    user_id: Optional[str] = None
    expires_in: Optional[int] = None


class HostedAuthClient:
    """Thin wrapper over the auth service endpoints."""

    def __init__(self, app=None):
        self.base_url = None
        self.api_key = None
        self.timeout = 10
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        self.base_url = app.config['AUTH_URL'].rstrip('/')
        self.api_key = app.config.get('AUTH_API_KEY', '')
        self.timeout = app.config.get('AUTH_TIMEOUT', 10)
        app.extensions['hosted_auth'] = self

    def _headers(self, access_token: str = None) -> dict:
        headers = {
            'apikey': self.api_key,
            'Content-Type': 'application/json'
        }
        if access_token:
            headers['Authorization'] = f'Bearer {access_token}'
        return headers

    def sign_in_with_password(self, email: str, password: str) -> HostedSession:
        """Exchange email/password for a hosted session."""
        try:
            response = requests.post(
                f'{self.base_url}/token',
                params={'grant_type': 'password'},
                json={'email': email, 'password': password},
                headers=self._headers(),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise AuthServiceError(f'Auth service unavailable: {e}') from e

        if response.status_code in (400, 401, 422):
            payload = _safe_json(response)
            message = (payload.get('error_description') or payload.get('msg')
                       or 'Invalid login credentials')
            raise InvalidCredentials(message)
        if not response.ok:
            raise AuthServiceError(f'Auth service error ({response.status_code})')

        payload = _safe_json(response)
        user = payload.get('user') or {}
        if not payload.get('access_token') or not user.get('email'):
            raise AuthServiceError('Auth service returned an incomplete session')

        return HostedSession(
            access_token=payload['access_token'],
            refresh_token=payload.get('refresh_token'),
            email=user['email'].lower(),
            user_id=user.get('id'),
            expires_in=payload.get('expires_in')
        )

    def get_user(self, access_token: str) -> Optional[dict]:
        """Return the user behind a hosted access token, None if it is no longer valid."""
        try:
            response = requests.get(
                f'{self.base_url}/user',
                headers=self._headers(access_token),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise AuthServiceError(f'Auth service unavailable: {e}') from e

        if response.status_code in (401, 403):
            return None
        if not response.ok:
            raise AuthServiceError(f'Auth service error ({response.status_code})')
        return _safe_json(response)

    def sign_out(self, access_token: str) -> None:
        """End the hosted session. An already expired session counts as signed out."""
        try:
            response = requests.post(
                f'{self.base_url}/logout',
                headers=self._headers(access_token),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise AuthServiceError(f'Auth service unavailable: {e}') from e

        if not response.ok and response.status_code not in (401, 403, 404):
            raise AuthServiceError(f'Auth service error ({response.status_code})')


def _safe_json(response) -> dict:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


hosted_auth = HostedAuthClient()
