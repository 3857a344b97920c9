"""Helper functions for the application."""
from flask import jsonify
from typing import Any

def handle_error(error, status_code: int):
    """Handle application errors with consistent format."""
    return jsonify({
        'error': True,
        'message': str(error),
        'status_code': status_code
    }), status_code

def success_response(data: Any = None, message: str = "Success"):
    """Return consistent success response."""
    response = {
        'error': False,
        'message': message
    }
    
    if data is not None:
        response['data'] = data
    
    return jsonify(response)

def error_response(message: str, status_code: int = 400, redirect: str = None):
    """Return consistent error response.

    ``redirect`` tells the client which screen to fall back to, used for
    session and role-gate failures.
    """
    response = {
        'error': True,
        'message': message,
        'status_code': status_code
    }
    
    if redirect:
        response['redirect'] = redirect
    
    return jsonify(response), status_code
