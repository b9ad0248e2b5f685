"""
Admin Routes
============

Password login, status and logout for the portfolio admin panel.
There is exactly one credential, the configured ADMIN_PASSWORD.
"""

import hmac
from functools import wraps

from flask import current_app, request, session, jsonify

from . import admin_bp
from ...core.errors import AuthError
from ...core.logging_service import LoggingService, schedule_log_cleanup

SESSION_KEY = 'admin_token'


def _session_store():
    return current_app.extensions['reelfolio_sessions']


def is_admin():
    """True when the caller's session token maps to a live admin session"""
    return _session_store().is_active(session.get(SESSION_KEY))


def admin_required(f):
    """Decorator rejecting requests without a live admin session"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_admin():
            raise AuthError()
        return f(*args, **kwargs)
    return decorated_function


def check_password(password):
    """Constant-time comparison against the configured admin password"""
    expected = current_app.config.get('ADMIN_PASSWORD') or ''
    if not expected or not isinstance(password, str):
        return False
    return hmac.compare_digest(password.encode('utf-8'), expected.encode('utf-8'))


@admin_bp.route('/login', methods=['POST'])
def login():
    """Verify the admin password and open a session"""
    data = request.get_json(silent=True)
    if data is None:
        password = request.form.get('password')
    elif isinstance(data, dict):
        password = data.get('password')
    else:
        # Non-object JSON bodies carry no password
        password = None

    if not check_password(password):
        LoggingService.log_security_event('Failed admin login attempt')
        return jsonify({'message': 'Incorrect password'}), 401

    # Replace any previous token so a re-login never extends an old session
    _session_store().destroy(session.get(SESSION_KEY))
    session.clear()
    session[SESSION_KEY] = _session_store().create()
    session.permanent = True

    LoggingService.log_user_action('admin', 'login')
    schedule_log_cleanup()
    return jsonify({'message': 'Login successful'})


@admin_bp.route('/status', methods=['GET'])
def status():
    """Report whether the caller holds a live admin session"""
    try:
        logged_in = is_admin()
    except Exception as e:
        LoggingService.log_error_with_traceback('admin', e)
        logged_in = False
    return jsonify({'loggedIn': logged_in})


@admin_bp.route('/logout', methods=['POST'])
def logout():
    """Destroy the admin session and clear the cookie"""
    try:
        _session_store().destroy(session.get(SESSION_KEY))
        session.clear()
    except Exception as e:
        LoggingService.log_error_with_traceback('admin', e)
        return jsonify({'message': 'Could not log out, please try again.'}), 500

    LoggingService.log_user_action('admin', 'logout')
    return jsonify({'message': 'Logout successful'})
