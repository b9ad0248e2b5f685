"""
Admin Module
============

Single shared-password admin access for the portfolio.

Provides:
- Login against the configured ADMIN_PASSWORD
- Session status check for the client
- Logout
- admin_required decorator for protected API routes
"""

from flask import Blueprint

admin_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/api/admin'
)

from . import routes
from .routes import admin_required, is_admin
from .sessions import AdminSessionStore

__all__ = ['admin_bp', 'admin_required', 'is_admin', 'AdminSessionStore']
