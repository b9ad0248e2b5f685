"""
Projects Module
===============

JSON API for the portfolio's project list.

Provides:
- Public project listing, newest year first
- Admin-only create, update and delete
- Thumbnail / video upload to media storage
- Background cleanup of superseded media
"""

from flask import Blueprint

projects_bp = Blueprint(
    'projects',
    __name__,
    url_prefix='/api/projects'
)

from . import routes

__all__ = ['projects_bp']
