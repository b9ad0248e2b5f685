"""
Site Module
===========

The single-page portfolio: Home, Showreel, Projects, About and Contact
sections, plus the client scripts for the project grid and admin panel.
"""

from flask import Blueprint

site_bp = Blueprint(
    'site',
    __name__,
    template_folder='templates',
    static_folder='static',
    static_url_path='/site/static'
)

from . import routes

__all__ = ['site_bp']
