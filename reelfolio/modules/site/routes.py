"""
Site Routes
===========

Renders the portfolio page. Projects are fetched client-side from
/api/projects so the page itself never touches the store.
"""

from datetime import datetime

from flask import current_app, render_template

from . import site_bp
from . import content


def _site_context():
    config = current_app.config
    return {
        'owner': config.get('SITE_OWNER'),
        'tagline': config.get('SITE_TAGLINE'),
        'hero_video_url': config.get('SITE_HERO_VIDEO_URL'),
        'showreel_url': config.get('SITE_SHOWREEL_URL'),
        'contact': {
            'phone': config.get('SITE_CONTACT_PHONE'),
            'email': config.get('SITE_CONTACT_EMAIL'),
            'instagram_handle': config.get('SITE_INSTAGRAM_HANDLE'),
            'instagram_url': config.get('SITE_INSTAGRAM_URL'),
        },
        'media_policy': config.get('MEDIA_INPUT_POLICY'),
    }


@site_bp.route('/')
def index():
    """Single-page portfolio"""
    return render_template(
        'site/index.html',
        site=_site_context(),
        sections=content.SECTIONS,
        nav_links=content.NAV_LINKS,
        content=content,
        year=datetime.now().year,
    )
