import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv(override=True)


def _csv(value):
    """Split a comma-separated setting into a clean list"""
    if not value:
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in value.split(',') if part.strip()]


IS_PRODUCTION = (
    os.getenv('ENVIRONMENT') == 'production' or
    os.getenv('FLASK_ENV') == 'production' or
    os.getenv('NODE_ENV') == 'production'
)


class MediaInputPolicy:
    """How a new project must supply its thumbnail and video"""
    URLS_REQUIRED = 'urls_required'
    FILES_REQUIRED = 'files_required'
    EITHER = 'either'

    ALL = (URLS_REQUIRED, FILES_REQUIRED, EITHER)


class Config:
    """
    Base configuration for the Reelfolio site.
    Every value can be overridden through app.config or the environment.
    """
    # Flask settings
    SECRET_KEY = os.getenv('SESSION_SECRET') or os.getenv('FLASK_SECRET_KEY')
    IS_PRODUCTION = IS_PRODUCTION

    # Admin
    ADMIN_PASSWORD = (os.getenv('ADMIN_PASSWORD') or '').strip() or None
    SESSION_TTL_HOURS = int(os.getenv('SESSION_TTL_HOURS', '24'))

    # Days of app_logs history kept, pruned at startup and on admin login
    LOG_RETENTION_DAYS = int(os.getenv('LOG_RETENTION_DAYS', '30'))

    # Document store
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'reelfolio')
    PROJECTS_COLLECTION = 'projects'
    LOGS_COLLECTION = 'app_logs'

    # CORS allow-list
    CORS_ORIGINS = os.getenv('CORS_ORIGINS') or os.getenv('ALLOWED_ORIGINS')

    # Media object storage (DigitalOcean Spaces or any S3-compatible bucket)
    DO_SPACES_REGION = os.getenv('DO_SPACES_REGION')
    DO_SPACES_NAME = os.getenv('DO_SPACES_NAME')
    DO_SPACES_KEY = os.getenv('DO_SPACES_KEY')
    DO_SPACES_SECRET = os.getenv('DO_SPACES_SECRET')
    MEDIA_ENDPOINT_URL = os.getenv('MEDIA_ENDPOINT_URL')
    MEDIA_PUBLIC_BASE_URL = os.getenv('MEDIA_PUBLIC_BASE_URL')

    MEDIA_INPUT_POLICY = os.getenv('MEDIA_INPUT_POLICY', MediaInputPolicy.EITHER)
    MEDIA_ALLOWED_FORMATS = os.getenv(
        'MEDIA_ALLOWED_FORMATS', 'jpg,jpeg,png,webp,gif,mp4,mov,webm,m4v'
    )
    MEDIA_IMAGE_FOLDER = os.getenv('MEDIA_IMAGE_FOLDER', 'project-thumbnails')
    MEDIA_VIDEO_FOLDER = os.getenv('MEDIA_VIDEO_FOLDER', 'project-videos')
    MEDIA_OTHER_FOLDER = os.getenv('MEDIA_OTHER_FOLDER', 'project-files')
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', str(200 * 1024 * 1024)))

    # Run fire-and-forget work inline instead of on the thread pool
    BACKGROUND_TASKS_SYNC = os.getenv('BACKGROUND_TASKS_SYNC', '').lower() in ('1', 'true', 'yes')

    # Site identity
    SITE_OWNER = os.getenv('SITE_OWNER', 'Lucy Kadii')
    SITE_TAGLINE = os.getenv('SITE_TAGLINE', 'Director • Cinematographer • Editor • Producer')
    SITE_SHOWREEL_URL = os.getenv(
        'SITE_SHOWREEL_URL',
        'https://player.vimeo.com/video/299512495?h=1f4f4c4a4e&color=ffffff&title=0&byline=0&portrait=0'
    )
    SITE_HERO_VIDEO_URL = os.getenv(
        'SITE_HERO_VIDEO_URL',
        'https://assets.mixkit.co/videos/preview/mixkit-top-aerial-shot-of-seashore-with-rocks-1090-large.mp4'
    )
    SITE_CONTACT_PHONE = os.getenv('SITE_CONTACT_PHONE', '+254 742 393 900')
    SITE_CONTACT_EMAIL = os.getenv('SITE_CONTACT_EMAIL', 'lucyshoka3@gmail.com')
    SITE_INSTAGRAM_HANDLE = os.getenv('SITE_INSTAGRAM_HANDLE', 'lucykadii')
    SITE_INSTAGRAM_URL = os.getenv('SITE_INSTAGRAM_URL', 'https://www.instagram.com/lucy_kadii/')

    # Port for local server
    port = int(os.getenv('PORT', '5001'))


# Settings the server refuses to start without
REQUIRED_SETTINGS = (
    'MONGO_URI', 'SECRET_KEY', 'ADMIN_PASSWORD', 'CORS_ORIGINS',
    'DO_SPACES_REGION', 'DO_SPACES_NAME', 'DO_SPACES_KEY', 'DO_SPACES_SECRET',
)


def load_config(app, overrides=None):
    """Copy Config defaults into app.config without clobbering values the host app set"""
    for key in dir(Config):
        if key.isupper() and app.config.get(key) is None:
            app.config[key] = getattr(Config, key)

    for key, value in (overrides or {}).items():
        app.config[key] = value

    app.config['ADMIN_PASSWORD'] = (app.config.get('ADMIN_PASSWORD') or '').strip() or None
    app.config['CORS_ORIGINS'] = _csv(app.config.get('CORS_ORIGINS'))
    app.config['MEDIA_ALLOWED_FORMATS'] = [f.lower().lstrip('.') for f in _csv(app.config.get('MEDIA_ALLOWED_FORMATS'))]

    production = bool(app.config.get('IS_PRODUCTION'))
    ttl = timedelta(hours=int(app.config.get('SESSION_TTL_HOURS') or 24))

    # Fixed-lifetime, script-invisible session cookie
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SECURE'] = production
    app.config['SESSION_COOKIE_SAMESITE'] = 'None' if production else 'Lax'
    app.config['PERMANENT_SESSION_LIFETIME'] = ttl
    app.config['SESSION_REFRESH_EACH_REQUEST'] = False

    return app.config


def validate_config(config):
    """Return the names of required settings that are missing or empty"""
    missing = [key for key in REQUIRED_SETTINGS if not config.get(key)]

    policy = config.get('MEDIA_INPUT_POLICY')
    if policy and policy not in MediaInputPolicy.ALL:
        missing.append(f'MEDIA_INPUT_POLICY (one of {", ".join(MediaInputPolicy.ALL)})')

    return missing
