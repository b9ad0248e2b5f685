"""
Storage Utility
===============

Media upload and deletion against S3-compatible object storage
(DigitalOcean Spaces by default) via boto3.

Uploaded files are routed by MIME type into an image, video or generic
folder. Object keys follow `<kind>/upload/v<timestamp>/<folder>/<name>.<ext>`
so the media id can be recovered from the public URL alone: it is the path
after the segment following `upload`, without the extension.
"""

import posixpath
import time
import uuid
from urllib.parse import urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app

from .errors import UploadError, MediaCleanupError
from .logging_service import LoggingService
from .tasks import run_in_background


def configure_storage(app):
    """Create the shared S3 client and resolve the public base URL."""
    region = app.config.get('DO_SPACES_REGION')
    space_name = app.config.get('DO_SPACES_NAME')

    endpoint_url = app.config.get('MEDIA_ENDPOINT_URL') or f"https://{region}.digitaloceanspaces.com"
    if not app.config.get('MEDIA_PUBLIC_BASE_URL'):
        app.config['MEDIA_PUBLIC_BASE_URL'] = f"https://{space_name}.{region}.digitaloceanspaces.com"
    app.config['MEDIA_PUBLIC_BASE_URL'] = app.config['MEDIA_PUBLIC_BASE_URL'].rstrip('/')

    client = boto3.client(
        's3',
        region_name=region,
        endpoint_url=endpoint_url,
        aws_access_key_id=app.config.get('DO_SPACES_KEY'),
        aws_secret_access_key=app.config.get('DO_SPACES_SECRET'),
    )
    app.extensions['reelfolio_storage'] = client
    return client


def _client():
    return current_app.extensions['reelfolio_storage']


def classify_media(mimetype):
    """Map a MIME type to (kind, folder).

    image/* goes to the image folder, video/* to the video folder and
    everything else to the generic folder as a raw asset.
    """
    mimetype = (mimetype or '').lower()
    config = current_app.config
    if mimetype.startswith('image/'):
        return 'image', config.get('MEDIA_IMAGE_FOLDER', 'project-thumbnails')
    if mimetype.startswith('video/'):
        return 'video', config.get('MEDIA_VIDEO_FOLDER', 'project-videos')
    return 'raw', config.get('MEDIA_OTHER_FOLDER', 'project-files')


def _file_extension(filename, mimetype):
    if filename and '.' in filename:
        return filename.rsplit('.', 1)[-1].lower()
    # No extension on the upload, fall back to the MIME subtype
    if mimetype and '/' in mimetype:
        return mimetype.split('/', 1)[1].lower()
    return ''


def build_object_key(kind, folder, ext):
    name = uuid.uuid4().hex
    suffix = f".{ext}" if ext else ''
    return f"{kind}/upload/v{int(time.time())}/{folder.strip('/')}/{name}{suffix}"


def upload_file(file_bytes, filename, mimetype):
    """Upload a file to the media bucket.

    Args:
        file_bytes: Raw bytes of the file.
        filename: Original filename, used for the format check.
        mimetype: Declared content type, picks the destination folder.

    Returns:
        The public https URL of the stored object.
    """
    allowed = current_app.config.get('MEDIA_ALLOWED_FORMATS') or []
    ext = _file_extension(filename, mimetype)
    if allowed and ext not in allowed:
        raise UploadError(f"File type '{ext or 'unknown'}' is not allowed. Allowed: {', '.join(allowed)}")

    if not file_bytes:
        raise UploadError(f"Uploaded file '{filename}' is empty")

    kind, folder = classify_media(mimetype)
    object_key = build_object_key(kind, folder, ext)

    try:
        _client().put_object(
            Bucket=current_app.config['DO_SPACES_NAME'],
            Key=object_key,
            Body=file_bytes,
            ACL='public-read',
            ContentType=mimetype or 'application/octet-stream',
        )
    except (BotoCoreError, ClientError) as e:
        LoggingService.error('storage', f"Upload of {filename} failed", {
            'error': str(e),
            'kind': kind,
            'folder': folder,
        })
        raise UploadError(f"Failed to upload {filename}") from e

    return f"{current_app.config['MEDIA_PUBLIC_BASE_URL']}/{object_key}"


def upload_storage_file(storage):
    """Upload a werkzeug FileStorage from a multipart request."""
    return upload_file(storage.read(), storage.filename, storage.mimetype)


def parse_media_url(file_url):
    """Recover (media_id, kind) from a stored media URL.

    The media id is every path segment after the one following `upload`,
    with the file extension dropped. Returns None for URLs without an
    `upload` segment, which are treated as externally hosted.
    """
    if not file_url:
        return None

    segments = [s for s in urlparse(file_url).path.split('/') if s]
    if 'upload' not in segments:
        return None

    rest = segments[segments.index('upload') + 2:]
    if not rest:
        return None

    rest[-1] = posixpath.splitext(rest[-1])[0]
    if not rest[-1]:
        return None
    media_id = '/'.join(rest)

    video_folder = current_app.config.get('MEDIA_VIDEO_FOLDER', 'project-videos').strip('/')
    if media_id == video_folder or media_id.startswith(video_folder + '/'):
        return media_id, 'video'
    return media_id, 'image'


def is_store_hosted(file_url):
    return parse_media_url(file_url) is not None


def _object_key(file_url):
    """Object key is the URL path below the public base URL"""
    path = urlparse(file_url).path.lstrip('/')
    base_path = urlparse(current_app.config.get('MEDIA_PUBLIC_BASE_URL', '')).path.strip('/')
    if base_path and path.startswith(base_path + '/'):
        path = path[len(base_path) + 1:]
    return path


def delete_file(file_url):
    """Delete a stored object by its URL.

    Returns False for externally hosted URLs (nothing to delete), True once
    the bucket accepted the delete. Provider exceptions propagate.
    """
    parsed = parse_media_url(file_url)
    if parsed is None:
        return False

    media_id, kind = parsed
    _client().delete_object(
        Bucket=current_app.config['DO_SPACES_NAME'],
        Key=_object_key(file_url),
    )
    LoggingService.debug('storage', 'Delete issued', {'media_id': media_id, 'kind': kind})
    return True


def _cleanup_media(file_urls):
    """Best-effort deletion; every failure is logged and swallowed."""
    for file_url in file_urls:
        try:
            if not delete_file(file_url):
                raise MediaCleanupError(f"Nothing to delete for {file_url}")
            LoggingService.info('storage', 'Deleted superseded media', {'url': file_url})
        except Exception as e:
            cleanup_error = e if isinstance(e, MediaCleanupError) else MediaCleanupError(str(e))
            LoggingService.error('storage', f"MediaCleanupError: {cleanup_error.message}", {
                'url': file_url,
                'error_type': type(e).__name__,
            })


def schedule_media_cleanup(file_urls):
    """Fire-and-forget deletion of store-hosted media.

    External links are skipped. Returns the list of URLs that were queued.
    """
    queued = [url for url in dict.fromkeys(file_urls or []) if is_store_hosted(url)]
    if queued:
        run_in_background(_cleanup_media, queued)
    return queued
