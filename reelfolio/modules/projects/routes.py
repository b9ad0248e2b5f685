"""
Projects API Routes
===================

Public listing plus admin-only create/update/delete of portfolio projects.

Media can arrive as URLs in the body or as `thumbnail` / `video` file parts
of a multipart request, depending on MEDIA_INPUT_POLICY. Store-hosted media
that a write supersedes is deleted in the background after the write.
"""

from flask import current_app, request, jsonify

from . import projects_bp
from .database import (
    get_all_projects_db, get_project_db, create_project_db,
    update_project_db, delete_project_db,
)
from ..admin import admin_required
from ...core.config import MediaInputPolicy
from ...core.errors import ReelfolioError, ValidationError, NotFoundError, UploadError
from ...core.logging_service import LoggingService
from ...core.storage import upload_storage_file, schedule_media_cleanup

TEXT_FIELDS = (
    ('title', 'Title'),
    ('role', 'Role'),
    ('synopsis', 'Synopsis'),
)

# file part name -> project field
MEDIA_SLOTS = {
    'thumbnail': 'thumbnailUrl',
    'video': 'videoUrl',
}

MEDIA_LABELS = {
    'thumbnailUrl': 'Thumbnail',
    'videoUrl': 'Video',
}

# Largest integers a BSON document can hold
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# ===== Request parsing =====

def _request_data():
    """Body fields from either a JSON or a form/multipart request"""
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError('Request body must be a JSON object')
        return data
    return request.form.to_dict()


def _media_files():
    """Uploaded files keyed by slot, ignoring empty file inputs"""
    files = {}
    for slot in MEDIA_SLOTS:
        storage = request.files.get(slot)
        if storage is not None and storage.filename:
            files[slot] = storage
    return files


def _parse_int(value, message):
    """Integer from a JSON number or numeric string, within the BSON int64 range"""
    if isinstance(value, bool):
        raise ValidationError(message)
    number = None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            pass
    if number is None or not INT64_MIN <= number <= INT64_MAX:
        raise ValidationError(message)
    return number


def _clean_text(value, label):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{label} is required')
    return value.strip()


def _parse_fields(data, partial, covered_media=()):
    """Validate body fields.

    partial=False requires every field (media fields not already covered
    by an uploaded file). partial=True validates only what was supplied.
    """
    fields = {}

    for name, label in TEXT_FIELDS:
        if name in data or not partial:
            fields[name] = _clean_text(data.get(name), label)

    if 'year' in data or not partial:
        year = data.get('year')
        if year is None or (isinstance(year, str) and not year.strip()):
            raise ValidationError('Year is required')
        fields['year'] = _parse_int(year, 'Year must be a number')

    for name, label in MEDIA_LABELS.items():
        if name in covered_media:
            continue
        if name in data or not partial:
            value = data.get(name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f'{label} URL or {label.lower()} file is required')
            fields[name] = value.strip()

    return fields


def _parse_version(data):
    version = data.get('version')
    if version is None or version == '':
        return None
    return _parse_int(version, 'Version must be a number')


def _check_media_policy(files, creating):
    policy = current_app.config.get('MEDIA_INPUT_POLICY') or MediaInputPolicy.EITHER

    if policy == MediaInputPolicy.URLS_REQUIRED and files:
        raise ValidationError('File uploads are disabled, provide videoUrl and thumbnailUrl')

    if policy == MediaInputPolicy.FILES_REQUIRED and creating and set(files) != set(MEDIA_SLOTS):
        raise ValidationError('Please provide both a thumbnail and a video for new projects.')

    return policy


def _upload_media(files):
    """Upload every file, returns {field: url}.

    If one upload fails the ones already stored are cleaned up.
    """
    uploaded = {}
    try:
        for slot, storage in files.items():
            uploaded[MEDIA_SLOTS[slot]] = upload_storage_file(storage)
    except UploadError:
        schedule_media_cleanup(list(uploaded.values()))
        raise
    return uploaded


# ===== Routes =====

@projects_bp.route('', methods=['GET'])
def list_projects():
    """All projects, year descending - public"""
    try:
        return jsonify(get_all_projects_db())
    except ReelfolioError:
        raise
    except Exception as e:
        LoggingService.log_error_with_traceback('projects', e)
        return jsonify({'message': 'Error fetching projects'}), 500


@projects_bp.route('', methods=['POST'])
@admin_required
def create_project():
    """Create new project"""
    data = _request_data()
    files = _media_files()
    policy = _check_media_policy(files, creating=True)

    covered = {MEDIA_SLOTS[slot] for slot in files}
    if policy == MediaInputPolicy.FILES_REQUIRED:
        covered = set(MEDIA_SLOTS.values())
    fields = _parse_fields(data, partial=False, covered_media=covered)

    uploaded = _upload_media(files)
    fields.update(uploaded)

    try:
        project = create_project_db(fields)
    except ReelfolioError:
        schedule_media_cleanup(list(uploaded.values()))
        raise
    except Exception as e:
        schedule_media_cleanup(list(uploaded.values()))
        LoggingService.log_error_with_traceback('projects', e)
        return jsonify({'message': 'Error creating project'}), 500

    LoggingService.log_user_action('projects', 'create', details={'id': project['_id'], 'title': project['title']})
    return jsonify(project), 201


@projects_bp.route('/<project_id>', methods=['PUT'])
@admin_required
def update_project(project_id):
    """Update any subset of a project's fields, optionally replacing media"""
    existing = get_project_db(project_id)
    if existing is None:
        raise NotFoundError()

    data = _request_data()
    files = _media_files()
    _check_media_policy(files, creating=False)

    covered = {MEDIA_SLOTS[slot] for slot in files}
    changes = _parse_fields(data, partial=True, covered_media=covered)
    expected_version = _parse_version(data)

    uploaded = _upload_media(files)
    changes.update(uploaded)

    try:
        project = update_project_db(project_id, changes, expected_version=expected_version)
    except ReelfolioError:
        schedule_media_cleanup(list(uploaded.values()))
        raise
    except Exception as e:
        schedule_media_cleanup(list(uploaded.values()))
        LoggingService.log_error_with_traceback('projects', e)
        return jsonify({'message': 'Error updating project'}), 500

    superseded = [
        existing[field] for field in MEDIA_SLOTS.values()
        if field in changes and existing.get(field) and existing[field] != project.get(field)
    ]
    schedule_media_cleanup(superseded)

    LoggingService.log_user_action('projects', 'update', details={
        'id': project_id,
        'fields': sorted(changes),
    })
    return jsonify(project)


@projects_bp.route('/<project_id>', methods=['DELETE'])
@admin_required
def delete_project(project_id):
    """Delete project and, best-effort, its stored media"""
    try:
        project = delete_project_db(project_id)
    except ReelfolioError:
        raise
    except Exception as e:
        LoggingService.log_error_with_traceback('projects', e)
        return jsonify({'message': 'Error deleting project'}), 500

    schedule_media_cleanup([project.get('videoUrl'), project.get('thumbnailUrl')])

    LoggingService.log_user_action('projects', 'delete', details={'id': project_id, 'title': project.get('title')})
    return jsonify({'message': 'Project deleted successfully'})
