"""
Project Store
=============

Access helpers for the `projects` collection. Routes never touch pymongo
directly; driver failures surface here as StoreError.
"""

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from ...core.database import Database
from ...core.errors import StoreError, NotFoundError, ConflictError
from ...core.logging_service import LoggingService

PROJECT_FIELDS = ('title', 'year', 'role', 'synopsis', 'videoUrl', 'thumbnailUrl')

# Year descending, then insertion order (ObjectIds increase over time)
PROJECT_SORT = [('year', DESCENDING), ('_id', ASCENDING)]


def get_collection():
    return Database.connect().projects


def _to_object_id(project_id):
    if not isinstance(project_id, str) or not ObjectId.is_valid(project_id):
        return None
    return ObjectId(project_id)


def _doc_to_dict(doc):
    """Convert a stored document to the JSON shape clients see"""
    d = {'_id': str(doc['_id'])}
    for field in PROJECT_FIELDS:
        d[field] = doc.get(field)
    d['version'] = doc.get('version', 0)
    return d


def _store_error(action, error):
    LoggingService.log_error_with_traceback('projects', error, {'action': action})
    return StoreError()


def get_all_projects_db():
    """Every project, newest year first"""
    try:
        return [_doc_to_dict(doc) for doc in get_collection().find().sort(PROJECT_SORT)]
    except PyMongoError as e:
        raise _store_error('list', e) from e


def get_project_db(project_id):
    """Single project by id, or None"""
    oid = _to_object_id(project_id)
    if oid is None:
        return None
    try:
        doc = get_collection().find_one({'_id': oid})
    except PyMongoError as e:
        raise _store_error('get', e) from e
    return _doc_to_dict(doc) if doc else None


def create_project_db(fields):
    """Insert a new project, returns it with its assigned id"""
    doc = {field: fields[field] for field in PROJECT_FIELDS}
    doc['version'] = 0
    try:
        result = get_collection().insert_one(doc)
    except PyMongoError as e:
        raise _store_error('create', e) from e
    doc['_id'] = result.inserted_id
    return _doc_to_dict(doc)


def update_project_db(project_id, changes, expected_version=None):
    """Merge changes into an existing project.

    When expected_version is given the write only applies to that version
    of the document, otherwise the last write wins.
    """
    oid = _to_object_id(project_id)
    if oid is None:
        raise NotFoundError()

    query = {'_id': oid}
    if expected_version is not None:
        query['version'] = expected_version

    update = {'$inc': {'version': 1}}
    values = {k: v for k, v in changes.items() if k in PROJECT_FIELDS}
    if values:
        update['$set'] = values

    try:
        doc = get_collection().find_one_and_update(
            query, update, return_document=ReturnDocument.AFTER
        )
        if doc is None and expected_version is not None:
            if get_collection().find_one({'_id': oid}, {'_id': 1}) is not None:
                raise ConflictError()
    except PyMongoError as e:
        raise _store_error('update', e) from e

    if doc is None:
        raise NotFoundError()
    return _doc_to_dict(doc)


def delete_project_db(project_id):
    """Delete a project, returns the removed document"""
    oid = _to_object_id(project_id)
    if oid is None:
        raise NotFoundError()
    try:
        doc = get_collection().find_one_and_delete({'_id': oid})
    except PyMongoError as e:
        raise _store_error('delete', e) from e
    if doc is None:
        raise NotFoundError()
    return _doc_to_dict(doc)
