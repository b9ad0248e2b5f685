"""
Background Tasks
================

Fire-and-forget work (media cleanup) that must never hold up or fail a
request. Tasks run on a small shared thread pool inside an app context.
"""

from concurrent.futures import ThreadPoolExecutor
from flask import current_app

_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix='reelfolio-bg')


def _run(app, func, args, kwargs):
    with app.app_context():
        try:
            func(*args, **kwargs)
        except Exception as e:
            from .logging_service import LoggingService
            LoggingService.log_error_with_traceback('tasks', e, {'task': getattr(func, '__name__', repr(func))})


def run_in_background(func, *args, **kwargs):
    """Schedule func(*args) without waiting for it.

    Returns the Future, or None when BACKGROUND_TASKS_SYNC ran it inline.
    """
    app = current_app._get_current_object()
    if app.config.get('BACKGROUND_TASKS_SYNC'):
        _run(app, func, args, kwargs)
        return None
    return _executor.submit(_run, app, func, args, kwargs)
