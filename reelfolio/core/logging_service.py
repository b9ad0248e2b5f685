"""
Centralized logging service for the Reelfolio application.
Provides structured logging stored in the document store, with the Flask
logger as a fallback when the store cannot be reached.
"""

import json
import logging
import traceback
from datetime import datetime, timedelta
from flask import request, has_request_context, has_app_context, current_app

_fallback = logging.getLogger('reelfolio')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_collection():
        """Return the app_logs collection, or None outside an app"""
        if not has_app_context():
            return None
        db = current_app.extensions.get('reelfolio_db')
        if db is None or db.db is None:
            return None
        return db.logs

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        return ip_address, request.headers.get('User-Agent', ''), request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the app_logs collection

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (projects, admin, storage, etc.)
            message (str): Main log message
            details (str/dict): Additional details
            user_id (str): Optional user identifier
        """
        level = level.upper()
        ip_address, user_agent, request_path = LoggingService._get_request_context()
        entry = {
            'timestamp': datetime.now().isoformat(),
            'level': level,
            'source': source,
            'message': message,
            'details': details,
            'ip_address': ip_address,
            'user_agent': user_agent,
            'request_path': request_path,
            'user_id': user_id,
        }

        try:
            collection = LoggingService._get_collection()
            if collection is None:
                raise RuntimeError('log store unavailable')
            collection.insert_one(entry)
        except Exception as e:
            # Fallback to the process logger if the store fails
            if isinstance(details, dict):
                details = json.dumps(details, indent=2, default=str)
            _fallback.log(getattr(logging, level, logging.INFO), f"[{source}] {message}")
            if details:
                _fallback.log(getattr(logging, level, logging.INFO), f"Details: {details}")
            _fallback.debug(f"Logging service error: {e}")

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log admin actions (login, create, delete, ...)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events"""
        LoggingService.warning('security', message, details)

    @staticmethod
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries, returns the number removed"""
        cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()
        try:
            collection = LoggingService._get_collection()
            if collection is None:
                return 0
            deleted_count = collection.delete_many({'timestamp': {'$lt': cutoff_iso}}).deleted_count
            LoggingService.info('system', f"Cleaned up {deleted_count} old log entries")
            return deleted_count
        except Exception as e:
            LoggingService.error('system', f"Failed to cleanup old logs: {e}")
            return 0


def schedule_log_cleanup():
    """Prune entries older than LOG_RETENTION_DAYS in the background. 0 keeps everything."""
    from .tasks import run_in_background
    days = int(current_app.config.get('LOG_RETENTION_DAYS') or 0)
    if days > 0:
        run_in_background(LoggingService.cleanup_old_logs, days)
