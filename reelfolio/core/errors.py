"""
Error Types
===========

Every error the API reports to a client derives from ReelfolioError and
carries its HTTP status. Handlers are registered by Reelfolio.init_app().
"""

from flask import jsonify


class ReelfolioError(Exception):
    status_code = 500
    message = 'An error occurred'

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'message': self.message}


class ConfigError(ReelfolioError):
    """Required settings are missing at startup"""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"FATAL ERROR: {', '.join(self.missing)} is not defined.")


class ValidationError(ReelfolioError):
    status_code = 400
    message = 'Invalid project data'


class AuthError(ReelfolioError):
    status_code = 401
    message = 'Unauthorized: You must be logged in.'


class NotFoundError(ReelfolioError):
    status_code = 404
    message = 'Project not found'


class ConflictError(ReelfolioError):
    status_code = 409
    message = 'Project was modified by another request, reload and try again'


class StoreError(ReelfolioError):
    # Never carries driver details to the client
    status_code = 500
    message = 'A database error occurred'


class UploadError(ReelfolioError):
    status_code = 400
    message = 'Media upload failed'


class MediaCleanupError(ReelfolioError):
    """Deleting superseded media failed. Logged, never returned to a client."""
    message = 'Media cleanup failed'


def register_error_handlers(app):
    """Render ReelfolioError subclasses and upload size overruns as JSON"""

    @app.errorhandler(ReelfolioError)
    def handle_reelfolio_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(413)
    def handle_too_large(error):
        return jsonify({'message': 'Uploaded file is too large'}), 413
