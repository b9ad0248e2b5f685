"""
Ops Routes
==========

Health check reporting document store reachability.
"""

import time
from datetime import datetime

from flask import jsonify

from . import ops_health_bp
from ...core.database import Database

_STARTED_AT = time.time()


def _build_health_response():
    """Build the health check response dict."""
    ok, error = Database.connect().ping()
    status = 'ok' if ok else 'critical'

    database = {'status': 'ok' if ok else 'unreachable'}
    if error:
        database['error'] = 'ping failed'

    result = {
        'status': status,
        'timestamp': datetime.now().isoformat(),
        'checks': {
            'database': database,
            'uptime': {'seconds': int(time.time() - _STARTED_AT)},
        },
    }
    return result, status


@ops_health_bp.route('/')
@ops_health_bp.route('')
def health_check():
    """Public health endpoint for uptime monitors."""
    data, status = _build_health_response()
    code = 503 if status == 'critical' else 200
    return jsonify(data), code
