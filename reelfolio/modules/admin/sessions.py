import secrets
import threading
import time
from datetime import timedelta


class AdminSessionStore:
    """
    Server-side registry of unlocked admin sessions.

    The browser only holds an opaque token (inside Flask's signed session
    cookie). A token is live while it is registered here and younger than
    the TTL, measured from creation.
    """

    def __init__(self, ttl=timedelta(hours=24), clock=time.time):
        self.ttl_seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
        self._clock = clock
        self._sessions = {}
        self._lock = threading.Lock()

    def create(self):
        """Register a new admin session and return its token.

        Expired tokens are dropped first so the registry only holds live sessions.
        """
        self.purge_expired()
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[token] = self._clock() + self.ttl_seconds
        return token

    def is_active(self, token):
        if not token:
            return False
        with self._lock:
            expires_at = self._sessions.get(token)
            if expires_at is None:
                return False
            if self._clock() >= expires_at:
                del self._sessions[token]
                return False
            return True

    def destroy(self, token):
        """Forget a token. Unknown tokens are ignored."""
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def purge_expired(self):
        """Drop expired tokens, returns how many were removed"""
        now = self._clock()
        with self._lock:
            expired = [t for t, expires_at in self._sessions.items() if now >= expires_at]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def __len__(self):
        with self._lock:
            return len(self._sessions)
