import hmac
import logging
import secrets
from typing import Any, MutableMapping, Optional, Protocol

from .exceptions import CsrfValidationFailed

logger = logging.getLogger(__name__)

CSRF_FIELD = "csrf_token"


class SessionStore(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...


class MappingSessionStore:
    """Expose a mutable mapping (e.g. `flask.session`) as a SessionStore."""

    def __init__(self, mapping: MutableMapping[str, Any]):
        self.mapping = mapping

    def get(self, key: str) -> Optional[Any]:
        return self.mapping.get(key)

    def set(self, key: str, value: Any) -> None:
        self.mapping[key] = value


class CsrfGuard:
    """Issue and check the per-session token carried in the hidden `csrf_token` input."""

    def __init__(self, store: SessionStore, key: str = CSRF_FIELD):
        self.store = store
        self.key = key

    def token(self) -> str:
        current = self.store.get(self.key)
        if current:
            return current
        current = secrets.token_urlsafe(32)
        self.store.set(self.key, current)
        return current

    def validate(self, submitted: Optional[str]) -> None:
        expected = self.store.get(self.key)
        if not expected or not submitted:
            logger.warning("CSRF token missing (stored=%s, submitted=%s)", bool(expected), bool(submitted))
            raise CsrfValidationFailed("CSRF token missing")
        if not hmac.compare_digest(str(expected), str(submitted)):
            logger.warning("CSRF token mismatch")
            raise CsrfValidationFailed("CSRF token mismatch")
