from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from .auth_store import AuthStore
from .exceptions import (
    REFRESH_FAILED_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
    SessionExpiredError,
    TokenRefreshError,
)
from .token_provider import SessionProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryState:
    """Per-request retry budget. A new value is produced for each replay."""

    attempt: int = 0
    max_attempts: int = 1

    @property
    def can_retry(self) -> bool:
        return self.attempt < self.max_attempts

    def next(self) -> "RetryState":
        return replace(self, attempt=self.attempt + 1)


@dataclass
class AuthRetryPolicy:
    token_provider: SessionProvider | None = None
    auth_store: AuthStore | None = None

    def should_retry(self, status_code: int, state: RetryState) -> bool:
        return status_code == 401 and state.can_retry

    def refreshed_token(self) -> str:
        """Force a token refresh for a replay, or end the session.

        Raises :class:`SessionExpiredError` when there is no session to
        refresh or the identity provider refuses; in both cases the
        persisted session is cleared first.
        """
        if self.token_provider is None or not self.token_provider.has_session():
            logger.info("auth_refresh_no_session")
            self.clear_session()
            raise SessionExpiredError(
                code="SESSION_EXPIRED",
                message=SESSION_EXPIRED_MESSAGE,
                status_code=401,
            )
        logger.info("auth_refresh_attempt")
        try:
            token = self.token_provider.get_token(force_refresh=True)
        except TokenRefreshError as exc:
            logger.warning("auth_refresh_failed", extra={"reason": str(exc)})
            self.clear_session()
            raise SessionExpiredError(
                code="AUTH_REFRESH_FAILED",
                message=REFRESH_FAILED_MESSAGE,
                status_code=401,
            ) from exc
        if not token:
            self.clear_session()
            raise SessionExpiredError(
                code="AUTH_REFRESH_FAILED",
                message=REFRESH_FAILED_MESSAGE,
                status_code=401,
            )
        return token

    def clear_session(self) -> None:
        if self.token_provider is not None:
            self.token_provider.invalidate()
        if self.auth_store is not None:
            self.auth_store.clear()
