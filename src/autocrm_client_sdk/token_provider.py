from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol, runtime_checkable

import requests

from .auth_store import AuthStore
from .exceptions import TokenRefreshError
from .models import SessionUser, StoredSession

logger = logging.getLogger(__name__)

SIGN_IN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"
REFRESH_URL = "https://securetoken.googleapis.com/v1/token"
EXPIRY_SKEW_SECONDS = 60.0


@runtime_checkable
class SessionProvider(Protocol):
    def has_session(self) -> bool: ...

    def get_token(self, force_refresh: bool = False) -> str | None: ...

    def invalidate(self) -> None: ...


@dataclass
class StaticTokenProvider:
    """Fixed bearer token; a forced refresh hands back the same value."""

    token: str | None

    def has_session(self) -> bool:
        return bool(self.token)

    def get_token(self, force_refresh: bool = False) -> str | None:
        return self.token

    def invalidate(self) -> None:
        self.token = None


@dataclass(frozen=True)
class SignInResult:
    user_id: str
    email: str | None
    display_name: str | None
    id_token: str


@dataclass
class FirebaseTokenProvider:
    """Identity-provider session backed by the Firebase Auth REST API."""

    api_key: str
    store: AuthStore = field(default_factory=AuthStore)
    http: requests.Session | None = None
    timeout_seconds: float = 30.0
    clock: Callable[[], float] = time.time
    env_name: str | None = None
    _session: StoredSession | None = None

    def __post_init__(self) -> None:
        if self.http is None:
            self.http = requests.Session()
        self._session = self.store.load()

    def has_session(self) -> bool:
        return self._session is not None

    @property
    def cached_user(self) -> SessionUser | None:
        return self._session.auth_user if self._session else None

    def sign_in(self, email: str, password: str) -> SignInResult:
        payload = self._post(
            SIGN_IN_URL,
            json={"email": email, "password": password, "returnSecureToken": True},
            failure="sign_in",
        )
        self._session = StoredSession(
            auth_token=payload["idToken"],
            refresh_token=payload.get("refreshToken"),
            expires_at=self._expiry(payload.get("expiresIn")),
            auth_user=SessionUser(
                id=payload.get("localId", ""),
                email=payload.get("email"),
                name=payload.get("displayName") or None,
            ),
            env_name=self.env_name,
        )
        self.store.save(self._session)
        logger.info("identity_sign_in_success")
        return SignInResult(
            user_id=payload.get("localId", ""),
            email=payload.get("email"),
            display_name=payload.get("displayName") or None,
            id_token=payload["idToken"],
        )

    def remember_user(self, user: SessionUser) -> None:
        if self._session is None:
            return
        self._session = self._session.model_copy(update={"auth_user": user})
        self.store.save(self._session)

    def get_token(self, force_refresh: bool = False) -> str | None:
        if self._session is None:
            return None
        if force_refresh or self._is_expiring():
            self._refresh()
        return self._session.auth_token if self._session else None

    def invalidate(self) -> None:
        self._session = None

    def sign_out(self) -> None:
        self.invalidate()
        self.store.clear()

    def _is_expiring(self) -> bool:
        if self._session is None or self._session.expires_at is None:
            return False
        return self.clock() >= self._session.expires_at - EXPIRY_SKEW_SECONDS

    def _refresh(self) -> None:
        if self._session is None or not self._session.refresh_token:
            raise TokenRefreshError("No refresh token available for the current session")
        logger.info("identity_token_refresh_attempt")
        payload = self._post(
            REFRESH_URL,
            data={"grant_type": "refresh_token", "refresh_token": self._session.refresh_token},
            failure="refresh",
        )
        self._session = self._session.model_copy(
            update={
                "auth_token": payload["id_token"],
                "refresh_token": payload.get("refresh_token") or self._session.refresh_token,
                "expires_at": self._expiry(payload.get("expires_in")),
            }
        )
        self.store.save(self._session)

    def _expiry(self, expires_in: str | int | None) -> float | None:
        if expires_in is None:
            return None
        return self.clock() + float(expires_in)

    def _post(self, url: str, *, failure: str, json: dict | None = None, data: dict | None = None) -> dict:
        if self.http is None:
            raise RuntimeError("HTTP session not initialized")
        try:
            response = self.http.post(
                url,
                params={"key": self.api_key},
                json=json,
                data=data,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise TokenRefreshError(f"Identity provider unreachable during {failure}") from exc
        if not response.ok:
            message = _identity_error_message(response)
            logger.warning("identity_request_failed", extra={"operation": failure, "status": response.status_code})
            raise TokenRefreshError(message)
        return response.json()


def _identity_error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"Identity provider returned HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str):
        return error
    return f"Identity provider returned HTTP {response.status_code}"
