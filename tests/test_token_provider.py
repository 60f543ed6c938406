from __future__ import annotations

import pytest
import requests
import responses

from autocrm_client_sdk.auth_store import AuthStore
from autocrm_client_sdk.exceptions import TokenRefreshError
from autocrm_client_sdk.models import SessionUser, StoredSession
from autocrm_client_sdk.token_provider import (
    REFRESH_URL,
    SIGN_IN_URL,
    FirebaseTokenProvider,
    SessionProvider,
    StaticTokenProvider,
)


class _Clock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _provider(tmp_path, clock=None) -> FirebaseTokenProvider:
    return FirebaseTokenProvider(api_key="key-1", store=AuthStore(base_dir=tmp_path), clock=clock or _Clock())


def test_static_provider() -> None:
    provider = StaticTokenProvider("abc")
    assert isinstance(provider, SessionProvider)
    assert provider.get_token(force_refresh=True) == "abc"
    provider.invalidate()
    assert provider.has_session() is False


@responses.activate
def test_sign_in_persists_session(tmp_path) -> None:
    responses.add(
        responses.POST,
        SIGN_IN_URL,
        json={"idToken": "id-1", "refreshToken": "r-1", "expiresIn": "3600", "localId": "uid-1", "email": "a@b.c"},
        status=200,
    )
    provider = _provider(tmp_path)

    result = provider.sign_in("a@b.c", "secret")

    assert result.id_token == "id-1"
    assert provider.has_session() is True
    assert "key=key-1" in responses.calls[0].request.url
    stored = AuthStore(base_dir=tmp_path).load()
    assert stored.auth_token == "id-1"
    assert stored.expires_at == 4600.0
    assert stored.auth_user.id == "uid-1"


@responses.activate
def test_sign_in_rejection_raises(tmp_path) -> None:
    responses.add(responses.POST, SIGN_IN_URL, json={"error": {"message": "INVALID_PASSWORD"}}, status=400)

    with pytest.raises(TokenRefreshError, match="INVALID_PASSWORD"):
        _provider(tmp_path).sign_in("a@b.c", "wrong")


@responses.activate
def test_forced_refresh_rotates_tokens(tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(StoredSession(auth_token="old", refresh_token="r-1", expires_at=99999.0))
    responses.add(
        responses.POST,
        REFRESH_URL,
        json={"id_token": "new", "refresh_token": "r-2", "expires_in": "3600"},
        status=200,
    )
    provider = _provider(tmp_path)

    assert provider.get_token() == "old"
    assert provider.get_token(force_refresh=True) == "new"
    assert "grant_type=refresh_token" in responses.calls[0].request.body
    assert store.load().refresh_token == "r-2"


@responses.activate
def test_token_near_expiry_is_refreshed(tmp_path) -> None:
    AuthStore(base_dir=tmp_path).save(StoredSession(auth_token="old", refresh_token="r-1", expires_at=1030.0))
    responses.add(responses.POST, REFRESH_URL, json={"id_token": "new", "expires_in": 3600}, status=200)

    assert _provider(tmp_path).get_token() == "new"


@responses.activate
def test_refresh_failures_raise(tmp_path) -> None:
    AuthStore(base_dir=tmp_path).save(StoredSession(auth_token="old", refresh_token="r-1"))
    responses.add(responses.POST, REFRESH_URL, body=requests.ConnectionError("down"))

    with pytest.raises(TokenRefreshError, match="unreachable"):
        _provider(tmp_path).get_token(force_refresh=True)


def test_refresh_without_refresh_token(tmp_path) -> None:
    AuthStore(base_dir=tmp_path).save(StoredSession(auth_token="old"))

    with pytest.raises(TokenRefreshError):
        _provider(tmp_path).get_token(force_refresh=True)


def test_remember_user_and_sign_out(tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(StoredSession(auth_token="tok"))
    provider = _provider(tmp_path)

    provider.remember_user(SessionUser(id="u-1", role="ADMIN"))
    assert store.load().auth_user.role == "ADMIN"
    assert provider.cached_user.id == "u-1"

    provider.sign_out()
    assert provider.has_session() is False
    assert store.load() is None
