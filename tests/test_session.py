from __future__ import annotations

import pytest
import responses

from autocrm_client_sdk.auth_store import AuthStore
from autocrm_client_sdk.config import ClientConfig
from autocrm_client_sdk.exceptions import NotFoundError
from autocrm_client_sdk.models import SessionUser, StoredSession
from autocrm_client_sdk.session import ApiSession
from autocrm_client_sdk.token_provider import SIGN_IN_URL, FirebaseTokenProvider, StaticTokenProvider

BASE_URL = "https://api.example.com/api"


def _config(firebase_api_key: str | None = "key-1") -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL, firebase_api_key=firebase_api_key)


def _sign_in_response() -> None:
    responses.add(
        responses.POST,
        SIGN_IN_URL,
        json={"idToken": "id-1", "refreshToken": "r-1", "expiresIn": "3600", "localId": "u-1"},
        status=200,
    )


@responses.activate
def test_sign_in_loads_profile(tmp_path) -> None:
    _sign_in_response()
    responses.add(
        responses.GET,
        f"{BASE_URL}/auth/profile",
        json={"success": True, "data": {"user": {"firebaseUid": "u-1", "name": "Ravi", "role": {"name": "TEAM_LEAD"}}}},
        status=200,
    )
    store = AuthStore(base_dir=tmp_path)
    session = ApiSession(_config(), auth_store=store)

    user = session.sign_in("ravi@example.com", "secret")

    assert isinstance(session.token_provider, FirebaseTokenProvider)
    assert user == SessionUser(id="u-1", name="Ravi", role="TEAM_LEAD")
    assert responses.calls[1].request.headers["Authorization"] == "Bearer id-1"
    assert store.load().auth_user.role == "TEAM_LEAD"
    assert session.remarks_service().actor.id == "u-1"


@responses.activate
def test_failed_profile_fetch_signs_out(tmp_path) -> None:
    _sign_in_response()
    responses.add(responses.GET, f"{BASE_URL}/auth/profile", json={"message": "User not found"}, status=404)
    store = AuthStore(base_dir=tmp_path)
    session = ApiSession(_config(), auth_store=store)

    with pytest.raises(NotFoundError):
        session.sign_in("ghost@example.com", "secret")

    assert session.current_user is None
    assert store.load() is None


def test_stored_token_is_reused_without_identity_key(tmp_path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(StoredSession(auth_token="saved", auth_user=SessionUser(id="u-9", role="ADMIN")))

    session = ApiSession(_config(firebase_api_key=None), auth_store=store)

    assert isinstance(session.token_provider, StaticTokenProvider)
    assert session.token_provider.get_token() == "saved"
    assert session.current_user.id == "u-9"
    with pytest.raises(RuntimeError):
        session.sign_in("a@b.c", "secret")

    session.sign_out()
    assert session.current_user is None
    assert store.load() is None


def test_remarks_service_requires_user(tmp_path) -> None:
    session = ApiSession(_config(firebase_api_key=None), auth_store=AuthStore(base_dir=tmp_path))

    with pytest.raises(RuntimeError):
        session.remarks_service()
    assert session.bookings_client().http is session.http
