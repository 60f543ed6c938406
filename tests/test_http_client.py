from __future__ import annotations

import logging

import pytest
import requests
import responses

from autocrm_client_sdk.config import ClientConfig
from autocrm_client_sdk.exceptions import (
    REFRESH_FAILED_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
    AuthError,
    NETWORK_ERROR_MESSAGE,
    NotFoundError,
    ServerError,
    SessionExpiredError,
    TransportError,
)
from autocrm_client_sdk.http_client import HttpClient, clean_params
from autocrm_client_sdk.models import SessionUser, StoredSession

BASE_URL = "https://api.example.com/api"


def _store_session(auth_store) -> None:
    auth_store.save(StoredSession(auth_token="token-1", auth_user=SessionUser(id="u-1", role="TEAM_LEAD")))


@responses.activate
def test_request_sends_bearer_token(http: HttpClient) -> None:
    responses.add(responses.GET, f"{BASE_URL}/health", json={"status": "ok"}, status=200)

    payload = http.request("GET", "/health")

    assert payload == {"status": "ok"}
    assert responses.calls[0].request.headers["Authorization"] == "Bearer token-1"
    assert responses.calls[0].request.headers["Accept"] == "application/json"


@responses.activate
def test_request_without_session_omits_authorization(http: HttpClient, token_provider) -> None:
    token_provider.session = False
    responses.add(responses.GET, f"{BASE_URL}/health", json={"status": "ok"}, status=200)

    http.request("GET", "/health")

    assert "Authorization" not in responses.calls[0].request.headers


@responses.activate
def test_401_is_replayed_once_with_refreshed_token(http: HttpClient, token_provider) -> None:
    responses.add(responses.GET, f"{BASE_URL}/enquiries", json={"message": "expired"}, status=401)
    responses.add(
        responses.GET,
        f"{BASE_URL}/enquiries",
        json={"success": True, "data": {"enquiries": []}},
        status=200,
    )

    payload = http.request("GET", "/enquiries")

    assert payload["success"] is True
    assert len(responses.calls) == 2
    assert responses.calls[0].request.headers["Authorization"] == "Bearer token-1"
    assert responses.calls[1].request.headers["Authorization"] == "Bearer token-2"
    assert token_provider.refresh_calls == 1


@responses.activate
def test_second_401_is_terminal(http: HttpClient, token_provider, auth_store) -> None:
    _store_session(auth_store)
    responses.add(responses.GET, f"{BASE_URL}/enquiries", json={"message": "nope"}, status=401)
    responses.add(responses.GET, f"{BASE_URL}/enquiries", json={"message": "still nope"}, status=401)

    with pytest.raises(AuthError) as excinfo:
        http.request("GET", "/enquiries")

    assert not isinstance(excinfo.value, SessionExpiredError)
    assert excinfo.value.message == "still nope"
    assert len(responses.calls) == 2
    assert token_provider.refresh_calls == 1
    assert auth_store.load() is not None


@responses.activate
def test_refresh_failure_clears_session(http: HttpClient, token_provider, auth_store) -> None:
    _store_session(auth_store)
    token_provider.fail_refresh = True
    responses.add(responses.GET, f"{BASE_URL}/bookings", json={"message": "expired"}, status=401)

    with pytest.raises(SessionExpiredError) as excinfo:
        http.request("GET", "/bookings")

    assert excinfo.value.message == REFRESH_FAILED_MESSAGE
    assert excinfo.value.status_code == 401
    assert len(responses.calls) == 1
    assert token_provider.invalidated is True
    assert auth_store.load() is None


@responses.activate
def test_401_without_session_expires(http: HttpClient, token_provider, auth_store) -> None:
    _store_session(auth_store)
    token_provider.session = False
    responses.add(responses.GET, f"{BASE_URL}/bookings", json={"message": "expired"}, status=401)

    with pytest.raises(SessionExpiredError) as excinfo:
        http.request("GET", "/bookings")

    assert excinfo.value.message == SESSION_EXPIRED_MESSAGE
    assert excinfo.value.code == "SESSION_EXPIRED"
    assert len(responses.calls) == 1
    assert auth_store.load() is None


@responses.activate
def test_non_401_errors_are_not_retried(http: HttpClient, token_provider) -> None:
    responses.add(responses.GET, f"{BASE_URL}/enquiries/e-9", json={"error": "Enquiry not found"}, status=404)

    with pytest.raises(NotFoundError) as excinfo:
        http.request("GET", "/enquiries/e-9")

    assert excinfo.value.message == "Enquiry not found"
    assert len(responses.calls) == 1
    assert token_provider.refresh_calls == 0


@responses.activate
def test_connection_failure_maps_to_transport_error(http: HttpClient) -> None:
    responses.add(responses.GET, f"{BASE_URL}/health", body=requests.ConnectionError("boom"))

    with pytest.raises(TransportError) as excinfo:
        http.request("GET", "/health")

    assert excinfo.value.message == NETWORK_ERROR_MESSAGE
    assert excinfo.value.code == "NETWORK_ERROR"
    assert excinfo.value.status_code == 0
    assert excinfo.value.is_network_error is True


@responses.activate
def test_not_modified_and_empty_bodies_return_none(http: HttpClient) -> None:
    responses.add(responses.GET, f"{BASE_URL}/dashboard/stats", status=304)
    responses.add(responses.DELETE, f"{BASE_URL}/files/f-1", body=b"", status=204)

    assert http.request("GET", "/dashboard/stats") is None
    assert http.request("DELETE", "/files/f-1") is None


@responses.activate
def test_plain_text_error_body_becomes_message(http: HttpClient) -> None:
    responses.add(responses.POST, f"{BASE_URL}/stock", body="Bad Gateway", status=502)

    with pytest.raises(ServerError) as excinfo:
        http.request("POST", "/stock", json_body={})

    assert excinfo.value.message == "Bad Gateway"
    assert excinfo.value.status_code == 502


@responses.activate
def test_request_binary_reads_filename(http: HttpClient) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/bookings/export",
        body=b"id,name\n1,A\n",
        status=200,
        content_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="bookings.csv"'},
    )

    payload = http.request_binary("GET", "/bookings/export", params={"status": "PENDING"})

    assert payload.content == b"id,name\n1,A\n"
    assert payload.filename == "bookings.csv"
    assert payload.content_type.startswith("text/csv")
    assert responses.calls[0].request.headers["Accept"] == "*/*"
    assert "status=PENDING" in responses.calls[0].request.url


def test_clean_params_drops_unset_values() -> None:
    assert clean_params({"a": None, "b": "", "c": True, "d": False, "e": ["x", "y"], "f": 2}) == {
        "c": "true",
        "d": "false",
        "e": "x,y",
        "f": 2,
    }
    assert clean_params({"a": None}) is None
    assert clean_params(None) is None


@pytest.mark.parametrize(("env_name", "logged"), [("development", True), ("production", False)])
@responses.activate
def test_missing_session_is_logged_outside_production(
    caplog: pytest.LogCaptureFixture, token_provider, auth_store, env_name: str, logged: bool
) -> None:
    token_provider.session = False
    client = HttpClient(
        ClientConfig(env_name=env_name, api_base_url=BASE_URL),
        token_provider=token_provider,
        auth_store=auth_store,
    )
    responses.add(responses.GET, f"{BASE_URL}/health", json={"status": "ok"}, status=200)
    caplog.set_level(logging.DEBUG, logger="autocrm_client_sdk.http_client")

    client.request("GET", "/health")

    events = [record.getMessage() for record in caplog.records if record.name == "autocrm_client_sdk.http_client"]
    assert ("api_request_without_session" in events) is logged
    if not logged:
        assert events == []
