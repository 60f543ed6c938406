from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Union
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .auth_retry import AuthRetryPolicy, RetryState
from .auth_store import AuthStore
from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import NETWORK_ERROR_MESSAGE, TokenRefreshError, TransportError
from .models import BinaryPayload
from .token_provider import SessionProvider

logger = logging.getLogger(__name__)

JsonPayload = Union[dict[str, Any], list[Any], str, None]


def is_accepted_status(status_code: int) -> bool:
    return 200 <= status_code < 300 or status_code == 304


def clean_params(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Drop unset values and render booleans the way the backend parses them."""
    if not params:
        return None
    cleaned: dict[str, Any] = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            cleaned[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            cleaned[key] = ",".join(str(item) for item in value)
        else:
            cleaned[key] = value
    return cleaned or None


@dataclass
class HttpClient:
    config: ClientConfig
    token_provider: SessionProvider | None = None
    auth_store: AuthStore | None = None
    session: requests.Session | None = None
    retry_policy: AuthRetryPolicy = field(init=False)

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)
        self.retry_policy = AuthRetryPolicy(self.token_provider, self.auth_store)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def _diagnostic(self, event: str, **extra: Any) -> None:
        if self.config.diagnostics_enabled:
            logger.debug(event, extra=extra)

    def _current_token(self) -> str | None:
        if self.token_provider is None or not self.token_provider.has_session():
            return None
        try:
            return self.token_provider.get_token()
        except TokenRefreshError:
            # the 401 replay path owns session teardown
            self._diagnostic("api_token_unavailable")
            return None

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> JsonPayload:
        """Send a JSON request and return the decoded body untouched.

        ``None`` is returned for 304 and empty bodies. Envelope checks are
        left to the caller.
        """
        response = self._dispatch(
            method,
            path,
            headers={"Accept": "application/json", **(headers or {})},
            json_body=json_body,
            params=params,
            data=data,
            files=files,
        )
        if response.status_code == 304 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def request_binary(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> BinaryPayload:
        response = self._dispatch(
            method,
            path,
            headers={"Accept": "*/*", **(headers or {})},
            params=params,
        )
        return BinaryPayload.from_headers(response.content, response.headers)

    def _dispatch(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str],
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        normalized_method = method.upper()
        url = self._build_url(path)
        query = clean_params(params)

        token = self._current_token()
        if token is None:
            self._diagnostic("api_request_without_session", method=normalized_method, path=path)

        state = RetryState()
        while True:
            request_headers = dict(headers)
            if token:
                request_headers["Authorization"] = f"Bearer {token}"
            self._diagnostic("api_request", method=normalized_method, path=path, attempt=state.attempt)
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    params=query,
                    data=data,
                    files=files,
                    timeout=self.config.timeout_seconds,
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                self._diagnostic("api_network_error", method=normalized_method, path=path, error=type(exc).__name__)
                raise TransportError(
                    code="NETWORK_ERROR",
                    message=NETWORK_ERROR_MESSAGE,
                    details={"type": type(exc).__name__},
                    status_code=0,
                    raw_payload=None,
                ) from exc

            self._diagnostic("api_response", method=normalized_method, path=path, status=response.status_code)
            if is_accepted_status(response.status_code):
                return response
            if self.retry_policy.should_retry(response.status_code, state):
                state = state.next()
                token = self.retry_policy.refreshed_token()
                continue
            raise map_error(response.status_code, _error_payload(response))


def _error_payload(response: requests.Response) -> object:
    if not response.content:
        return None
    try:
        return response.json()
    except json.JSONDecodeError:
        return response.text
