from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SDK_SRC = BASE_DIR / "src"

sys.path.insert(0, str(SDK_SRC))

from autocrm_client_sdk.auth_store import AuthStore  # noqa: E402
from autocrm_client_sdk.config import ClientConfig  # noqa: E402
from autocrm_client_sdk.exceptions import TokenRefreshError  # noqa: E402
from autocrm_client_sdk.http_client import HttpClient  # noqa: E402

BASE_URL = "https://api.example.com/api"


@dataclass
class FakeTokenProvider:
    tokens: list[str] = field(default_factory=lambda: ["token-1", "token-2"])
    session: bool = True
    fail_refresh: bool = False
    refresh_calls: int = 0
    invalidated: bool = False

    def has_session(self) -> bool:
        return self.session

    def get_token(self, force_refresh: bool = False) -> str | None:
        if force_refresh:
            self.refresh_calls += 1
            if self.fail_refresh:
                raise TokenRefreshError("refresh rejected")
            if len(self.tokens) > 1:
                self.tokens.pop(0)
        return self.tokens[0] if self.session else None

    def invalidate(self) -> None:
        self.session = False
        self.invalidated = True


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL)


@pytest.fixture
def auth_store(tmp_path: Path) -> AuthStore:
    return AuthStore(base_dir=tmp_path)


@pytest.fixture
def token_provider() -> FakeTokenProvider:
    return FakeTokenProvider()


@pytest.fixture
def http(config: ClientConfig, token_provider: FakeTokenProvider, auth_store: AuthStore) -> HttpClient:
    return HttpClient(config, token_provider=token_provider, auth_store=auth_store)
