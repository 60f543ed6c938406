from __future__ import annotations

from typing import Any, Mapping

from ..models import FirebaseSyncRequest, FirebaseSyncResponse, RoleName, User
from .base import BaseClient, coerce_model


class AuthClient(BaseClient):
    def profile(self) -> User:
        return self._entity("GET", "/auth/profile", User, entity_key="user")

    def sync(self, request: FirebaseSyncRequest | Mapping[str, Any]) -> FirebaseSyncResponse:
        payload = coerce_model(request, FirebaseSyncRequest)
        data = self._data("POST", "/auth/sync", json_body=payload.to_wire())
        return FirebaseSyncResponse.model_validate(data)

    def update_role(self, uid: str, role_name: RoleName | str) -> User:
        role = role_name.value if isinstance(role_name, RoleName) else role_name
        return self._entity("PUT", f"/auth/users/{uid}/role", User, entity_key="user", json_body={"roleName": role})

    def activate(self, uid: str) -> User:
        return self._entity("PUT", f"/auth/users/{uid}/activate", User, entity_key="user")

    def deactivate(self, uid: str) -> User:
        return self._entity("PUT", f"/auth/users/{uid}/deactivate", User, entity_key="user")
