from __future__ import annotations

from typing import Any, Mapping

from ..models import (
    CreatedUser,
    CreateUserRequest,
    Page,
    PasswordReset,
    UpdateUserRequest,
    User,
    UserListParams,
)
from .base import BaseClient, coerce_model


class UsersClient(BaseClient):
    def list_users(self, params: UserListParams | Mapping[str, Any] | None = None) -> Page[User]:
        return self._page("/auth/users", "users", User, params=params)

    def get_user(self, firebase_uid: str) -> User:
        return self._entity("GET", f"/auth/users/{firebase_uid}", User, entity_key="user")

    def create_user(self, request: CreateUserRequest | Mapping[str, Any]) -> CreatedUser:
        payload = coerce_model(request, CreateUserRequest)
        data = self._data("POST", "/auth/users", json_body=payload.to_wire())
        return CreatedUser.model_validate(data)

    def update_user(self, firebase_uid: str, request: UpdateUserRequest | Mapping[str, Any]) -> User:
        payload = coerce_model(request, UpdateUserRequest)
        return self._entity(
            "PUT",
            f"/auth/users/{firebase_uid}",
            User,
            entity_key="user",
            json_body=payload.to_wire(),
        )

    def delete_user(self, firebase_uid: str) -> None:
        self._data("DELETE", f"/auth/users/{firebase_uid}")

    def reset_password(self, firebase_uid: str, new_password: str) -> PasswordReset:
        data = self._data(
            "POST",
            f"/auth/users/{firebase_uid}/reset-password",
            json_body={"newPassword": new_password},
        )
        return PasswordReset.model_validate(data)

    def assign_manager(self, firebase_uid: str, manager_id: str) -> User:
        return self._entity(
            "POST",
            f"/auth/users/{firebase_uid}/assign-manager",
            User,
            entity_key="user",
            json_body={"managerId": manager_id},
        )
