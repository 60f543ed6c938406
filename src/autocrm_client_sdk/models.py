from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

_FILENAME_RE = re.compile(r'filename\*?=(?:UTF-8\'\')?"?([^";]+)"?', re.IGNORECASE)


class CrmModel(BaseModel):
    """Base for wire shapes: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class RoleName(str, Enum):
    ADMIN = "ADMIN"
    GENERAL_MANAGER = "GENERAL_MANAGER"
    SALES_MANAGER = "SALES_MANAGER"
    TEAM_LEAD = "TEAM_LEAD"
    CUSTOMER_ADVISOR = "CUSTOMER_ADVISOR"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Pagination(CrmModel):
    page: int = 1
    limit: int = 20
    total: int = 0
    total_pages: int = 0


class Page(BaseModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class RoleRef(CrmModel):
    id: str | None = None
    name: str


def coerce_role(value: Any) -> Any:
    # the backend sends either "TEAM_LEAD" or {"id": ..., "name": "TEAM_LEAD"}
    if isinstance(value, (str, Enum)):
        return {"name": value.value if isinstance(value, Enum) else value}
    return value


RoleField = Annotated[Optional[RoleRef], BeforeValidator(coerce_role)]


class UserSummary(CrmModel):
    firebase_uid: str | None = None
    name: str | None = None
    email: str | None = None


class User(CrmModel):
    firebase_uid: str
    email: str | None = None
    name: str | None = None
    role: RoleField = None
    is_active: bool | None = None
    employee_id: str | None = None
    dealership_id: str | None = None
    manager_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role else None


class SessionUser(CrmModel):
    """Minimal user record cached next to the bearer token."""

    id: str
    name: str | None = None
    email: str | None = None
    role: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(id=user.firebase_uid, name=user.name, email=user.email, role=user.role_name)


class StoredSession(BaseModel):
    auth_token: str
    refresh_token: str | None = None
    expires_at: float | None = None
    auth_user: Optional[SessionUser] = None
    env_name: str | None = None


class CreateUserRequest(CrmModel):
    name: str
    email: str
    password: str
    role_name: RoleName


class UpdateUserRequest(CrmModel):
    name: str | None = None
    email: str | None = None
    role_name: RoleName | None = None
    is_active: bool | None = None


class UserListParams(CrmModel):
    page: int | None = None
    limit: int | None = None
    search: str | None = None
    role: RoleName | None = None
    is_active: bool | None = None


class CreatedUser(CrmModel):
    user: User
    temporary_password: str | None = None


class PasswordReset(CrmModel):
    user: User
    new_password: str


class FirebaseSyncRequest(CrmModel):
    firebase_uid: str
    email: str
    name: str
    role_name: str | None = None


class FirebaseSyncResponse(CrmModel):
    user: User
    message: str | None = None
    is_new_user: bool = False


class HealthStatus(CrmModel):
    status: str | None = None
    timestamp: str | None = None


@dataclass(frozen=True)
class BinaryPayload:
    """Raw body of an export / download endpoint; bypasses the JSON envelope."""

    content: bytes
    content_type: str | None = None
    filename: str | None = None

    @classmethod
    def from_headers(cls, content: bytes, headers: Any) -> "BinaryPayload":
        disposition = headers.get("Content-Disposition") or ""
        match = _FILENAME_RE.search(disposition)
        return cls(
            content=content,
            content_type=headers.get("Content-Type"),
            filename=match.group(1) if match else None,
        )

    def save(self, directory: str | Path, filename: str | None = None) -> Path:
        name = filename or self.filename
        if not name:
            raise ValueError("filename is required when the response did not provide one")
        target = Path(directory) / Path(name).name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.content)
        return target
