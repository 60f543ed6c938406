from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Mapping, TypeVar, Union

from pydantic import BaseModel

from ..envelope import build_page, normalize_collection, normalize_entity, unwrap
from ..http_client import HttpClient
from ..models import BinaryPayload, Page

ModelT = TypeVar("ModelT", bound=BaseModel)
Params = Union[BaseModel, Mapping[str, Any], None]
Upload = Union[str, Path, BinaryIO]


def coerce_model(value: Any, model_type: type[ModelT]) -> ModelT:
    if isinstance(value, model_type):
        return value
    return model_type.model_validate(value)


def to_params(params: Params) -> dict[str, Any] | None:
    if params is None:
        return None
    if isinstance(params, BaseModel):
        return params.model_dump(by_alias=True, exclude_none=True, mode="json")
    return dict(params)


def file_part(upload: Upload, filename: str | None = None, default_name: str = "upload.bin") -> tuple[str, bytes]:
    """Multipart tuple. The content is read once here and reused by any replay."""
    if isinstance(upload, (str, Path)):
        path = Path(upload)
        return (filename or path.name, path.read_bytes())
    name = filename or Path(getattr(upload, "name", None) or default_name).name
    return (name, upload.read())


def to_body(payload: Params) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(by_alias=True, exclude_none=True, mode="json")
    return payload


@dataclass
class BaseClient:
    http: HttpClient

    def _request(self, method: str, path: str, **kwargs):
        return self.http.request(method, path, **kwargs)

    def _data(self, method: str, path: str, **kwargs) -> Any:
        """Issue the call and return ``Envelope.data``; raises on ``success=false``."""
        return unwrap(self._request(method, path, **kwargs))

    def _entity(
        self,
        method: str,
        path: str,
        model_type: type[ModelT],
        entity_key: str | None = None,
        **kwargs,
    ) -> ModelT:
        data = self._data(method, path, **kwargs)
        return model_type.model_validate(normalize_entity(data, entity_key))

    def _page(
        self,
        path: str,
        collection_key: str,
        model_type: type[ModelT],
        params: Params = None,
    ) -> Page[ModelT]:
        data = self._data("GET", path, params=to_params(params))
        return build_page(data, collection_key, model_type)

    def _items(
        self,
        method: str,
        path: str,
        model_type: type[ModelT],
        collection_key: str | None = None,
        **kwargs,
    ) -> list[ModelT]:
        data = self._data(method, path, **kwargs)
        return [model_type.model_validate(item) for item in normalize_collection(data, collection_key)]

    def _strings(self, path: str, collection_key: str | None = None, params: Params = None) -> list[str]:
        data = self._data("GET", path, params=to_params(params))
        return [str(item) for item in normalize_collection(data, collection_key)]

    def _download(self, path: str, params: Params = None) -> BinaryPayload:
        return self.http.request_binary("GET", path, params=to_params(params))
