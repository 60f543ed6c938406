from __future__ import annotations

import json
from typing import Any, Mapping, Sequence

from ..models import BinaryPayload, Page
from ..models_files import (
    BulkDeleteResult,
    FileFilters,
    FileListParams,
    FileMetadataUpdate,
    FileStats,
    FileUploadResult,
    StoredFile,
)
from .base import BaseClient, Upload, coerce_model, file_part, to_params


class FilesClient(BaseClient):
    def list_files(self, params: FileListParams | Mapping[str, Any] | None = None) -> Page[StoredFile]:
        return self._page("/files", "files", StoredFile, params=params)

    def get_file(self, file_id: str) -> StoredFile:
        return self._entity("GET", f"/files/{file_id}", StoredFile, entity_key="file")

    def upload(
        self,
        upload: Upload,
        *,
        filename: str | None = None,
        category: str | None = None,
        tags: Sequence[str] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> FileUploadResult:
        part = file_part(upload, filename)
        form: dict[str, str] = {}
        if category:
            form["category"] = category
        if tags:
            form["tags"] = json.dumps(list(tags))
        if metadata:
            form["metadata"] = json.dumps(dict(metadata))
        data = self._data("POST", "/files/upload", files={"file": part}, data=form or None)
        return FileUploadResult.model_validate(data or {})

    def download(self, file_id: str) -> BinaryPayload:
        return self._download(f"/files/{file_id}/download")

    def download_url(self, file_id: str) -> str:
        data = self._data("GET", f"/files/{file_id}/download-url")
        if not isinstance(data, Mapping) or not data.get("url"):
            raise ValueError("Expected download-url response to carry a url")
        return str(data["url"])

    def update_metadata(self, file_id: str, update: FileMetadataUpdate | Mapping[str, Any]) -> StoredFile:
        payload = coerce_model(update, FileMetadataUpdate)
        return self._entity("PUT", f"/files/{file_id}", StoredFile, entity_key="file", json_body=payload.to_wire())

    def delete_file(self, file_id: str) -> None:
        self._data("DELETE", f"/files/{file_id}")

    def stats(self) -> FileStats:
        return self._entity("GET", "/files/stats", FileStats)

    def search(self, query: str, filters: FileFilters | Mapping[str, Any] | None = None) -> list[StoredFile]:
        params = {"q": query, **(to_params(filters) or {})}
        return self._items("GET", "/files/search", StoredFile, collection_key="files", params=params)

    def by_category(self, category: str) -> list[StoredFile]:
        return self._items("GET", "/files/category", StoredFile, collection_key="files", params={"category": category})

    def by_tags(self, tags: Sequence[str]) -> list[StoredFile]:
        return self._items("GET", "/files/tags", StoredFile, collection_key="files", params={"tags": list(tags)})

    def categories(self) -> list[str]:
        return self._strings("/files/categories", "categories")

    def tags(self) -> list[str]:
        return self._strings("/files/tags", "tags")

    def bulk_delete(self, file_ids: Sequence[str]) -> BulkDeleteResult:
        data = self._data("POST", "/files/bulk-delete", json_body={"fileIds": list(file_ids)})
        return BulkDeleteResult.model_validate(data or {})
