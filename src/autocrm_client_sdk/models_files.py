from __future__ import annotations

from typing import Any, Dict, List

from pydantic import Field

from .models import CrmModel, SortOrder


class StoredFile(CrmModel):
    id: str
    filename: str | None = None
    original_name: str | None = None
    mime_type: str | None = None
    size: int | None = None
    path: str | None = None
    url: str | None = None
    uploaded_by: str | None = None
    uploaded_by_name: str | None = None
    category: str | None = None
    tags: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] | None = None
    created_at: str | None = None
    updated_at: str | None = None


class FileFilters(CrmModel):
    category: List[str] | None = None
    mime_type: List[str] | None = None
    uploaded_by: List[str] | None = None
    tags: List[str] | None = None
    date_from: str | None = None
    date_to: str | None = None
    min_size: int | None = None
    max_size: int | None = None


class FileListParams(FileFilters):
    page: int | None = None
    limit: int | None = None
    sort_by: str | None = None
    sort_order: SortOrder | None = None
    search: str | None = None


class FileMetadataUpdate(CrmModel):
    category: str | None = None
    tags: List[str] | None = None
    metadata: Dict[str, Any] | None = None


class FileUploadResult(CrmModel):
    file: StoredFile
    message: str | None = None


class FileStats(CrmModel):
    total_files: int = 0
    total_size: int = 0
    average_size: float | None = None
    files_by_category: Dict[str, int] = Field(default_factory=dict)
    files_by_mime_type: Dict[str, int] = Field(default_factory=dict)
    recent_uploads: List[StoredFile] = Field(default_factory=list)


class BulkDeleteResult(CrmModel):
    deleted: int = 0
    failed: List[str] = Field(default_factory=list)
