from __future__ import annotations

from ..envelope import unwrap
from ..models import HealthStatus
from .base import BaseClient


class HealthClient(BaseClient):
    def health(self) -> HealthStatus:
        payload = self._request("GET", "/health") or {}
        # /health may answer bare or inside the envelope
        if isinstance(payload, dict) and "success" in payload:
            payload = unwrap(payload) or {}
        return HealthStatus.model_validate(payload)
