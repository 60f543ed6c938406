from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import ValidationError as PydanticValidationError

from .models import StoredSession

logger = logging.getLogger(__name__)


@dataclass
class AuthStore:
    """Key-value persistence for the bearer token and the cached user record."""

    app_name: str = "autocrm"
    filename: str = "session.json"
    base_dir: Path | None = None

    def _path(self) -> Path:
        base = self.base_dir or Path(user_data_dir(self.app_name, "AutoCRM"))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def save(self, session: StoredSession) -> None:
        path = self._path()
        path.write_text(json.dumps(session.model_dump(mode="json"), indent=2))
        try:
            path.chmod(0o600)
        except OSError:
            logger.debug("session_store_chmod_unsupported", extra={"path": str(path)})

    def load(self) -> StoredSession | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            self.clear()
            return None
        try:
            return StoredSession.model_validate(data)
        except PydanticValidationError:
            self.clear()
            return None

    def clear(self) -> None:
        path = self._path()
        if path.exists():
            path.unlink()
