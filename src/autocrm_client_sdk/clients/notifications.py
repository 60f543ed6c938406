from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..models import Page
from ..models_dashboard import FcmTokenStatus, Notification, NotificationPreferences, NotificationStats
from .base import BaseClient, coerce_model


class NotificationsClient(BaseClient):
    def history(self, page: int = 1, limit: int = 50, notification_type: str | None = None) -> Page[Notification]:
        params = {"page": page, "limit": limit, "type": notification_type}
        return self._page("/notifications/history", "notifications", Notification, params=params)

    def stats(self) -> NotificationStats:
        return self._entity("GET", "/notifications/stats", NotificationStats)

    def mark_read(self, notification_id: str) -> None:
        self._data("PATCH", f"/notifications/{notification_id}/read")

    def mark_many_read(self, notification_ids: Sequence[str]) -> None:
        self._data("PATCH", "/notifications/mark-read", json_body={"notificationIds": list(notification_ids)})

    def send_test(self, title: str, body: str) -> None:
        self._data("POST", "/notifications/test", json_body={"title": title, "body": body})

    def fcm_token_status(self) -> FcmTokenStatus:
        return self._entity("GET", "/notifications/fcm-token", FcmTokenStatus)

    def preferences(self) -> NotificationPreferences:
        return self._entity("GET", "/notifications/preferences", NotificationPreferences, entity_key="preferences")

    def update_preferences(self, preferences: NotificationPreferences | Mapping[str, Any]) -> NotificationPreferences:
        payload = coerce_model(preferences, NotificationPreferences)
        return self._entity(
            "PUT",
            "/notifications/preferences",
            NotificationPreferences,
            entity_key="preferences",
            json_body=payload.to_wire(),
        )

    def delete(self, notification_id: str) -> None:
        self._data("DELETE", f"/notifications/{notification_id}")
