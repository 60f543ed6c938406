from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.bookings import BookingsClient
from .clients.catalog import CatalogClient
from .clients.dashboard import DashboardClient
from .clients.dealerships import DealershipsClient
from .clients.enquiries import EnquiriesClient
from .clients.files import FilesClient
from .clients.health import HealthClient
from .clients.notifications import NotificationsClient
from .clients.quotations import QuotationsClient
from .clients.remarks import RemarksClient
from .clients.stock import StockClient
from .clients.users import UsersClient
from .config import ClientConfig
from .http_client import HttpClient
from .models import SessionUser
from .services.enquiry_service import EnquiryService
from .services.remarks_service import RemarksService
from .token_provider import FirebaseTokenProvider, SessionProvider, StaticTokenProvider

logger = logging.getLogger(__name__)


@dataclass
class ApiSession:
    """Owns the shared :class:`HttpClient` and hands out resource clients."""

    config: ClientConfig
    token_provider: SessionProvider | None = None
    auth_store: AuthStore | None = None
    http: HttpClient = field(init=False)
    user: SessionUser | None = None

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore(app_name=self.config.app_name)
        if self.token_provider is None:
            self.token_provider = self._default_provider()
        if self.user is None:
            stored = self.auth_store.load()
            self.user = stored.auth_user if stored else None
        self.http = HttpClient(
            config=self.config,
            token_provider=self.token_provider,
            auth_store=self.auth_store,
        )

    def _default_provider(self) -> SessionProvider:
        if self.config.firebase_api_key:
            return FirebaseTokenProvider(
                api_key=self.config.firebase_api_key,
                store=self.auth_store,
                timeout_seconds=self.config.timeout_seconds,
                env_name=self.config.env_name,
            )
        stored = self.auth_store.load() if self.auth_store else None
        return StaticTokenProvider(stored.auth_token if stored else None)

    @property
    def current_user(self) -> SessionUser | None:
        if self.token_provider is None or not self.token_provider.has_session():
            return None
        return self.user

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http)

    def health_client(self) -> HealthClient:
        return HealthClient(http=self.http)

    def users_client(self) -> UsersClient:
        return UsersClient(http=self.http)

    def enquiries_client(self) -> EnquiriesClient:
        return EnquiriesClient(http=self.http)

    def bookings_client(self) -> BookingsClient:
        return BookingsClient(http=self.http)

    def quotations_client(self) -> QuotationsClient:
        return QuotationsClient(http=self.http)

    def stock_client(self) -> StockClient:
        return StockClient(http=self.http)

    def remarks_client(self) -> RemarksClient:
        return RemarksClient(http=self.http)

    def dealerships_client(self) -> DealershipsClient:
        return DealershipsClient(http=self.http)

    def catalog_client(self) -> CatalogClient:
        return CatalogClient(http=self.http)

    def files_client(self) -> FilesClient:
        return FilesClient(http=self.http)

    def dashboard_client(self) -> DashboardClient:
        return DashboardClient(http=self.http)

    def notifications_client(self) -> NotificationsClient:
        return NotificationsClient(http=self.http)

    def remarks_service(self, actor: SessionUser | None = None) -> RemarksService:
        acting = actor or self.current_user
        if acting is None:
            raise RuntimeError("A signed-in user is required to manage remarks")
        return RemarksService(self.remarks_client(), acting)

    def enquiry_service(self) -> EnquiryService:
        return EnquiryService(self.enquiries_client())

    def sign_in(self, email: str, password: str) -> SessionUser:
        if not isinstance(self.token_provider, FirebaseTokenProvider):
            raise RuntimeError("Password sign-in requires AUTOCRM_FIREBASE_API_KEY")
        logger.info("sign_in_attempt")
        self.token_provider.sign_in(email, password)
        try:
            profile = self.auth_client().profile()
        except Exception:
            logger.exception("sign_in_profile_failure")
            self.sign_out()
            raise
        self.user = SessionUser.from_user(profile)
        self.token_provider.remember_user(self.user)
        logger.info("sign_in_success", extra={"user_id": self.user.id, "role": self.user.role})
        return self.user

    def sign_out(self) -> None:
        logger.info("sign_out")
        self.user = None
        if isinstance(self.token_provider, FirebaseTokenProvider):
            self.token_provider.sign_out()
        elif self.token_provider is not None:
            self.token_provider.invalidate()
        if self.auth_store:
            self.auth_store.clear()
