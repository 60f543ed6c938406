from .auth_retry import AuthRetryPolicy, RetryState
from .auth_store import AuthStore
from .config import ClientConfig, ConfigError, load_config
from .debounce import Debouncer, debounce
from .envelope import Err, Ok, normalize_collection, normalize_entity, parse_envelope, unwrap
from .exceptions import (
    AccessDeniedError,
    ApiError,
    AuthError,
    ConflictError,
    EmptyRemarkError,
    EntityLockedError,
    EnvelopeError,
    ForbiddenError,
    MissingReasonError,
    NotFoundError,
    PreconditionError,
    RateLimitError,
    RemarkAlreadyCancelledError,
    RemarkCancelForbiddenError,
    RemarkLimitError,
    RemarkLimitReachedError,
    RemarkPermissionDeniedError,
    ServerError,
    SessionExpiredError,
    TokenRefreshError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .logging_setup import configure_logging
from .models import BinaryPayload, Page, Pagination, RoleName, SessionUser, StoredSession, User
from .models_bookings import Booking, BookingFilters, BookingStatus
from .models_enquiries import Enquiry, EnquiryCategory, EnquiryStatus
from .models_remarks import Remark, RemarkType
from .remark_rules import (
    ELEVATED_ROLES,
    MAX_ACTIVE_REMARKS,
    RECENT_REMARKS_WINDOW,
    RemarkPolicy,
    can_cancel_remark,
    is_booking_locked,
    is_enquiry_locked,
)
from .remark_thread import RemarkThread
from .services import EnquiryService, RemarksService
from .session import ApiSession
from .token_provider import FirebaseTokenProvider, SessionProvider, StaticTokenProvider
from .ui_errors import UserFacingError, to_user_facing_error

__all__ = [
    "AccessDeniedError",
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthRetryPolicy",
    "AuthStore",
    "BinaryPayload",
    "Booking",
    "BookingFilters",
    "BookingStatus",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "Debouncer",
    "ELEVATED_ROLES",
    "EmptyRemarkError",
    "Enquiry",
    "EnquiryCategory",
    "EnquiryService",
    "EnquiryStatus",
    "EntityLockedError",
    "EnvelopeError",
    "Err",
    "FirebaseTokenProvider",
    "ForbiddenError",
    "HttpClient",
    "MAX_ACTIVE_REMARKS",
    "MissingReasonError",
    "NotFoundError",
    "Ok",
    "Page",
    "Pagination",
    "PreconditionError",
    "RECENT_REMARKS_WINDOW",
    "RateLimitError",
    "Remark",
    "RemarkAlreadyCancelledError",
    "RemarkCancelForbiddenError",
    "RemarkLimitError",
    "RemarkLimitReachedError",
    "RemarkPermissionDeniedError",
    "RemarkPolicy",
    "RemarkThread",
    "RemarkType",
    "RemarksService",
    "RetryState",
    "RoleName",
    "ServerError",
    "SessionExpiredError",
    "SessionProvider",
    "SessionUser",
    "StaticTokenProvider",
    "StoredSession",
    "TokenRefreshError",
    "TransportError",
    "UnauthorizedError",
    "User",
    "UserFacingError",
    "ValidationError",
    "can_cancel_remark",
    "configure_logging",
    "debounce",
    "is_booking_locked",
    "is_enquiry_locked",
    "load_config",
    "normalize_collection",
    "normalize_entity",
    "parse_envelope",
    "to_user_facing_error",
    "unwrap",
]
