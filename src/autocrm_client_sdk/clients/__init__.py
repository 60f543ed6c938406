from .auth import AuthClient
from .bookings import BookingsClient
from .catalog import CatalogClient
from .dashboard import DashboardClient
from .dealerships import DealershipsClient
from .enquiries import EnquiriesClient
from .files import FilesClient
from .health import HealthClient
from .notifications import NotificationsClient
from .quotations import QuotationsClient
from .remarks import RemarksClient
from .stock import StockClient
from .users import UsersClient

__all__ = [
    "AuthClient",
    "BookingsClient",
    "CatalogClient",
    "DashboardClient",
    "DealershipsClient",
    "EnquiriesClient",
    "FilesClient",
    "HealthClient",
    "NotificationsClient",
    "QuotationsClient",
    "RemarksClient",
    "StockClient",
    "UsersClient",
]
