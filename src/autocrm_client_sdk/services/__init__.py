from .enquiry_service import EnquiryService
from .remarks_service import RemarksService

__all__ = ["EnquiryService", "RemarksService"]
