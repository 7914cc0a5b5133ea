from .identity_record import IdentityRecord
from .record_page import Pagination, RecordPage

__all__ = [
    "IdentityRecord",
    "Pagination",
    "RecordPage",
]
