from .identity_record_service import IdentityRecordService

__all__ = [
    "IdentityRecordService",
]
