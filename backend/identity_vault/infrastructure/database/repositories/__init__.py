from .identity_record_repository import SQLAlchemyIdentityRecordRepository

__all__ = [
    "SQLAlchemyIdentityRecordRepository",
]
