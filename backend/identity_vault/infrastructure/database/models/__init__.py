from .identity_record import IdentityRecordModel

__all__ = [
    "IdentityRecordModel",
]
