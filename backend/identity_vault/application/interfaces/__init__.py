from .identity_record_repository import IdentityRecordRepository, UNIQUE_FIELDS
from .sensitive_field_codec import SensitiveFieldCodec

__all__ = [
    "IdentityRecordRepository",
    "UNIQUE_FIELDS",
    "SensitiveFieldCodec",
]
