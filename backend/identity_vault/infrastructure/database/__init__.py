from .base import Base
from .session import (
    build_engine,
    build_session_factory,
    get_db_session,
    get_engine,
    init_models,
)
from .models import IdentityRecordModel

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "get_db_session",
    "get_engine",
    "init_models",
    "IdentityRecordModel",
]
