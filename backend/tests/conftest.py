"""Shared fixtures: an in-memory repository and a keyed codec."""

from datetime import date
from typing import Any

import pytest

from identity_vault.application.interfaces import IdentityRecordRepository, UNIQUE_FIELDS
from identity_vault.application.schemas import IdentityRecordCreate
from identity_vault.application.services import IdentityRecordService
from identity_vault.domain.entities import IdentityRecord
from identity_vault.domain.exceptions import ConstraintViolation
from identity_vault.infrastructure.security import AesGcmFieldCodec

TEST_KEY_HEX = "0123456789abcdef" * 4


class FakeIdentityRecordRepository(IdentityRecordRepository):
    """In-memory fake repository that enforces the same unique columns as the database."""

    def __init__(self):
        self.records: dict[str, IdentityRecord] = {}

    async def find_by_unique_field(self, field: str, value: str) -> IdentityRecord | None:
        for record in self.records.values():
            if getattr(record, field) == value:
                return record
        return None

    async def insert(self, record: IdentityRecord) -> IdentityRecord:
        self._check_unique(record.id, {f: getattr(record, f) for f in UNIQUE_FIELDS})
        self.records[record.id] = record
        return record

    async def find_live_by_id(self, record_id: str) -> IdentityRecord | None:
        record = self.records.get(record_id)
        if record is None or record.deleted_at is not None:
            return None
        return record

    async def update(self, record_id: str, changes: dict[str, Any]) -> IdentityRecord | None:
        record = await self.find_live_by_id(record_id)
        if record is None:
            return None
        self._check_unique(record_id, {f: v for f, v in changes.items() if f in UNIQUE_FIELDS})
        for field, value in changes.items():
            setattr(record, field, value)
        return record

    async def count_live(self) -> int:
        return sum(1 for r in self.records.values() if r.deleted_at is None)

    async def list_live(self, *, offset: int = 0, limit: int = 10) -> list[IdentityRecord]:
        live = [r for r in self.records.values() if r.deleted_at is None]
        live.sort(key=lambda r: r.created_at, reverse=True)
        return live[offset : offset + limit]

    def _check_unique(self, record_id: str, values: dict[str, Any]) -> None:
        for other in self.records.values():
            if other.id == record_id:
                continue
            for field, value in values.items():
                if getattr(other, field) == value:
                    raise ConstraintViolation(field)


def make_create(**overrides: Any) -> IdentityRecordCreate:
    payload: dict[str, Any] = {
        "name": "John Doe",
        "email": "john.doe@example.com",
        "primary_mobile": "9876543210",
        "secondary_mobile": "9876543211",
        "national_id": "123456789012",
        "tax_id": "ABCDE1234F",
        "date_of_birth": date(1990, 1, 1),
        "place_of_birth": "Mumbai",
        "current_address": "123 Test Street, Mumbai",
        "permanent_address": "123 Test Street, Mumbai",
    }
    payload.update(overrides)
    return IdentityRecordCreate(**payload)


def make_person(index: int, **overrides: Any) -> IdentityRecordCreate:
    """A create payload whose unique fields differ for every ``index``."""
    return make_create(
        email=f"person{index}@example.com",
        primary_mobile=f"98765{index:05d}",
        national_id=f"{index:012d}",
        tax_id=f"ABCDE{index:04d}F",
        **overrides,
    )


@pytest.fixture
def encryption_key_hex() -> str:
    return TEST_KEY_HEX


@pytest.fixture
def codec(encryption_key_hex: str) -> AesGcmFieldCodec:
    return AesGcmFieldCodec(encryption_key_hex)


@pytest.fixture
def repository() -> FakeIdentityRecordRepository:
    return FakeIdentityRecordRepository()


@pytest.fixture
def service(repository: FakeIdentityRecordRepository, codec: AesGcmFieldCodec) -> IdentityRecordService:
    return IdentityRecordService(repository, codec)


@pytest.fixture
def create_payload():
    return make_create


@pytest.fixture
def person_payload():
    return make_person
