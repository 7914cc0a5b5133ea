"""Unit tests for the IdentityRecord DTOs."""

from datetime import date

import pytest
from pydantic import ValidationError

from identity_vault.application.schemas import (
    IdentityRecordListResponse,
    IdentityRecordUpdate,
)
from identity_vault.domain.entities import IdentityRecord, Pagination, RecordPage


@pytest.mark.parametrize(
    "field, value",
    [
        ("name", "J"),
        ("email", "not-an-email"),
        ("primary_mobile", "0123"),
        ("secondary_mobile", "abc"),
        ("national_id", "12345"),
        ("tax_id", "ABCDE1234FG"),
        ("current_address", "abc"),
        ("permanent_address", ""),
    ],
)
def test_create_rejects_invalid_fields(create_payload, field, value):
    with pytest.raises(ValidationError):
        create_payload(**{field: value})


def test_create_coerces_date_and_defaults_secondary_mobile(create_payload):
    payload = create_payload(date_of_birth="1990-01-01", secondary_mobile=None)

    assert payload.date_of_birth == date(1990, 1, 1)
    assert payload.secondary_mobile is None


def test_update_tracks_presence():
    patch = IdentityRecordUpdate(name="Jane Doe", secondary_mobile=None)

    assert patch.provided_fields() == {"name": "Jane Doe", "secondary_mobile": None}
    assert IdentityRecordUpdate().provided_fields() == {}


@pytest.mark.parametrize("field", ["name", "email", "primary_mobile", "place_of_birth"])
def test_update_rejects_null_for_required_fields(field):
    with pytest.raises(ValidationError):
        IdentityRecordUpdate(**{field: None})


def test_list_response_from_page():
    record = IdentityRecord(
        name="John Doe",
        email="john.doe@example.com",
        primary_mobile="9876543210",
        national_id="sealed",
        national_id_hash="a" * 64,
        tax_id="sealed",
        tax_id_hash="b" * 64,
        date_of_birth=date(1990, 1, 1),
        place_of_birth="Mumbai",
        current_address="123 Test Street",
        permanent_address="123 Test Street",
    )
    page = RecordPage(
        records=[record],
        pagination=Pagination(page=1, limit=10, total=1, total_pages=1),
    )

    response = IdentityRecordListResponse.model_validate(page, from_attributes=True)
    dumped = response.model_dump()

    assert dumped["pagination"] == {"page": 1, "limit": 10, "total": 1, "total_pages": 1}
    assert dumped["records"][0]["id"] == record.id
    assert "national_id" not in dumped["records"][0]
    assert "tax_id_hash" not in dumped["records"][0]


def test_update_keeps_sealed_fields_whatever_their_value():
    patch = IdentityRecordUpdate(national_id=None, tax_id="short")

    assert patch.provided_fields() == {"national_id": None, "tax_id": "short"}
