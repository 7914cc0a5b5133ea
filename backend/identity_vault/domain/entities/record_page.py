"""Paged listing result returned by the record service."""

from dataclasses import dataclass, field

from .identity_record import IdentityRecord


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int
    total_pages: int


@dataclass(frozen=True)
class RecordPage:
    """One page of live records plus the counts needed to navigate the rest."""

    pagination: Pagination
    records: list[IdentityRecord] = field(default_factory=list)
