"""Test fixtures for django-hashstore."""

from tests.fixtures.store import (
    ICAO,
    RECORDS,
    call,
    raw_client,
    records,
    seeded,
    server,
    store,
)

__all__ = [
    "ICAO",
    "RECORDS",
    "call",
    "raw_client",
    "records",
    "seeded",
    "server",
    "store",
]
