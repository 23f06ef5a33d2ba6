"""Pytest configuration for django-hashstore tests."""

from tests.fixtures import (
    raw_client,
    records,
    seeded,
    server,
    store,
)

# Re-export fixtures so pytest can discover them
__all__ = [
    "raw_client",
    "records",
    "seeded",
    "server",
    "store",
]
