"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_context,
    make_v1_index,
    make_v1_payload,
    make_v2_index,
    make_v2_payload,
    write_locale_dir,
)

__all__ = [
    "make_context",
    "make_v1_index",
    "make_v1_payload",
    "make_v2_index",
    "make_v2_payload",
    "write_locale_dir",
]
