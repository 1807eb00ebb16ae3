"""
donorbrief.preprocessing
========================
Donation-export ingestion: header aliasing, field coercion, and conversion
to canonical gift records.
"""

from ._gift_rows import (
    ALIASES,
    GiftRowNormalizer,
    load_gift_csv,
    normalize_header,
    records_from_frame,
)

__all__ = [
    "ALIASES",
    "GiftRowNormalizer",
    "load_gift_csv",
    "normalize_header",
    "records_from_frame",
]
