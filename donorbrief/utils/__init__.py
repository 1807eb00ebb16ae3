"""
donorbrief.utils
================
Validation helpers and synthetic test data.
"""

from .testing import make_gift_records, make_gift_frame

__all__ = ["make_gift_records", "make_gift_frame"]
