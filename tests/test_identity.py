"""
tests/test_identity.py
"""

from donorbrief.records import DonorCandidates
from donorbrief.rollup import resolve_donor_key


def test_donor_id_wins():
    key, warning = resolve_donor_key(DonorCandidates(id="D1", name="Ann", email="ann@example.org"), 3)
    assert key == "D1"
    assert warning is None


def test_blank_id_falls_back_to_email():
    key, _ = resolve_donor_key(DonorCandidates(id="   ", name="Ann", email="ann@example.org"), 3)
    assert key == "ann@example.org"


def test_name_is_last_real_signal():
    key, warning = resolve_donor_key(DonorCandidates(name="Ann"), 3)
    assert key == "Ann"
    assert warning is None


def test_values_are_stripped():
    key, _ = resolve_donor_key(DonorCandidates(id="  D1 "), 1)
    assert key == "D1"


def test_synthetic_key_and_warning():
    key, warning = resolve_donor_key(DonorCandidates(id="", name=None, email=" "), 7)
    assert key == "unknown-7"
    assert warning == "Row 7: missing donor identity"


def test_resolution_is_stable():
    candidates = DonorCandidates(email="x@example.org")
    assert resolve_donor_key(candidates, 1) == resolve_donor_key(candidates, 1)


def test_synthetic_warning_quotes_source_line():
    key, warning = resolve_donor_key(DonorCandidates(), 7, row_number=8)
    assert key == "unknown-7"
    assert warning == "Row 8: missing donor identity"
