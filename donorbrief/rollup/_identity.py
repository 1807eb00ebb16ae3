"""
donorbrief.rollup._identity
===========================
Donor identity resolution.

A donor key is the first non-empty value of donor id, email, and donor name,
in that order.  Rows with none of the three get a synthetic
``unknown-<row>`` key; they never merge with any other row.  The cascade is
applied once per row, so two rows for the same person carrying different
signals (an id on one, only a name on the other) resolve to different keys.

The synthetic key is numbered by data-row position while the warning quotes
the source line, so for a CSV with one header line row 7 of the data becomes
``unknown-7`` and is reported as ``Row 8``.
"""

from __future__ import annotations

from typing import Optional

from donorbrief.records import DonorCandidates

UNKNOWN_PREFIX = "unknown-"


def _first_present(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value is not None and value.strip():
            return value.strip()
    return None


def resolve_donor_key(
    candidates: DonorCandidates,
    row_index: int,
    row_number: Optional[int] = None,
) -> tuple[str, Optional[str]]:
    """Resolve a row's donor key.

    Parameters
    ----------
    candidates : DonorCandidates
        The identity signals present on the row.
    row_index : int
        1-based data-row position used for the synthetic fallback key.
    row_number : int or None, default=None
        Source line quoted in the warning; defaults to ``row_index``.

    Returns
    -------
    key : str
        The resolved donor key.
    warning : str or None
        ``"Row <n>: missing donor identity"`` when the synthetic key was
        used, otherwise ``None``.
    """
    key = _first_present(candidates.id, candidates.email, candidates.name)
    if key is not None:
        return key, None
    line = row_number if row_number is not None else row_index
    return f"{UNKNOWN_PREFIX}{row_index}", f"Row {line}: missing donor identity"
