"""
donorbrief.utils._validation
============================
Shared precondition checks for DonorBrief configuration.
"""

import datetime
import numbers


def validate_positive_int(name: str, value) -> int:
    """
    Validate that ``value`` is an integer strictly greater than zero.

    Parameters
    ----------
    name : str
        Parameter name used in the error message.
    value : int
        The value to check.

    Returns
    -------
    value : int
        The validated value.

    Raises
    ------
    ValueError
        If value is not a positive integer.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise ValueError(f"`{name}` must be a positive integer, got {value!r}.")
    return int(value)


def validate_non_negative_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
        raise ValueError(f"`{name}` must be a non-negative integer, got {value!r}.")
    return int(value)


def validate_thresholds(mid_threshold, major_threshold) -> None:
    """
    Validate the donor tier thresholds.

    ``mid_threshold`` must be a non-negative number strictly below
    ``major_threshold`` so the three tiers do not overlap.  A zero
    ``mid_threshold`` leaves the ``small`` tier empty.

    Raises
    ------
    ValueError
        If either threshold is not a number, ``mid_threshold`` is negative,
        or the ordering is wrong.
    """
    for name, value in (("mid_threshold", mid_threshold), ("major_threshold", major_threshold)):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ValueError(f"`{name}` must be a number, got {value!r}.")
    if mid_threshold < 0:
        raise ValueError(f"`mid_threshold` must be non-negative, got {mid_threshold!r}.")
    if mid_threshold >= major_threshold:
        raise ValueError(
            f"`mid_threshold` must be below `major_threshold`, "
            f"got {mid_threshold!r} >= {major_threshold!r}."
        )


def validate_as_of(value) -> datetime.date:
    """Return ``value`` as a plain ``datetime.date``."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if not isinstance(value, datetime.date):
        raise ValueError(f"`as_of` must be a date, got {value!r}.")
    return value
