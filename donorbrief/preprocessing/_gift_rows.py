"""
donorbrief.preprocessing._gift_rows
===================================
Turn a raw donation export into canonical gift records.

Donation exports differ in header spelling ("Gift Amount", "amount",
"donation_amount", ...).  :class:`GiftRowNormalizer` resolves the headers
once at :meth:`~GiftRowNormalizer.fit` time and then coerces every row at
:meth:`~GiftRowNormalizer.transform` time, dropping rows whose gift date or
amount cannot be used and recording a human-readable warning for each.

Typical usage
-------------
>>> import pandas as pd
>>> from donorbrief.preprocessing import GiftRowNormalizer, records_from_frame
>>> raw = pd.DataFrame({
...     "Donor ID": ["A1", "A2"],
...     "Gift Date": ["2024-01-05", "not a date"],
...     "Amount": ["$1,250.00", "50"],
... })
>>> normalizer = GiftRowNormalizer()
>>> canonical = normalizer.fit_transform(raw)  # doctest: +SKIP
>>> normalizer.row_warnings_  # doctest: +SKIP
['Row 3: invalid gift_date']
"""

from __future__ import annotations

import logging
import re
import warnings
from typing import Optional

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from donorbrief.records import DonorCandidates, GiftRecord

logger = logging.getLogger(__name__)

ALIASES = {
    "donor_id": ["donor_id", "id", "donorid", "constituent_id", "constituentid"],
    "donor_name": ["donor_name", "name", "donor", "full_name"],
    "email": ["email", "email_address", "emailaddress"],
    "gift_date": ["gift_date", "date", "donation_date", "received_date", "giftdate"],
    "gift_amount": ["gift_amount", "amount", "donation_amount", "gift", "giftamount"],
    "pledge_amount": ["pledge_amount", "pledge", "pledge_total", "pledged_amount"],
    "pledge_due": ["pledge_due", "pledge_due_date", "due_date", "pledged_due"],
    "campaign": ["campaign", "fund", "campaign_name", "appeal"],
    "acknowledged": ["acknowledged", "ack", "thanked", "acknowledgement_sent"],
    "ack_date": ["ack_date", "acknowledged_date", "acknowledgement_date", "acknowledgment_date", "thank_you_date"],
}

REQUIRED_FIELDS = ("gift_date", "gift_amount")

TRUTHY = {"y", "yes", "true", "t", "1", "x"}

CANONICAL_COLUMNS = [
    "row_index", "row_number", "donor_id", "donor_name", "email", "gift_date",
    "gift_amount", "pledge_amount", "pledge_due_date", "campaign", "acknowledged",
    "ack_date",
]


def normalize_header(header) -> str:
    """Lower-case a header and collapse every run of other characters to ``_``."""
    cleaned = re.sub(r"[^a-z0-9]+", "_", str(header).strip().lower())
    return cleaned.strip("_")


def _parse_amounts(series: pd.Series) -> pd.Series:
    cleaned = series.fillna("").astype(str).str.replace(r"[^0-9.\-]", "", regex=True)
    return pd.to_numeric(cleaned, errors="coerce")


def _parse_dates(series: pd.Series) -> pd.Series:
    cleaned = series.fillna("").astype(str).str.strip()
    return pd.to_datetime(cleaned, errors="coerce", format="mixed")


def _clean_text(series: pd.Series) -> pd.Series:
    cleaned = series.fillna("").astype(str).str.strip()
    return cleaned.where(cleaned != "", None)


class GiftRowNormalizer(TransformerMixin, BaseEstimator):
    """Map a raw donation export onto the canonical gift schema.

    Parameters
    ----------
    aliases : dict or None, default=None
        Extra header aliases keyed by canonical field name.  They are tried
        before the built-in :data:`ALIASES`.
    default_campaign : str, default="Unspecified"
        Campaign assigned to rows with a blank campaign cell.
    row_offset : int, default=2
        Added to the zero-based data index to produce the row number shown in
        warnings.  ``2`` matches spreadsheet line numbers for a CSV with one
        header line.

    Attributes
    ----------
    header_map_ : dict
        Canonical field name -> source column, for every field that resolved.
    feature_names_in_ : ndarray of str
        Column names of ``X`` at :meth:`fit` time.
    n_features_in_ : int
        Number of columns in ``X`` at :meth:`fit` time.
    row_warnings_ : list of str
        Warnings for rows dropped by the most recent :meth:`transform`.

    Raises
    ------
    TypeError
        If ``X`` is not a pandas DataFrame.
    ValueError
        If ``gift_date`` or ``gift_amount`` cannot be matched to a column.
    """

    def __init__(
        self,
        aliases: Optional[dict] = None,
        default_campaign: str = "Unspecified",
        row_offset: int = 2,
    ) -> None:
        self.aliases = aliases
        self.default_campaign = default_campaign
        self.row_offset = row_offset

    def _candidate_aliases(self, field_name: str) -> list[str]:
        extra = list((self.aliases or {}).get(field_name, []))
        return [normalize_header(a) for a in extra] + ALIASES[field_name]

    def fit(self, X, y=None) -> "GiftRowNormalizer":
        if not isinstance(X, pd.DataFrame):
            raise TypeError("X must be a pandas DataFrame")

        self.feature_names_in_ = np.array([str(c) for c in X.columns], dtype=object)
        self.n_features_in_ = len(self.feature_names_in_)

        normalized = {}
        for column in X.columns:
            normalized.setdefault(normalize_header(column), column)

        header_map = {}
        for field_name in ALIASES:
            for alias in self._candidate_aliases(field_name):
                if alias in normalized:
                    header_map[field_name] = normalized[alias]
                    break

        missing = [name for name in REQUIRED_FIELDS if name not in header_map]
        if missing:
            raise ValueError(
                f"Missing required headers: {', '.join(missing)}. "
                f"Found headers: {', '.join(str(c) for c in X.columns)}"
            )

        self.header_map_ = header_map
        logger.debug("Resolved gift headers: %s", header_map)
        return self

    def _column(self, X: pd.DataFrame, field_name: str) -> pd.Series:
        source = self.header_map_.get(field_name)
        if source is None or source not in X.columns:
            return pd.Series([None] * len(X), index=X.index, dtype=object)
        return X[source]

    def transform(self, X) -> pd.DataFrame:
        check_is_fitted(self, "header_map_")
        if not isinstance(X, pd.DataFrame):
            raise TypeError("X must be a pandas DataFrame")

        out = pd.DataFrame(index=X.index)
        out["row_index"] = np.arange(1, len(X) + 1, dtype=np.int64)
        out["row_number"] = out["row_index"] - 1 + self.row_offset
        for field_name in ("donor_id", "donor_name", "email"):
            out[field_name] = _clean_text(self._column(X, field_name))

        out["gift_date"] = _parse_dates(self._column(X, "gift_date"))
        out["gift_amount"] = _parse_amounts(self._column(X, "gift_amount"))
        out["pledge_amount"] = _parse_amounts(self._column(X, "pledge_amount"))
        out["pledge_due_date"] = _parse_dates(self._column(X, "pledge_due"))

        campaign = _clean_text(self._column(X, "campaign"))
        out["campaign"] = campaign.fillna(self.default_campaign)

        out["ack_date"] = _parse_dates(self._column(X, "ack_date"))
        flag = self._column(X, "acknowledged").fillna("").astype(str).str.strip().str.lower()
        out["acknowledged"] = flag.isin(TRUTHY) | out["ack_date"].notna()

        bad_date = out["gift_date"].isna()
        bad_amount = ~bad_date & ~(out["gift_amount"] > 0)

        row_warnings = []
        for row, date_invalid, amount_invalid in zip(out["row_number"], bad_date, bad_amount):
            if date_invalid:
                row_warnings.append(f"Row {row}: invalid gift_date")
            elif amount_invalid:
                row_warnings.append(f"Row {row}: invalid gift_amount")
        self.row_warnings_ = row_warnings

        dropped = len(row_warnings)
        if dropped:
            warnings.warn(
                f"GiftRowNormalizer: {dropped} row(s) had an invalid gift_date "
                f"or gift_amount and were dropped.",
                UserWarning,
            )
            logger.info("Dropped %d of %d gift rows", dropped, len(X))

        kept = out.loc[~(bad_date | bad_amount), CANONICAL_COLUMNS]
        return kept.reset_index(drop=True)


def _as_date(value):
    if value is None or pd.isna(value):
        return None
    return pd.Timestamp(value).date()


def _as_text(value) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None


def _as_amount(value) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


def records_from_frame(frame: pd.DataFrame) -> list:
    """Convert a canonical gift frame into a list of :class:`GiftRecord`.

    ``frame`` must provide ``gift_date`` and ``gift_amount``; every other
    canonical column is optional.  Rows are assumed valid (see
    :class:`GiftRowNormalizer`).
    """
    if not isinstance(frame, pd.DataFrame):
        raise TypeError("frame must be a pandas DataFrame")
    missing = {"gift_date", "gift_amount"} - set(frame.columns)
    if missing:
        raise ValueError(f"frame must contain columns: {sorted(missing)}")

    records = []
    for row in frame.to_dict("records"):
        row_index = row.get("row_index")
        row_number = row.get("row_number")
        campaign = _as_text(row.get("campaign")) or "Unspecified"
        acknowledged = row.get("acknowledged")
        records.append(
            GiftRecord(
                gift_date=_as_date(row["gift_date"]),
                gift_amount=float(row["gift_amount"]),
                donor=DonorCandidates(
                    id=_as_text(row.get("donor_id")),
                    name=_as_text(row.get("donor_name")),
                    email=_as_text(row.get("email")),
                ),
                pledge_amount=_as_amount(row.get("pledge_amount")),
                pledge_due_date=_as_date(row.get("pledge_due_date")),
                campaign=campaign,
                acknowledged=bool(acknowledged) if acknowledged is not None and not pd.isna(acknowledged) else False,
                ack_date=_as_date(row.get("ack_date")),
                row_index=None if row_index is None or pd.isna(row_index) else int(row_index),
                row_number=None if row_number is None or pd.isna(row_number) else int(row_number),
            )
        )
    return records


def load_gift_csv(path, **params) -> tuple[list, list]:
    """Read a donation CSV and return ``(records, row_warnings)``.

    Every cell is read as text so amount and date coercion happen in
    :class:`GiftRowNormalizer`.  ``params`` are forwarded to the normalizer.
    """
    raw = pd.read_csv(path, dtype=str, keep_default_na=False)
    normalizer = GiftRowNormalizer(**params)
    canonical = normalizer.fit_transform(raw)
    return records_from_frame(canonical), list(normalizer.row_warnings_)
