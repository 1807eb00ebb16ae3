"""
tests/test_preprocessing.py
===========================
Unit tests for donation-export ingestion.
"""

import datetime

import numpy as np
import pandas as pd
import pytest
from sklearn.base import clone
from sklearn.exceptions import NotFittedError

from donorbrief.preprocessing import (
    GiftRowNormalizer,
    load_gift_csv,
    normalize_header,
    records_from_frame,
)
from donorbrief.records import GiftRecord
from donorbrief.rollup import build_rollup


@pytest.fixture
def raw_export():
    return pd.DataFrame({
        "Constituent ID": ["C1", "C2", "C3", "C4", ""],
        "Full Name": ["Ada", "Grace", "Alan", "Edsger", "Kay"],
        "Email Address": ["ada@example.org", "", "", "", "kay@example.org"],
        "Donation Date": ["2024-01-05", "not a date", "2024-02-01", "2024-02-02", "2024-03-10"],
        "Amount": ["$1,250.00", "50", "0", "abc", "75"],
        "Pledge": ["5000", "", "", "", ""],
        "Due Date": ["2025-06-30", "", "", "", ""],
        "Fund": ["Capital", "", "Annual", "Annual", "  "],
        "Thanked": ["Yes", "", "", "", "no"],
        "Thank You Date": ["", "", "", "", "2024-03-12"],
    })


def test_normalize_header():
    assert normalize_header("  Gift Amount ($) ") == "gift_amount"
    assert normalize_header("E-mail__Address") == "e_mail_address"
    assert normalize_header("DonorID") == "donorid"


def test_headers_resolve_through_aliases(raw_export):
    normalizer = GiftRowNormalizer().fit(raw_export)
    assert normalizer.header_map_["donor_id"] == "Constituent ID"
    assert normalizer.header_map_["gift_date"] == "Donation Date"
    assert normalizer.header_map_["gift_amount"] == "Amount"
    assert normalizer.header_map_["pledge_due"] == "Due Date"
    assert normalizer.header_map_["ack_date"] == "Thank You Date"
    assert normalizer.n_features_in_ == 10


def test_custom_aliases_take_precedence():
    raw = pd.DataFrame({"Received": ["2024-01-01"], "Gift": ["10"], "Amount": ["99"]})
    normalizer = GiftRowNormalizer(aliases={"gift_date": ["Received"], "gift_amount": ["Gift"]})
    out = normalizer.fit_transform(raw)
    assert out.loc[0, "gift_amount"] == 10.0


def test_missing_required_headers():
    raw = pd.DataFrame({"donor_id": ["A"], "gift_date": ["2024-01-01"]})
    with pytest.raises(ValueError, match="Missing required headers: gift_amount"):
        GiftRowNormalizer().fit(raw)


def test_invalid_rows_dropped_with_warnings(raw_export):
    normalizer = GiftRowNormalizer()
    with pytest.warns(UserWarning, match="3 row"):
        out = normalizer.fit_transform(raw_export)
    assert normalizer.row_warnings_ == [
        "Row 3: invalid gift_date",
        "Row 4: invalid gift_amount",
        "Row 5: invalid gift_amount",
    ]
    assert list(out["row_index"]) == [1, 5]
    assert list(out["row_number"]) == [2, 6]


def test_field_coercion(raw_export):
    with pytest.warns(UserWarning):
        out = GiftRowNormalizer().fit_transform(raw_export)
    first, last = out.iloc[0], out.iloc[1]
    assert first["gift_amount"] == 1250.0
    assert first["pledge_amount"] == 5000.0
    assert first["pledge_due_date"] == pd.Timestamp("2025-06-30")
    assert first["campaign"] == "Capital"
    assert bool(first["acknowledged"]) is True
    assert last["campaign"] == "Unspecified"
    assert last["donor_id"] is None or pd.isna(last["donor_id"])
    # ack date implies acknowledgement even when the flag says no
    assert bool(last["acknowledged"]) is True
    assert np.isnan(last["pledge_amount"])


def test_transform_before_fit_raises(raw_export):
    with pytest.raises(NotFittedError):
        GiftRowNormalizer().transform(raw_export)


def test_non_dataframe_input():
    with pytest.raises(TypeError, match="X must be a pandas DataFrame"):
        GiftRowNormalizer().fit([[1, 2, 3]])


def test_sklearn_params_round_trip():
    normalizer = GiftRowNormalizer(default_campaign="General", row_offset=1)
    cloned = clone(normalizer)
    assert cloned.get_params()["default_campaign"] == "General"
    assert cloned.get_params()["row_offset"] == 1


def test_records_from_frame(raw_export):
    with pytest.warns(UserWarning):
        out = GiftRowNormalizer().fit_transform(raw_export)
    records = records_from_frame(out)
    assert all(isinstance(r, GiftRecord) for r in records)
    ada, kay = records
    assert ada.gift_date == datetime.date(2024, 1, 5)
    assert ada.donor.id == "C1"
    assert ada.pledge_due_date == datetime.date(2025, 6, 30)
    assert ada.row_index == 1
    assert ada.row_number == 2
    assert kay.donor.id is None
    assert kay.donor.email == "kay@example.org"
    assert kay.pledge_amount is None
    assert kay.ack_date == datetime.date(2024, 3, 12)


def test_records_from_minimal_frame():
    frame = pd.DataFrame({"gift_date": [pd.Timestamp("2024-05-01")], "gift_amount": [12.5]})
    record = records_from_frame(frame)[0]
    assert record.campaign == "Unspecified"
    assert record.acknowledged is False
    assert record.row_index is None
    assert record.row_number is None


def test_records_from_frame_requires_columns():
    with pytest.raises(ValueError, match="frame must contain columns"):
        records_from_frame(pd.DataFrame({"gift_date": []}))


def test_load_gift_csv(sample_csv):
    with pytest.warns(UserWarning):
        records, row_warnings = load_gift_csv(sample_csv)
    assert len(records) == 8
    assert row_warnings == ["Row 9: invalid gift_date", "Row 10: invalid gift_amount"]
    grace = [r for r in records if r.donor.id == "D002"]
    assert grace[0].gift_amount == 1200.0
    assert grace[0].pledge_amount == 5000.0


def test_csv_unknown_donor_key(sample_csv):
    with pytest.warns(UserWarning):
        records, _ = load_gift_csv(sample_csv)
    rollup, _ = build_rollup(records)
    assert "unknown-7" in rollup.profiles
    assert rollup.warnings == ("Row 8: missing donor identity",)
