"""
donorbrief.report._json
=======================
Structured (JSON) rendering of a :class:`~donorbrief.pipeline.DonorBrief`.
"""

from __future__ import annotations

import datetime
import json
from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from typing import Optional

import numpy as np


def _jsonable(value):
    if isinstance(value, datetime.date):
        return value.isoformat()
    if hasattr(value, "to_dict"):
        return _jsonable(value.to_dict())
    if is_dataclass(value) and not isinstance(value, type):
        return _jsonable(asdict(value))
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, np.generic):
        return value.item()
    return value


def _donor_entry(profile) -> dict:
    return {
        "id": profile.display_id,
        "name": profile.display_name,
        "email": profile.display_email,
        "total_amount": profile.total_amount,
        "total_gifts": profile.total_gift_count,
        "first_gift_date": profile.first_gift_date,
        "last_gift_date": profile.last_gift_date,
    }


def brief_to_dict(brief, input_path: Optional[str] = None) -> dict:
    """Convert a brief into plain JSON-compatible types (dates as ISO strings)."""
    cfg = brief.config
    report = {
        "as_of": cfg.as_of,
        "input": input_path,
        "config": cfg,
        "summary": brief.summary,
        "top_donors": [_donor_entry(p) for p in brief.top_donors],
        "campaigns": brief.campaigns,
        "lapsed": {
            "cutoff": cfg.lapsed_cutoff,
            "total": len(brief.lapsed),
            "donors": [_donor_entry(p) for p in brief.lapsed],
        },
        "pledges": brief.pledges,
        "gift_size_buckets": brief.gift_size_buckets,
        "concentration": brief.concentration,
        "momentum": brief.momentum,
        "retention": brief.retention,
        "recency_buckets": brief.recency,
        "monthly_trend": brief.monthly_trend,
        "acknowledgement": brief.acknowledgement,
        "donor_tiers": brief.tiers,
        "stewardship_queue": brief.stewardship_queue,
        "donors": list(brief.profiles.values()),
        "warnings": list(brief.warnings),
    }
    return _jsonable(report)


def brief_to_json(brief, input_path: Optional[str] = None, indent: int = 2) -> str:
    return json.dumps(brief_to_dict(brief, input_path=input_path), indent=indent)
