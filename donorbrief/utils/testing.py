"""
donorbrief.utils.testing
========================
"""

import numpy as np
import pandas as pd
from typing import Optional

from donorbrief.preprocessing import records_from_frame

CAMPAIGNS = ["Annual Fund", "Scholarships", "Spring Gala", "Capital", "Unspecified"]


def make_gift_frame(
    n_donors: int = 200,
    start_year: int = 2018,
    end_year: int = 2024,
    pledge_rate: float = 0.1,
    ack_rate: float = 0.6,
    random_state: Optional[int] = 42,
) -> pd.DataFrame:
    rng = np.random.default_rng(random_state)
    records = []
    for i in range(1, n_donors + 1):
        donor_id = f"D{str(i).zfill(5)}"
        n_gifts = rng.integers(1, 6)
        has_pledge = rng.random() < pledge_rate
        for g in range(n_gifts):
            year = rng.integers(start_year, end_year + 1)
            month = rng.integers(1, 13)
            day = rng.integers(1, 28)
            gift_date = pd.Timestamp(year=int(year), month=int(month), day=int(day))
            gift_amount = round(float(rng.lognormal(mean=5.5, sigma=1.2)), 2)
            acknowledged = bool(rng.random() < ack_rate)
            ack_date = gift_date + pd.Timedelta(days=int(rng.integers(0, 21))) if acknowledged else pd.NaT
            pledge_amount = np.nan
            pledge_due_date = pd.NaT
            if has_pledge and g == 0:
                pledge_amount = round(gift_amount * float(rng.uniform(1.5, 4.0)), 2)
                pledge_due_date = gift_date + pd.Timedelta(days=int(rng.integers(90, 720)))
            records.append(
                {
                    "donor_id": donor_id,
                    "donor_name": f"Donor {i}",
                    "email": f"donor{i}@example.org",
                    "gift_date": gift_date,
                    "gift_amount": gift_amount,
                    "pledge_amount": pledge_amount,
                    "pledge_due_date": pledge_due_date,
                    "campaign": str(rng.choice(CAMPAIGNS)),
                    "acknowledged": acknowledged,
                    "ack_date": ack_date,
                }
            )
    columns = [
        "donor_id", "donor_name", "email", "gift_date", "gift_amount",
        "pledge_amount", "pledge_due_date", "campaign", "acknowledged", "ack_date",
    ]
    df = pd.DataFrame(records, columns=columns)
    return df.sort_values("gift_date", kind="stable").reset_index(drop=True)


def make_gift_records(n_donors: int = 200, random_state: Optional[int] = 42, **kwargs) -> list:
    """Synthetic :class:`~donorbrief.records.GiftRecord` list, sorted by gift date."""
    return records_from_frame(
        make_gift_frame(n_donors=n_donors, random_state=random_state, **kwargs)
    )
