"""
Shared pytest fixtures.
"""

import datetime

import pytest

from donorbrief.records import DonorCandidates, GiftRecord
from donorbrief.utils import make_gift_records

AS_OF = datetime.date(2025, 6, 30)

SAMPLE_CSV = """donor_id,donor_name,email,gift_date,gift_amount,pledge_amount,pledge_due,campaign,acknowledged,ack_date
D001,Ada Lovelace,ada@example.org,2023-03-15,250.00,,,Annual Fund,yes,2023-03-18
D001,Ada Lovelace,ada@example.org,2025-11-02,300.00,,,Annual Fund,yes,2025-11-20
D002,Grace Hopper,grace@example.org,2024-04-10,"$1,200.00",5000,2025-12-31,Capital,,
D002,,grace@example.org,2025-06-01,800.00,,,Capital,no,
D003,Alan Turing,,2024-12-24,75.50,,,,,
,Katherine Johnson,kj@example.org,2025-01-20,12000,,,Scholarships,true,2025-01-22
,,,2025-09-09,40,,,Spring Gala,,
D004,Edsger Dijkstra,ed@example.org,not a date,100,,,Annual Fund,,
D005,Barbara Liskov,bl@example.org,2025-10-10,0,,,Annual Fund,,
D006,Donald Knuth,dk@example.org,2022-02-14,64.00,,,Annual Fund,y,2022-02-15
"""


@pytest.fixture
def gift():
    """Factory for a single :class:`GiftRecord`."""
    def _gift(donor_id=None, on=AS_OF, amount=100.0, name=None, email=None, **kwargs):
        return GiftRecord(
            gift_date=on,
            gift_amount=amount,
            donor=DonorCandidates(id=donor_id, name=name, email=email),
            **kwargs,
        )
    return _gift


@pytest.fixture(scope="session")
def gift_records():
    return make_gift_records(n_donors=50, random_state=0)


@pytest.fixture
def sample_csv(tmp_path):
    path = tmp_path / "donations.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
