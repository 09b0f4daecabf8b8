from __future__ import annotations

import math

import pytest

from records import Record, parse


@pytest.fixture()
def make_record():
    """Factory for records where only the fields under test matter."""

    def _make(esg=50.0, ctrl=1.0, name=None, sector="Energy", region="Europe", cap=10.0):
        return Record(
            name=name or f"Company {esg}/{ctrl}",
            ticker="TCK",
            sector=sector,
            region=region,
            esg_score=math.nan if esg is None else float(esg),
            controversy_count=math.nan if ctrl is None else float(ctrl),
            market_cap_usd_billions=math.nan if cap is None else float(cap),
        )

    return _make


@pytest.fixture()
def sample_text() -> str:
    return (
        "Company,Ticker,Sector,Region,ESG_Score,Controversies,MarketCap_USD_B\n"
        "Solaria Renewables,SLR,Energy,Europe,84,1,21.7\n"
        "Petrolux Holdings,PLX,Energy,North America,38,14,96.2\n"
        "Helix Biotech,HLX,Healthcare,North America,69,4,64.1\n"
        "Lumen Software,LMS,Technology,Europe,81,1,57.3\n"
        "Andes Mining,ADM,Materials,Latin America,36,13,17.8\n"
    )


@pytest.fixture()
def sample_records(sample_text):
    return parse(sample_text)
