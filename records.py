"""
Company records parsed from the delimited dataset.

Every line between the header and the last non-blank line is one record;
an interior blank line becomes a record with every field missing.
"""

import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)

HEADERS = [
    "Company",
    "Ticker",
    "Sector",
    "Region",
    "ESG_Score",
    "Controversies",
    "MarketCap_USD_B",
]
NUMERIC_FIELDS = ["ESG_Score", "Controversies", "MarketCap_USD_B"]


@dataclass(frozen=True)
class Record:
    name: str
    ticker: str
    sector: str
    region: str
    esg_score: float
    controversy_count: float
    market_cap_usd_billions: float

    def as_row(self):
        return [
            self.name,
            self.ticker,
            self.sector,
            self.region,
            self.esg_score,
            self.controversy_count,
            self.market_cap_usd_billions,
        ]


def is_missing(value):
    return value is None or (isinstance(value, float) and math.isnan(value))


def to_text(value):
    if value is None:
        return ""
    return value.strip()


def to_number(value):
    """Missing, empty or non-numeric cells become NaN, never 0."""
    if value is None:
        return math.nan
    cleaned = value.strip()
    # float() accepts digit-group underscores
    if not cleaned or "_" in cleaned:
        return math.nan
    try:
        return float(cleaned)
    except ValueError:
        return math.nan


def _split(line, delimiter):
    # no quoting support: a delimiter inside a value splits it
    return [part.strip() for part in line.split(delimiter)]


def parse(raw_text, delimiter=","):
    lines = list(enumerate(raw_text.splitlines(), start=1))
    while lines and not lines[0][1].strip():
        lines.pop(0)
    while lines and not lines[-1][1].strip():
        lines.pop()
    if not lines:
        return []

    headers = _split(lines[0][1], delimiter)
    missing_headers = [h for h in HEADERS if h not in headers]
    if missing_headers:
        logger.warning("Dataset header is missing columns: %s", ", ".join(missing_headers))

    records = []
    malformed = 0
    for line_no, line in lines[1:]:
        parts = _split(line, delimiter)
        cells = {h: (parts[i] if i < len(parts) else None) for i, h in enumerate(headers)}

        row_ok = len(parts) == len(headers)
        if not row_ok:
            logger.warning(
                "Line %d has %d fields, expected %d", line_no, len(parts), len(headers)
            )

        numbers = {}
        for field in NUMERIC_FIELDS:
            numbers[field] = to_number(cells.get(field))
            if math.isnan(numbers[field]) and row_ok:
                row_ok = False
                logger.warning(
                    "Line %d: %s value %r is not numeric", line_no, field, cells.get(field)
                )

        if not row_ok:
            malformed += 1

        records.append(
            Record(
                name=to_text(cells.get("Company")),
                ticker=to_text(cells.get("Ticker")),
                sector=to_text(cells.get("Sector")),
                region=to_text(cells.get("Region")),
                esg_score=numbers["ESG_Score"],
                controversy_count=numbers["Controversies"],
                market_cap_usd_billions=numbers["MarketCap_USD_B"],
            )
        )

    if malformed:
        logger.warning("%d of %d rows were malformed and kept with missing values",
                       malformed, len(records))
    return records


def format_cell(value):
    if isinstance(value, str):
        return value
    if is_missing(value):
        return ""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def to_csv_text(records, delimiter=","):
    lines = [delimiter.join(HEADERS)]
    for record in records:
        lines.append(delimiter.join(format_cell(v) for v in record.as_row()))
    return "\n".join(lines) + "\n"
