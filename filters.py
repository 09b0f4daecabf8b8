import locale
import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ALL = "All"
CATEGORICAL_FIELDS = ("sector", "region")


def _collation_key(value):
    try:
        return (locale.strxfrm(value), value)
    except ValueError:
        return (value.casefold(), value)


def distinct_values(records, field):
    if field not in CATEGORICAL_FIELDS:
        raise KeyError(f"{field!r} is not a categorical field")
    return sorted({getattr(r, field) for r in records}, key=_collation_key)


def option_list(values):
    return [ALL, *values]


def default_max_controversies(records):
    """Largest controversy count ignoring NaN; NaN when nothing is counted."""
    counts = [r.controversy_count for r in records if not math.isnan(r.controversy_count)]
    if not counts:
        return math.nan
    return max(counts)


@dataclass(frozen=True)
class FilterSpec:
    sector: str = ALL
    region: str = ALL
    min_esg: float = 0.0
    max_controversies: float = math.inf

    @classmethod
    def defaults(cls, records):
        max_cont = default_max_controversies(records)
        if math.isnan(max_cont):
            # unbounded
            max_cont = math.inf
        return cls(sector=ALL, region=ALL, min_esg=0.0, max_controversies=max_cont)

    def matches(self, record):
        ok_sector = self.sector == ALL or record.sector == self.sector
        ok_region = self.region == ALL or record.region == self.region
        # NaN never satisfies either bound
        ok_esg = record.esg_score >= self.min_esg
        ok_cont = record.controversy_count <= self.max_controversies
        return ok_sector and ok_region and ok_esg and ok_cont


def apply_filters(records, spec):
    filtered = [r for r in records if spec.matches(r)]
    logger.debug("Filter %s kept %d of %d records", spec, len(filtered), len(records))
    return filtered
