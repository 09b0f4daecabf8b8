"""
One recomputation pass per filter change.

The chart, table and insight list all read from the same ``Snapshot`` so
they never disagree about which companies are in view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from filters import FilterSpec, apply_filters
from insights import build_insights, build_sample_summary
from records import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    spec: FilterSpec
    filtered: Tuple[Record, ...]
    insights: Tuple[str, ...]
    summary: dict = field(compare=False)

    @property
    def is_empty(self) -> bool:
        return not self.filtered


def recompute(records: Sequence[Record], spec: FilterSpec, digits: int = 2) -> Snapshot:
    filtered: List[Record] = apply_filters(records, spec)
    snapshot = Snapshot(
        spec=spec,
        filtered=tuple(filtered),
        insights=tuple(build_insights(filtered, digits=digits)),
        summary=build_sample_summary(filtered),
    )
    logger.debug("Recomputed snapshot: %d companies in view", len(snapshot.filtered))
    return snapshot
