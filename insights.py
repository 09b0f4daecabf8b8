import math

import numpy as np
import pandas as pd

from records import is_missing

NO_DATA_MESSAGE = "No data under the current filters."


def format_number(value, decimals=2, suffix=""):
    if value is None or pd.isna(value):
        return "n/a"
    return f"{value:.{decimals}f}{suffix}"


def format_metric(value, precision=1, suffix=""):
    if value is None or pd.isna(value):
        return "–"
    if isinstance(value, (int, np.integer)):
        return f"{value:,d}{suffix}"
    return f"{value:,.{precision}f}{suffix}"


def format_value(value):
    if is_missing(value):
        return "n/a"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _best_key(record):
    esg, cont = record.esg_score, record.controversy_count
    # missing values go last explicitly; the comparator never sees NaN
    return (
        math.isnan(esg),
        0.0 if math.isnan(esg) else -esg,
        math.isnan(cont),
        0.0 if math.isnan(cont) else cont,
    )


def _controversy_key(record):
    cont = record.controversy_count
    return (math.isnan(cont), 0.0 if math.isnan(cont) else -cont)


def best_profile(records):
    """Highest ESG score, ties broken by fewer controversies; unscored last."""
    if not records:
        return None
    return sorted(records, key=_best_key)[0]


def most_controversial(records):
    # stable sort: first occurrence wins ties, first record when all counts are missing
    if not records:
        return None
    return sorted(records, key=_controversy_key)[0]


def pearson_correlation(xs, ys):
    """Pearson r, or NaN for fewer than two points, a constant axis or any missing value."""
    n = min(len(xs), len(ys))
    if n < 2:
        return math.nan
    x = np.asarray(xs[:n], dtype=float)
    y = np.asarray(ys[:n], dtype=float)
    if np.isnan(x).any() or np.isnan(y).any():
        return math.nan
    # equal values can still leave a rounding residue in the variance
    if np.ptp(x) == 0 or np.ptp(y) == 0:
        return math.nan
    vx = x - x.mean()
    vy = y - y.mean()
    num = float(np.sum(vx * vy))
    den = math.sqrt(float(np.sum(vx * vx)) * float(np.sum(vy * vy)))
    if den == 0:
        return math.nan
    return num / den


def esg_controversy_correlation(records):
    return pearson_correlation(
        [r.esg_score for r in records],
        [r.controversy_count for r in records],
    )


def build_insights(records, digits=2):
    if not records:
        return [NO_DATA_MESSAGE]

    top = best_profile(records)
    risky = most_controversial(records)
    corr = esg_controversy_correlation(records)

    return [
        f"Best overall profile (high ESG, low controversies): {top.name} — "
        f"ESG score {format_value(top.esg_score)}, "
        f"controversies {format_value(top.controversy_count)}.",
        f"Most controversial case in the filtered sample: {risky.name} — "
        f"{format_value(risky.controversy_count)} controversies "
        f"(ESG score {format_value(risky.esg_score)}).",
        f"Correlation between ESG score and controversies in the filtered sample: "
        f"{format_number(corr, digits)} (illustrative, small sample size).",
    ]


def build_sample_summary(records):
    if not records:
        return {
            "company_count": 0,
            "avg_esg": None,
            "total_controversies": None,
            "correlation": None,
        }

    esg = pd.Series([r.esg_score for r in records], dtype=float)
    cont = pd.Series([r.controversy_count for r in records], dtype=float)
    return {
        "company_count": len(records),
        "avg_esg": esg.mean() if esg.notna().any() else None,
        "total_controversies": int(cont.sum()) if cont.notna().any() else None,
        "correlation": esg_controversy_correlation(records),
    }
