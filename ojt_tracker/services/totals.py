"""Per-method hour totals."""

from typing import Dict, Iterable, List, Optional

from ojt_tracker.utils.constants import METHODS

ENTRY_STATUSES = ["all", "verified", "unverified"]


def empty_totals() -> Dict[str, float]:
    return {method: 0.0 for method in METHODS}


def compute_method_totals(entries: Iterable) -> Dict[str, float]:
    """
    Sum hours per method.

    Every method is present in the result, zero when no entry uses it.
    Values are not rounded; one decimal is a display convention only.

    Args:
        entries: Objects with `method` and `hours` attributes

    Returns:
        Mapping of method code to summed hours, in display column order
    """
    totals = empty_totals()
    for entry in entries:
        if entry.method in totals:
            totals[entry.method] += entry.hours
    return totals


def filter_by_status(entries: Iterable, status: Optional[str]) -> List:
    """Keep all, only verified, or only unverified entries."""
    if status is None or status == "all":
        return list(entries)
    if status == "verified":
        return [entry for entry in entries if entry.verified]
    if status == "unverified":
        return [entry for entry in entries if not entry.verified]
    raise ValueError(f"Unknown entry status: {status}")


def format_hours(hours: float) -> str:
    return f"{hours:.1f}"
