"""
Formatting helpers for CLI output.

Turns category statistics into table rows or JSON payloads. Kept free of
any printing so the command handlers decide where output goes.
"""

from collections import Counter
from typing import Any, Dict, List, Tuple

from ..sorter import Category


def format_category_counts(counts: Counter) -> str:
    """``constant=1, public_instance_method=3`` in category order."""
    parts = [
        f"{category.value}={counts[category]}" for category in Category if counts.get(category)
    ]
    return ", ".join(parts) if parts else "(empty)"


def stats_rows(statistics: Dict[str, Counter]) -> List[Tuple[str, int, str]]:
    """One row per container: qualified name, member count, category breakdown."""
    return [
        (name, sum(counts.values()), format_category_counts(counts))
        for name, counts in statistics.items()
    ]


def stats_payload(path: str, statistics: Dict[str, Counter]) -> Dict[str, Any]:
    """JSON payload for ``sigsort stats --format json``."""
    return {
        "path": path,
        "declarations": {
            name: {category.value: counts[category] for category in Category if counts.get(category)}
            for name, counts in statistics.items()
        },
    }
