"""Filtering and truncation of a user's exercise history."""

import re
from datetime import date
from typing import List, Optional, Sequence, Union

from schemas.exercise import ExerciseEntry

ASCII_DIGITS = re.compile(r"^[0-9]+$")


def parse_limit(raw: Union[str, int, None]) -> Optional[int]:
    """Turn a raw ``limit`` query value into a positive int, or None for no limit.

    Absent, empty, zero, negative and non-numeric values all mean no truncation.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    text = str(raw).strip()
    if not ASCII_DIGITS.match(text):
        return None
    limit = int(text)
    return limit if limit > 0 else None


def filter_exercise_log(
    entries: Sequence[ExerciseEntry],
    date_from: date,
    date_to: date,
    limit: Optional[int] = None
) -> List[ExerciseEntry]:
    """Return entries dated within ``[date_from, date_to]``, keeping their order.

    Args:
        entries: Exercise history in storage order (not assumed sorted)
        date_from: Inclusive lower bound
        date_to: Inclusive upper bound
        limit: Keep only the first ``limit`` matches when a positive int

    Returns:
        A new list; ``entries`` is left untouched
    """
    max_items = limit if isinstance(limit, int) and not isinstance(limit, bool) and limit > 0 else None

    results: List[ExerciseEntry] = []
    for entry in entries:
        if max_items is not None and len(results) >= max_items:
            break
        if date_from <= entry.date <= date_to:
            results.append(entry)
    return results
