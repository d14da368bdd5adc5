"""Best-effort value coercion and field extraction for loosely shaped sources."""

import math
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

_MISSING = object()


def to_number(value: Any) -> float | None:
    """
    Coerce a loosely typed value into a finite float.

    Percent signs are stripped, so ``"42%"`` becomes ``42.0``. Blank text,
    unparseable text, booleans, NaN and infinities all become None.
    Never raises.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        raw: Any = value
    else:
        raw = str(value).replace("%", "").strip()
        # float() accepts digit separators; leaderboard text never means that
        if not raw or "_" in raw:
            return None

    try:
        number = float(raw)
    except (ValueError, OverflowError):
        return None

    return number if math.isfinite(number) else None


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def resolve_path(data: Any, path: str) -> Any:
    """
    Follow a dotted path through nested mappings.

    Returns the sentinel ``_MISSING`` when any step is absent or the
    intermediate value is not a mapping.
    """
    current = data
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def first_present(
    data: Any,
    candidates: Sequence[str],
    default: Any = None,
    skip_empty: bool = False,
) -> Any:
    """
    Return the first candidate key or dotted path that resolves.

    Args:
        data: Mapping to search (anything else resolves nothing)
        candidates: Keys or dotted paths, in priority order
        default: Value returned when no candidate resolves
        skip_empty: Also skip blank strings

    Returns:
        The first resolved value, or ``default``
    """
    for candidate in candidates:
        value = resolve_path(data, candidate)
        if value is _MISSING or value is None:
            continue
        if skip_empty and isinstance(value, str) and not value.strip():
            continue
        return value
    return default
