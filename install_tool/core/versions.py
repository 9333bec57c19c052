"""
Natural ordering for version strings.

Versions are compared segment by segment on ``.``. Inside a segment, runs of
digits compare numerically and the text between them compares as strings, so
``9 < 10``, ``1.9 < 1.10`` and ``8u382 < 11``. A version that is a strict
prefix of another sorts first (``1.2 < 1.2.1``).
"""

import re
from typing import Iterable, List, Optional, Tuple

_RUN = re.compile(r"(\D*)(\d*)")

SegmentKey = Tuple[Tuple[str, int], ...]


def _segment_key(segment: str) -> SegmentKey:
    parts = []
    for text, digits in _RUN.findall(segment):
        if not text and not digits:
            continue
        # A bare suffix such as the "a" in "1a" sorts before "1a0".
        parts.append((text, int(digits) if digits else -1))
    return tuple(parts)


def version_key(version: str) -> Tuple[SegmentKey, ...]:
    """Return a sort key implementing natural version ordering."""
    return tuple(_segment_key(segment) for segment in version.strip().split("."))


def compare_versions(a: str, b: str) -> int:
    """Compare two versions, returning -1, 0 or 1."""
    key_a, key_b = version_key(a), version_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def _sort_key(version: str):
    # Raw string breaks ties between equivalent spellings ("1.01" and "1.1").
    return version_key(version), version


def sort_versions(versions: Iterable[str]) -> List[str]:
    """Return the versions in ascending natural order."""
    return sorted(versions, key=_sort_key)


def max_version(versions: Iterable[str]) -> Optional[str]:
    """Return the highest version, or None if there are none."""
    versions = list(versions)
    if not versions:
        return None
    return max(versions, key=_sort_key)
