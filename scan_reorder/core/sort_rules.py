"""
sort_rules.py - Natural Sorting Rules

Orders filenames by alternating text / number runs, so "page2" comes before
"page10":

- Names are split into chunks of ASCII digits and everything else
- Two digit chunks compare by value ("010" == "10")
- Anything else compares case-insensitively as text
- If every compared chunk is equal, the name with fewer chunks comes first
- Empty names come before everything else

Ties keep their input order, which keeps the sort total and idempotent.
"""

import re
from functools import cmp_to_key
from typing import List, Optional, Sequence

from .models_fs import FileEntry

_CHUNK_RE = re.compile(r"[0-9]+|[^0-9]+")
_DIGITS_RE = re.compile(r"[0-9]+")


def split_chunks(name: str) -> List[str]:
    """
    Split a name into maximal digit / non-digit runs

    Example:
        split_chunks("img10b") -> ["img", "10", "b"]
    """
    return _CHUNK_RE.findall(name or "")


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_names(a: Optional[str], b: Optional[str]) -> int:
    """
    Compare two filenames naturally

    Args:
        a: First name (None is treated as empty)
        b: Second name

    Returns:
        Negative, zero or positive like a classic cmp()
    """
    if not a or not b:
        # Empty names sort first; two empty names tie
        return _cmp(bool(a), bool(b))

    chunks_a = split_chunks(a)
    chunks_b = split_chunks(b)

    for ca, cb in zip(chunks_a, chunks_b):
        if _DIGITS_RE.fullmatch(ca) and _DIGITS_RE.fullmatch(cb):
            result = _cmp(int(ca), int(cb))
        else:
            result = _cmp(ca.casefold(), cb.casefold())
        if result:
            return result

    return _cmp(len(chunks_a), len(chunks_b))


natural_sort_key = cmp_to_key(compare_names)


def sort_names(names: Sequence[str], reverse: bool = False) -> List[str]:
    """Sort plain strings naturally (new list)"""
    return sorted(names, key=natural_sort_key, reverse=reverse)


def sort_entries(entries: Sequence[FileEntry], reverse: bool = False) -> List[FileEntry]:
    """
    Sort file entries naturally by name

    Args:
        entries: File entries
        reverse: Whether to sort in reverse

    Returns:
        Sorted entries (new list, same length and elements)
    """
    return sorted(entries, key=lambda e: natural_sort_key(e.name), reverse=reverse)
