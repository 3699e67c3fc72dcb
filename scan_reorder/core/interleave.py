"""
interleave.py - Physical Page Order Interleaving

Remaps a naturally sorted scan sequence into the page order produced by a
double-sided scan of reversed sheets. The schedule depends only on the
sequence length:

    take the last item, then walking backwards skip 2 / take 2 until the
    start is reached, then append every item not taken in ascending order.

Example for 10 items: [0..9] -> [9, 6, 5, 2, 1, 0, 3, 4, 7, 8]
"""

from typing import List, Sequence, TypeVar

T = TypeVar("T")

SKIP = 2
TAKE = 2


def interleave_indices(n: int) -> List[int]:
    """
    Compute the interleaving schedule for a sequence of length n

    Args:
        n: Sequence length

    Returns:
        Permutation of range(n) in output order
    """
    if n <= 0:
        return []

    order = [n - 1]
    consumed = {n - 1}

    i = n - 2
    skip_count = 0
    while i >= 0:
        if skip_count < SKIP:
            skip_count += 1
            i -= 1
            continue

        taken = 0
        while taken < TAKE and i >= 0:
            order.append(i)
            consumed.add(i)
            i -= 1
            taken += 1
        skip_count = 0

    # Leftovers in original order
    order.extend(idx for idx in range(n) if idx not in consumed)
    return order


def interleave(items: Sequence[T]) -> List[T]:
    """
    Reorder a sorted sequence into physical page order

    Args:
        items: Naturally sorted items

    Returns:
        New list holding the same items, reordered
    """
    return [items[idx] for idx in interleave_indices(len(items))]
