"""
Set similarity measures used by project matching.
"""

from collections.abc import Set


def jaccard_similarity(first: Set[str], second: Set[str]) -> float:
    """
    Jaccard index |A ∩ B| / |A ∪ B| of two identifier sets.

    An empty union has nothing to match, so it scores 0.0 rather than
    being undefined.

    Args:
        first: First identifier set
        second: Second identifier set

    Returns:
        Similarity in [0, 1]
    """
    union_size = len(first | second)
    if union_size == 0:
        return 0.0
    return len(first & second) / union_size


def matched_identifiers(first: Set[str], second: Set[str]) -> frozenset[str]:
    """Identifiers present in both sets."""
    return frozenset(first & second)


def covers(available: Set[str], required: Set[str]) -> bool:
    """True if `required` is non-empty and fully contained in `available`."""
    return bool(required) and required <= available
