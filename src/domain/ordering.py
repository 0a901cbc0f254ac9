"""Ordering rules shared by the server and the client manager."""

from collections import Counter
from collections.abc import Sequence
from uuid import UUID

from core.exceptions import InvalidReorderError


def validate_permutation(ordered_ids: Sequence[UUID], current_ids: Sequence[UUID]) -> None:
    """Ensure ``ordered_ids`` lists every current id exactly once.

    Raises:
        InvalidReorderError: On missing, foreign, or duplicated ids.
    """
    current = set(current_ids)
    submitted = set(ordered_ids)

    missing = [str(i) for i in current_ids if i not in submitted]
    unknown = [str(i) for i in ordered_ids if i not in current]
    duplicates = [str(i) for i, count in Counter(ordered_ids).items() if count > 1]

    if missing or unknown or duplicates:
        raise InvalidReorderError(
            "Order must list each of your payment methods exactly once",
            details={
                "missing": missing,
                "unknown": unknown,
                "duplicates": duplicates,
            },
        )


def ids_from_positions(entries: Sequence[tuple[UUID, int]]) -> list[UUID]:
    """Turn ``(id, sort_order)`` pairs into an id sequence.

    The positions must be exactly ``0..n-1``.

    Raises:
        InvalidReorderError: If positions are duplicated, negative, or gapped.
    """
    positions = sorted(position for _, position in entries)
    if positions != list(range(len(entries))):
        raise InvalidReorderError(
            "Sort orders must be 0..n-1 with no gaps or duplicates",
            details={"sort_orders": positions},
        )
    return [method_id for method_id, _ in sorted(entries, key=lambda e: e[1])]


def swap_adjacent(ids: Sequence[UUID], index: int, offset: int) -> list[UUID] | None:
    """Swap ``ids[index]`` with ``ids[index + offset]``.

    Returns None when the neighbour falls outside the sequence, meaning the
    move is a no-op at that boundary.

    Raises:
        InvalidReorderError: If ``index`` itself is out of range.
    """
    if not 0 <= index < len(ids):
        raise InvalidReorderError(
            f"Index {index} is out of range",
            details={"index": index, "count": len(ids)},
        )
    neighbour = index + offset
    if not 0 <= neighbour < len(ids):
        return None
    swapped = list(ids)
    swapped[index], swapped[neighbour] = swapped[neighbour], swapped[index]
    return swapped
