### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Link Reordering -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Link Reordering

Pure functions that turn a drag-and-drop result into order values.
Position in the new sequence is authoritative; old order values are
only used to keep a category tab inside the slots it already owns.

Example (category tab "hotel" dragged to [C, A]):
    before: A(hotel, 1)  B(activities, 2)  C(hotel, 3)
    after:  C(hotel, 1)  B(activities, 2)  A(hotel, 3)
"""

from typing import Iterable, Optional, Sequence

from dashboard.schemas.entities import Link


def assign_orders(sequence: Sequence[Link]) -> list[Link]:
    """Copy each link with order = 1-based position in the sequence"""
    return [
        link if link.order == position else link.model_copy(update={"order": position})
        for position, link in enumerate(sequence, start=1)
    ]


def move_item(sequence: Sequence[Link], active_id: str, over_id: str) -> list[Link]:
    """
    Move the dragged link to the position of the link it was dropped on.

    Args:
        sequence: Links as currently displayed
        active_id: Id of the dragged link
        over_id: Id of the link it was dropped over

    Returns:
        New sequence (unchanged copy if the ids are equal)

    Raises:
        ValueError: If either id is not in the sequence
    """
    ids = [link.id for link in sequence]
    for link_id in (active_id, over_id):
        if link_id not in ids:
            raise ValueError(f"Link '{link_id}' is not in the current view")

    moved = list(sequence)
    if active_id == over_id:
        return moved

    old_index = ids.index(active_id)
    new_index = ids.index(over_id)
    moved.insert(new_index, moved.pop(old_index))
    return moved


def _check_permutation(view: Iterable[Link], sequence: Sequence[Link]) -> None:
    expected = [link.id for link in view]
    given = [link.id for link in sequence]
    if len(given) != len(set(given)):
        raise ValueError("Reorder sequence contains duplicate links")
    if set(given) != set(expected):
        missing = sorted(set(expected) - set(given))
        unknown = sorted(set(given) - set(expected))
        problems = []
        if missing:
            problems.append(f"missing {', '.join(missing)}")
        if unknown:
            problems.append(f"not in view {', '.join(unknown)}")
        raise ValueError(f"Reorder sequence does not match the current view ({'; '.join(problems)})")


def reorder_collection(
    collection: Sequence[Link],
    sequence: Sequence[Link],
    category: Optional[str] = None,
) -> list[Link]:
    """
    Apply a new sequence to a link collection.

    Args:
        collection: Every link of the hotel
        sequence: The dragged view in its new order
        category: Tab the drag happened in (None = all links)

    Returns:
        The full collection with new order values, sorted by order

    Raises:
        ValueError: If sequence is not a permutation of the targeted view
    """
    if category is None:
        _check_permutation(collection, sequence)
        return assign_orders(sequence)

    view = [link for link in collection if link.category == category]
    _check_permutation(view, sequence)

    # The tab keeps the order slots it already occupies
    slots = sorted(link.order for link in view)
    new_orders = {link.id: slot for link, slot in zip(sequence, slots)}

    reordered = [
        link.model_copy(update={"order": new_orders[link.id]})
        if link.id in new_orders and link.order != new_orders[link.id]
        else link
        for link in collection
    ]
    return sorted(reordered, key=lambda link: link.order)


def changed_orders(before: Iterable[Link], after: Iterable[Link]) -> dict[str, int]:
    """Map link id -> new order for every link whose order changed"""
    old_orders = {link.id: link.order for link in before}
    return {
        link.id: link.order
        for link in after
        if old_orders.get(link.id) != link.order
    }
