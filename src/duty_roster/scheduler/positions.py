"""Ordering of a pair inside a slot."""

from ..models import Person
from .models import AssignmentMatrix, Slot


def resolve_positions(a: Person, b: Person) -> tuple[Person, Person]:
    """Decide who takes the primary and who the secondary position.

    Rules:
    - mixed pair: the primary-population person takes the primary position
    - same population: the more senior person (lower rank) takes it

    Args:
        a: First person of the pair
        b: Second person of the pair

    Returns:
        Tuple of (primary, secondary)

    Raises:
        ValueError: If both arguments are the same person
    """
    if a.name == b.name:
        raise ValueError(f"A slot needs two different people, got '{a.name}' twice")

    if a.population != b.population:
        return (a, b) if a.is_primary else (b, a)
    return (a, b) if a.rank <= b.rank else (b, a)


def order_slot(slot: Slot) -> Slot:
    """Return the slot with its occupants in resolved order.

    Returns the same object when the order is already correct.
    """
    primary, secondary = resolve_positions(slot.primary, slot.secondary)
    if primary is slot.primary:
        return slot
    return Slot(day=slot.day, room=slot.room, primary=primary, secondary=secondary)


def apply_positions(matrix: AssignmentMatrix) -> int:
    """Re-order every slot of a matrix in place.

    Returns:
        Number of slots whose order changed
    """
    changed = 0
    for slot in list(matrix):
        ordered = order_slot(slot)
        if ordered is not slot:
            matrix.update(ordered)
            changed += 1
    return changed
