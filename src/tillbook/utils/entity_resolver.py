"""Utility for resolving customer and supplier names to IDs."""

from typing import Iterable, Protocol


class _Named(Protocol):
    id: int
    name: str


def resolve_entity(entities: Iterable[_Named], value: str | int, kind: str = "customer") -> int:
    """Resolve a customer or supplier name or ID to its ID.

    Args:
        entities: Customers or suppliers to search
        value: Name (str) or ID (int or string representation of int)
        kind: "customer" or "supplier", used in error messages

    Returns:
        Entity ID

    Raises:
        ValueError: If nothing matches, or a name matches more than one entity
    """
    entities = list(entities)

    # Try to parse as integer (handles string IDs like "1")
    try:
        entity_id = int(value)
    except (ValueError, TypeError):
        entity_id = None

    if entity_id is not None:
        if any(entity.id == entity_id for entity in entities):
            return entity_id
        raise ValueError(f"{kind.capitalize()} ID {entity_id} not found")

    matches = [entity.id for entity in entities if entity.name.lower() == str(value).strip().lower()]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise ValueError(f"More than one {kind} is named '{value}'; use the ID instead")
    raise ValueError(f"{kind.capitalize()} '{value}' not found")
