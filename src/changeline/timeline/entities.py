"""Entity list for timeline columns."""

from collections.abc import Iterable


def entities(entity_ids: Iterable[str]) -> list[str]:
    """Sorted, deduplicated entity identifiers.

    Accepts any iterable of identifiers, including a mapping keyed by
    entity (as produced by group_by_entity).
    """
    return sorted(set(entity_ids))
