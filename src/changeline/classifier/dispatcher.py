"""Rule dispatcher turning raw change records into classified events."""

from collections import defaultdict
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from changeline.classifier.rules import RULE_TABLE, ClassificationRule, Subject
from changeline.core.errors import RuleTableError, ValueExtractionError
from changeline.core.logging import warning
from changeline.models.record import ClassifiedEvent, Direction, RawChangeRecord


def classify(
    record: RawChangeRecord,
    rules: Iterable[ClassificationRule] = RULE_TABLE,
) -> ClassifiedEvent:
    """Classify a change record with the first matching rule.

    The result depends only on the record's description, so records can be
    classified in any order or concurrently.

    Args:
        record: Raw change record
        rules: Ordered rules; the default table always matches

    Returns:
        New ClassifiedEvent for the record

    Raises:
        RuleTableError: If no rule matches (only possible for tables
            without a catch-all)
    """
    for rule in rules:
        if rule.matches(record.change):
            return _apply(rule, record)

    raise RuleTableError(f"No rule matched change: {record.change!r}")


def _apply(rule: ClassificationRule, record: RawChangeRecord) -> ClassifiedEvent:
    subject = Subject(change=record.change)
    degraded = False

    if rule.extract_values is not None:
        try:
            from_value, to_value = rule.extract_values(record.change)
        except ValueExtractionError as e:
            warning(
                f"Unable to extract values from change: {record.change}",
                rule=rule.title,
                entity=record.entity,
                error=str(e),
            )
            degraded = True
        else:
            subject = Subject(change=record.change, from_value=from_value, to_value=to_value)

    icon = rule.resolve_icon(subject) if rule.resolve_icon else rule.icon

    if degraded:
        direction = Direction.NA
    elif rule.resolve_direction is not None:
        direction = rule.resolve_direction(subject)
    else:
        direction = rule.direction

    return ClassifiedEvent(
        timestamp=record.timestamp,
        entity=record.entity,
        change=record.change,
        title=rule.title,
        icon=icon,
        direction=direction,
        from_value=subject.from_value,
        to_value=subject.to_value,
    )


def classify_all(
    records: Iterable[RawChangeRecord],
    rules: Iterable[ClassificationRule] = RULE_TABLE,
    workers: int = 1,
) -> list[ClassifiedEvent]:
    """Classify a batch of records, preserving input order.

    Args:
        records: Raw change records
        rules: Ordered rules
        workers: Number of threads; 1 classifies inline

    Returns:
        Classified events in the same order as the records
    """
    rules = tuple(rules)
    if workers <= 1:
        return [classify(record, rules) for record in records]

    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(lambda record: classify(record, rules), records))


def group_by_entity(events: Iterable[ClassifiedEvent]) -> dict[str, list[ClassifiedEvent]]:
    """Group classified events by the entity they apply to."""
    grouped: dict[str, list[ClassifiedEvent]] = defaultdict(list)
    for event in events:
        grouped[event.entity].append(event)
    return dict(grouped)
