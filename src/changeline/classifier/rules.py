"""Classification rules for configuration change descriptions.

Each rule is a tagged record: a predicate over the change description,
optional resolvers for values, icon and direction, and static fallbacks.
Rules are evaluated in table order and the first match wins, so specific
rules must come before generic ones. The final rule always matches.
"""

import re
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass

from changeline.classifier.units import normalize, parse_ops
from changeline.core.errors import RuleTableError, ValueExtractionError
from changeline.models.record import Direction

SUBNET_PATTERN = re.compile(
    r"Source ip/subnet (?:deleted|added). Ip/subnet - ([\d./]+)", re.IGNORECASE
)
MEMORY_PATTERN = re.compile(
    r"Memory Limit changed from ([\d.]+) ([a-zA-Z]+) to ([\d.]+) ([a-zA-Z]+)",
    re.IGNORECASE,
)
THROUGHPUT_PATTERN = re.compile(
    r"Database Throughput was changed from (\d+) ops/sec to (\d+) ops/sec",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Subject:
    """What a rule's icon and direction resolvers get to look at."""

    change: str
    from_value: int = 0
    to_value: int = 0

    @property
    def lowered(self) -> str:
        return self.change.lower()


Predicate = Callable[[str], bool]
ValuesResolver = Callable[[str], tuple[int, int]]
IconResolver = Callable[[Subject], str]
DirectionResolver = Callable[[Subject], Direction]


@dataclass(frozen=True)
class ClassificationRule:
    """One entry of the rule table."""

    title: str
    icon: str
    match: Predicate
    direction: Direction = Direction.NA
    extract_values: ValuesResolver | None = None
    resolve_icon: IconResolver | None = None
    resolve_direction: DirectionResolver | None = None
    catch_all: bool = False

    def matches(self, change: str) -> bool:
        return self.match(change)


class RuleTable(Sequence[ClassificationRule]):
    """Immutable, validated, ordered collection of classification rules.

    Raises:
        RuleTableError: If the table is empty, a rule lacks a title or icon,
            or the last rule is not the only catch-all
    """

    def __init__(self, rules: Sequence[ClassificationRule]) -> None:
        self._rules = tuple(rules)
        self._validate()

    def _validate(self) -> None:
        if not self._rules:
            raise RuleTableError("Rule table is empty")

        for position, rule in enumerate(self._rules):
            if not rule.title or not rule.icon:
                raise RuleTableError(
                    f"Rule at position {position} has no title or icon", rule=rule.title
                )
            if rule.catch_all and position != len(self._rules) - 1:
                raise RuleTableError(
                    f"Catch-all rule '{rule.title}' hides the rules after it", rule=rule.title
                )

        last = self._rules[-1]
        if not last.catch_all or not last.matches(""):
            raise RuleTableError("The last rule must be a catch-all", rule=last.title)

    def __getitem__(self, index):  # type: ignore[override]
        return self._rules[index]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[ClassificationRule]:
        return iter(self._rules)

    def __repr__(self) -> str:
        return f"RuleTable({len(self._rules)} rules)"


# Predicates


def contains(*needles: str, case_sensitive: bool = False) -> Predicate:
    """Match when any needle occurs in the description."""
    if case_sensitive:
        return lambda change: any(n in change for n in needles)
    lowered = [n.lower() for n in needles]
    return lambda change: any(n in change.lower() for n in lowered)


def starts_with(prefix: str) -> Predicate:
    """Match a case-insensitive description prefix."""
    prefix = prefix.lower()
    return lambda change: change.lower().startswith(prefix)


def equals(*texts: str) -> Predicate:
    """Match the exact description text."""
    return lambda change: change in texts


def search(pattern: re.Pattern[str]) -> Predicate:
    """Match when the pattern occurs anywhere in the description."""
    return lambda change: pattern.search(change) is not None


def always(change: str) -> bool:
    return True


# Direction resolvers


def pick(
    *cases: tuple[str, Direction],
    default: Direction = Direction.NA,
    case_sensitive: bool = False,
) -> DirectionResolver:
    """Resolve direction from the first (needle, direction) case present.

    Cases are checked in order; `default` applies when none is present.
    """

    def resolve(subject: Subject) -> Direction:
        text = subject.change if case_sensitive else subject.lowered
        for needle, direction in cases:
            if (needle if case_sensitive else needle.lower()) in text:
                return direction
        return default

    return resolve


def grew(subject: Subject) -> Direction:
    """Up when the value increased, down otherwise."""
    return Direction.UP if subject.to_value > subject.from_value else Direction.DOWN


def compared(subject: Subject) -> Direction:
    """Up, down or NA by comparing the extracted values."""
    if subject.to_value > subject.from_value:
        return Direction.UP
    if subject.from_value > subject.to_value:
        return Direction.DOWN
    return Direction.NA


# Value extractors


def memory_values(change: str) -> tuple[int, int]:
    """Extract memory limits in MB from a memory limit change."""
    found = MEMORY_PATTERN.search(change)
    if found is None:
        raise ValueExtractionError("Memory limit change not found", text=change)
    return normalize(found[1], found[2]), normalize(found[3], found[4])


def throughput_values(change: str) -> tuple[int, int]:
    """Extract ops/sec values from a throughput change."""
    found = THROUGHPUT_PATTERN.search(change)
    if found is None:
        raise ValueExtractionError("Throughput change not found", text=change)
    return parse_ops(found[1]), parse_ops(found[2])


def _activation_icon(subject: Subject) -> str:
    if subject.change == "DB activated":
        return "database-fill-check"
    return "database-fill-slash"


RULE_TABLE = RuleTable(
    [
        ClassificationRule(
            title="Network Change",
            icon="sign-intersection-side",
            match=search(SUBNET_PATTERN),
            resolve_direction=pick(("deleted", Direction.DOWN), default=Direction.UP),
        ),
        ClassificationRule(
            title="Memory Limit Change",
            icon="memory",
            match=search(MEMORY_PATTERN),
            extract_values=memory_values,
            resolve_direction=grew,
        ),
        ClassificationRule(
            title="Database Activation/Deletions",
            icon="database-fill",
            match=equals("DB activated", "DB deleted"),
            resolve_icon=_activation_icon,
            resolve_direction=pick(
                ("DB activated", Direction.UP), default=Direction.DOWN, case_sensitive=True
            ),
        ),
        ClassificationRule(
            title="Database Change",
            icon="database-fill-check",
            match=starts_with("db name changed"),
            direction=Direction.NA,
        ),
        ClassificationRule(
            title="Persistence Change",
            icon="shield-exclamation",
            match=contains("persistence"),
            resolve_direction=pick(("disabled", Direction.DOWN), default=Direction.UP),
        ),
        ClassificationRule(
            title="Clustering enabled",
            icon="hdd-rack-fill",
            match=contains("Cluster enabled", case_sensitive=True),
            direction=Direction.UP,
        ),
        ClassificationRule(
            title="Replication Change",
            icon="share-fill",
            match=contains("replication policy"),
            resolve_direction=pick(("to enabled", Direction.UP), default=Direction.DOWN),
        ),
        ClassificationRule(
            title="Sync Change",
            icon="symmetry-horizontal",
            match=contains("sync source"),
            resolve_direction=pick(("added", Direction.UP), default=Direction.DOWN),
        ),
        ClassificationRule(
            title="Alerts",
            icon="envelope",
            match=contains("sync lag is changed", "connections limit is changed", "alert is changed"),
            resolve_direction=pick(("active - true", Direction.UP), default=Direction.DOWN),
        ),
        ClassificationRule(
            title="Backups",
            icon="cloud-download",
            match=starts_with("backup"),
            resolve_direction=pick(("enabled", Direction.UP), ("disabled", Direction.DOWN)),
        ),
        ClassificationRule(
            title="Modules",
            icon="code-square",
            match=starts_with("module"),
            resolve_direction=pick(("loaded", Direction.UP)),
        ),
        ClassificationRule(
            title="Cluster Rules",
            icon="regex",
            match=contains("Cluster rule", case_sensitive=True),
            resolve_direction=pick(
                ("added", Direction.UP), default=Direction.DOWN, case_sensitive=True
            ),
        ),
        ClassificationRule(
            title="Throughput Change",
            icon="speedometer",
            match=search(THROUGHPUT_PATTERN),
            extract_values=throughput_values,
            resolve_direction=compared,
        ),
        ClassificationRule(
            title="Eviction",
            icon="door-open",
            match=starts_with("eviction policy changed"),
            direction=Direction.NA,
        ),
        ClassificationRule(
            title="Default Password Change",
            icon="lock-fill",
            match=starts_with("default redis user"),
            direction=Direction.NA,
        ),
        ClassificationRule(
            title="VPC Peering",
            icon="link-45deg",
            match=starts_with("vpc peering"),
            resolve_direction=pick(("delete", Direction.DOWN), ("initiated", Direction.UP)),
        ),
        ClassificationRule(
            title="Infrastructure",
            icon="cloud-plus",
            match=contains("added infrastructure"),
            direction=Direction.UP,
        ),
        ClassificationRule(
            title="API Key",
            icon="key",
            match=contains("api secret key"),
            resolve_direction=pick(("assigned", Direction.UP), default=Direction.DOWN),
        ),
        ClassificationRule(
            title="API Access",
            icon="key-fill",
            match=contains("api access"),
            resolve_direction=pick(("enabled", Direction.UP), default=Direction.DOWN),
        ),
        ClassificationRule(
            title="OSS Cluster API",
            icon="boxes",
            match=contains("oss cluster"),
            direction=Direction.UP,
        ),
        ClassificationRule(
            title="Other Change",
            icon="info-circle-fill",
            match=always,
            direction=Direction.NA,
            catch_all=True,
        ),
    ]
)
