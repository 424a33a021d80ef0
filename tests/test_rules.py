"""Tests for the classification rule table."""

import pytest

from changeline.classifier.rules import (
    RULE_TABLE,
    ClassificationRule,
    RuleTable,
    always,
    contains,
    memory_values,
    throughput_values,
)
from changeline.core.errors import RuleTableError, ValueExtractionError


def _catch_all() -> ClassificationRule:
    return ClassificationRule(title="Other", icon="dot", match=always, catch_all=True)


def test_default_table_ends_with_catch_all():
    last = RULE_TABLE[-1]
    assert last.catch_all
    assert last.title == "Other Change"
    assert last.icon == "info-circle-fill"
    assert sum(1 for rule in RULE_TABLE if rule.catch_all) == 1


def test_default_table_has_title_and_icon_on_every_rule():
    assert len(RULE_TABLE) == 21
    for rule in RULE_TABLE:
        assert rule.title
        assert rule.icon


def test_default_table_titles_are_unique():
    titles = [rule.title for rule in RULE_TABLE]
    assert len(titles) == len(set(titles))


def test_empty_table_is_rejected():
    with pytest.raises(RuleTableError):
        RuleTable([])


def test_table_without_catch_all_is_rejected():
    with pytest.raises(RuleTableError) as exc_info:
        RuleTable([ClassificationRule(title="Backups", icon="cloud", match=contains("backup"))])

    assert "catch-all" in str(exc_info.value)


def test_catch_all_before_other_rules_is_rejected():
    """A catch-all in the middle would make the rules after it unreachable."""
    with pytest.raises(RuleTableError):
        RuleTable(
            [
                _catch_all(),
                ClassificationRule(title="Backups", icon="cloud", match=contains("backup")),
                _catch_all(),
            ]
        )


def test_rule_without_icon_is_rejected():
    with pytest.raises(RuleTableError):
        RuleTable([ClassificationRule(title="Backups", icon="", match=contains("backup")), _catch_all()])


def test_table_is_an_ordered_sequence():
    table = RuleTable([ClassificationRule(title="A", icon="a", match=contains("a")), _catch_all()])

    assert len(table) == 2
    assert [rule.title for rule in table] == ["A", "Other"]
    assert table[0].title == "A"


def test_contains_is_case_insensitive_by_default():
    predicate = contains("sync source")
    assert predicate("Sync Source added")
    assert not predicate("sync target added")


def test_contains_case_sensitive():
    predicate = contains("Cluster rule", case_sensitive=True)
    assert predicate("Cluster rule added")
    assert not predicate("cluster rule added")


def test_memory_values_normalize_units():
    assert memory_values("Memory Limit changed from 500 MB to 1.5 GB") == (500, 1500)


def test_memory_values_raise_on_bad_magnitude():
    with pytest.raises(ValueExtractionError):
        memory_values("Memory Limit changed from 1.2.3 GB to 2 GB")


def test_throughput_values():
    assert throughput_values(
        "Database Throughput was changed from 1000 ops/sec to 25000 ops/sec"
    ) == (1000, 25000)


def test_throughput_values_raise_when_pattern_missing():
    with pytest.raises(ValueExtractionError):
        throughput_values("Database Throughput was changed")
