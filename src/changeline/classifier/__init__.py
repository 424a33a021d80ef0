"""Classification of configuration change descriptions.

Provides:
- RULE_TABLE: the ordered, first-match-wins rule table
- classify: turn a RawChangeRecord into a ClassifiedEvent
- normalize: size normalization to MB
"""

from changeline.classifier.dispatcher import classify, classify_all, group_by_entity
from changeline.classifier.rules import RULE_TABLE, ClassificationRule, RuleTable, Subject
from changeline.classifier.units import normalize, parse_ops

__all__ = [
    "RULE_TABLE",
    "ClassificationRule",
    "RuleTable",
    "Subject",
    "classify",
    "classify_all",
    "group_by_entity",
    "normalize",
    "parse_ops",
]
