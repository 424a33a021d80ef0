"""Legend pagination for the rule table's display metadata."""

import math
from collections.abc import Sequence
from typing import NamedTuple

from changeline.classifier.rules import RULE_TABLE, ClassificationRule
from changeline.core.errors import ConfigurationError


class LegendEntry(NamedTuple):
    title: str
    icon: str


def paginate(rules: Sequence[ClassificationRule], row_width: int) -> list[list[LegendEntry]]:
    """Split rule titles and icons into rows of at most row_width entries.

    Rows follow rule table order. The last row is short when the rule
    count is not a multiple of row_width; it is not padded.

    Raises:
        ConfigurationError: If row_width is less than 1
    """
    if row_width < 1:
        raise ConfigurationError(
            f"Legend row width must be at least 1, got {row_width}", field="legend_row_width"
        )

    entries = [LegendEntry(rule.title, rule.icon) for rule in rules]
    rows = math.ceil(len(entries) / row_width)
    return [entries[n * row_width : (n + 1) * row_width] for n in range(rows)]


def legend(row_width: int = 5) -> list[list[LegendEntry]]:
    """Paginate the default rule table."""
    return paginate(RULE_TABLE, row_width)
