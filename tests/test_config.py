"""Tests for report configuration loading and overrides."""

from pathlib import Path

import pytest

from changeline.core.config import Granularity, ReportConfig, load_config
from changeline.core.errors import ConfigurationError


def test_defaults():
    config = load_config(None)

    assert config.granularity == Granularity.DAILY
    assert config.legend_row_width == 5
    assert config.title == ""
    assert config.workers == 1
    assert config.subscription_label == "Subscription"


def test_load_yaml(tmp_path: Path):
    path = tmp_path / "report.yml"
    path.write_text(
        "granularity: hourly\nlegend_row_width: 4\ntitle: Weekly review\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.granularity == Granularity.HOURLY
    assert config.legend_row_width == 4
    assert config.title == "Weekly review"


def test_empty_yaml_gives_defaults(tmp_path: Path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == ReportConfig()


@pytest.mark.parametrize(
    "content, field",
    [
        ("granularity: weekly\n", "granularity"),
        ("legend_row_width: 0\n", "legend_row_width"),
        ("workers: 0\n", "workers"),
        ("colour: blue\n", "colour"),
    ],
)
def test_invalid_values_fail_fast(tmp_path: Path, content: str, field: str):
    path = tmp_path / "bad.yml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError) as exc_info:
        load_config(path)

    assert exc_info.value.error.context == {"field": field}


def test_missing_file(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.yml")


def test_non_mapping_yaml(tmp_path: Path):
    path = tmp_path / "list.yml"
    path.write_text("- daily\n- hourly\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(path)


def test_overrides_skip_none_and_validate():
    base = ReportConfig(title="Base")

    updated = base.with_overrides(title=None, granularity="hourly", legend_row_width=3)

    assert updated.title == "Base"
    assert updated.granularity == Granularity.HOURLY
    assert updated.legend_row_width == 3

    with pytest.raises(ConfigurationError):
        base.with_overrides(legend_row_width=-1)
