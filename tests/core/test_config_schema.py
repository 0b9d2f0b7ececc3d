"""Tests for flowfin.core.config_schema."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from flowfin.core.config_schema import FlowfinConfig, LoggingConfig, PathsConfig


@pytest.mark.smoke
class TestConfigSchema:
    def test_valid_config(self):
        cfg = FlowfinConfig.model_validate(
            {
                "paths": {"data_dir": "/tmp/test-data", "ledger_file": "/tmp/test-data/books.yaml"},
                "ledger": {"default_label": "  Work "},
                "recurrence": {"annual_occurrences": 5},
                "logging": {"level": "debug", "file": "/tmp/flowfin.log"},
            }
        )
        assert cfg.paths.data_dir == Path("/tmp/test-data")
        assert cfg.paths.resolved_ledger_file() == Path("/tmp/test-data/books.yaml")
        assert cfg.ledger.default_label == "Work"
        assert cfg.recurrence.annual_occurrences == 5
        assert cfg.logging.level == "DEBUG"

    def test_defaults_populate(self):
        cfg = FlowfinConfig()
        assert cfg.ledger.default_label == "Perso"
        assert cfg.recurrence.annual_occurrences == 2
        assert cfg.logging.level == "WARNING"
        assert cfg.logging.file is None

    def test_path_expansion(self):
        cfg = FlowfinConfig.model_validate({"paths": {"data_dir": "~/.flowfin-data"}})
        assert cfg.paths.data_dir.is_absolute()
        assert "~" not in str(cfg.paths.data_dir)

    def test_ledger_file_falls_back_to_data_dir(self):
        paths = PathsConfig(data_dir="/srv/flowfin")
        assert paths.resolved_ledger_file() == Path("/srv/flowfin/ledger.yaml")
        assert paths.resolved_log_dir() == Path("/srv/flowfin/logs")

    def test_log_file_resolution(self):
        assert FlowfinConfig().resolved_log_file() is None

        relative = FlowfinConfig.model_validate(
            {"paths": {"data_dir": "/srv/flowfin"}, "logging": {"file": "flowfin.log"}}
        )
        assert relative.resolved_log_file() == Path("/srv/flowfin/logs/flowfin.log")

        in_log_dir = FlowfinConfig.model_validate(
            {"paths": {"data_dir": "/srv/flowfin", "log_dir": "/var/log/ff"}, "logging": {"file": "a.log"}}
        )
        assert in_log_dir.resolved_log_file() == Path("/var/log/ff/a.log")

        absolute = FlowfinConfig.model_validate({"logging": {"file": "/tmp/flowfin.log"}})
        assert absolute.resolved_log_file() == Path("/tmp/flowfin.log")

    def test_blank_label_rejected(self):
        with pytest.raises(ValidationError, match="default_label"):
            FlowfinConfig.model_validate({"ledger": {"default_label": "   "}})

    def test_zero_occurrences_rejected(self):
        with pytest.raises(ValidationError, match="annual_occurrences"):
            FlowfinConfig.model_validate({"recurrence": {"annual_occurrences": 0}})

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError, match="unknown log level"):
            LoggingConfig(level="loud")

    def test_extra_sections_allowed(self):
        cfg = FlowfinConfig.model_validate({"custom_section": {"foo": "bar"}})
        assert cfg.custom_section == {"foo": "bar"}
