"""Shared test fixtures for flowfin."""

import os
import sys
import tempfile

import pytest
from loguru import logger


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "ledger_file": os.path.join(tmp_dir, "data", "ledger.yaml"),
        },
        "ledger": {"default_label": "Maison"},
        "recurrence": {"annual_occurrences": 3},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture(autouse=True)
def _restore_loguru():
    """CLI commands reconfigure loguru; put the default sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
