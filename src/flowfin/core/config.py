"""
Layered flowfin settings.

Three layers are merged, later ones winning:
    1. Built-in defaults (data directory, "Perso" label, two annual occurrences)
    2. A YAML or JSON settings file, usually ~/.flowfin/config.yaml
    3. FLOWFIN_SECTION__KEY environment variables

Usage:
    config = Config(config_file="~/.flowfin/config.yaml")
    config.get("ledger.default_label")
    settings = config.validated()
    settings.paths.resolved_ledger_file()
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .types import ConfigDict

if TYPE_CHECKING:
    from .config_schema import FlowfinConfig

ENV_PREFIX = "FLOWFIN_"
DEFAULT_DATA_DIR = os.path.join("~", ".flowfin-data")


def default_settings(data_dir: str) -> ConfigDict:
    """Settings used when neither the file nor the environment says otherwise.

    Ledger file and log directory are left unset; the schema derives them
    from ``data_dir``.
    """
    return {
        "paths": {"data_dir": os.path.expanduser(data_dir)},
        "ledger": {"default_label": "Perso"},
        "recurrence": {"annual_occurrences": 2},
        "logging": {"level": "WARNING"},
    }


def merge_into(target: ConfigDict, overrides: Mapping[str, Any]) -> None:
    """Merge ``overrides`` into ``target`` section by section."""
    for key, value in overrides.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merge_into(current, value)
        else:
            target[key] = value


def read_config_file(path: str) -> ConfigDict:
    """Parse a .yaml/.yml or .json settings file. Other suffixes are ignored."""
    suffix = os.path.splitext(path)[1].lower()
    if suffix not in (".yaml", ".yml", ".json"):
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f) if suffix == ".json" else yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot parse config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def env_overrides(prefix: str, environ: Mapping[str, str] | None = None) -> ConfigDict:
    """Nested settings built from ``<prefix>SECTION__KEY=value`` variables."""
    environ = os.environ if environ is None else environ
    overrides: ConfigDict = {}
    for name, value in environ.items():
        if not prefix or not name.startswith(prefix):
            continue
        *sections, key = name[len(prefix) :].lower().split("__")
        node = overrides
        for section in sections:
            node = node.setdefault(section, {})
        node[key] = value
    return overrides


class Config:
    """
    Merged flowfin settings.

    Env vars nest with a double underscore:
    FLOWFIN_LEDGER__DEFAULT_LABEL=Home -> config_data["ledger"]["default_label"] == "Home"
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = ENV_PREFIX,
        data_dir: str | None = None,
        defaults: ConfigDict | None = None,
    ):
        """
        Args:
            config_file: YAML or JSON settings file. A missing file is skipped.
            env_prefix: Prefix of overriding environment variables.
            data_dir: Base directory for the ledger and logs. Defaults to ~/.flowfin-data.
            defaults: Extra defaults merged over the built-in ones.
        """
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.env_prefix = env_prefix or ""

        self.config_data = default_settings(data_dir or DEFAULT_DATA_DIR)
        if defaults:
            merge_into(self.config_data, defaults)
        if self.config_file and os.path.exists(self.config_file):
            merge_into(self.config_data, read_config_file(self.config_file))
        merge_into(self.config_data, env_overrides(self.env_prefix))

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Look up a value by dotted path, e.g. "recurrence.annual_occurrences".

        Returns ``default`` when any part of the path is missing.
        """
        node: Any = self.config_data
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def validated(self) -> FlowfinConfig:
        """Return the merged settings as a validated ``FlowfinConfig``.

        Raises:
            ConfigurationError: If any section fails validation.
        """
        from .config_schema import FlowfinConfig

        try:
            return FlowfinConfig.model_validate(self.config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
