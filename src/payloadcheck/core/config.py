"""3-layer configuration system for payloadcheck.

Loads and merges configuration from:
1. Default settings (built-in)
2. Project config (.payloadcheck/config.yaml, or an explicit --config file)
3. CLI parameters (override)
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Optional

import yaml

from ..fetchers.base import DEFAULT_USER_AGENT
from .scoring import DEFAULT_WEIGHTS, PASS_THRESHOLD, ScoringPolicy

CONFIG_DIR = ".payloadcheck"
CONFIG_FILE = "config.yaml"

DEFAULT_CONFIG: dict = {
    "fetch": {
        "fetcher": "http",
        "timeout_seconds": 10,
        "user_agent": DEFAULT_USER_AGENT,
        "follow_redirects": True,
        "retry_attempts": 1,
        "retry_delay_seconds": 1,
    },
    "batch": {
        "concurrency": 1,
    },
    "scoring": {
        "pass_threshold": PASS_THRESHOLD,
        "weights": dict(DEFAULT_WEIGHTS),
    },
    "output": {
        "format": "text",
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = {}
    for key in base:
        result[key] = base[key]
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def load_config_file(config_path: Path) -> dict:
    """Load a YAML config file. Missing or empty files yield {}."""
    if not config_path.exists():
        return {}
    content = config_path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
    data = yaml.safe_load(content) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return data


def load_project_config(project_path: Path) -> dict:
    """Load project configuration from .payloadcheck/config.yaml."""
    return load_config_file(project_path / CONFIG_DIR / CONFIG_FILE)


def get_effective_config(
    project_path: Optional[Path] = None,
    config_file: Optional[Path] = None,
    cli_overrides: Optional[dict] = None,
) -> dict:
    """Get the fully resolved configuration for a check run."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    file_config = (
        load_config_file(config_file)
        if config_file is not None
        else load_project_config(project_path or Path.cwd())
    )
    if file_config:
        config = deep_merge(config, file_config)

    if cli_overrides:
        config = deep_merge(config, cli_overrides)

    return config


def build_policy(config: dict) -> ScoringPolicy:
    """Build the immutable scoring policy from the `scoring` section."""
    scoring = config.get("scoring") or {}
    return ScoringPolicy(
        weights=dict(scoring.get("weights") or DEFAULT_WEIGHTS),
        pass_threshold=float(scoring.get("pass_threshold", PASS_THRESHOLD)),
    )


def initialize_project(project_path: Path) -> Path:
    """Write a starter .payloadcheck/config.yaml if none exists."""
    config_dir = project_path / CONFIG_DIR
    config_dir.mkdir(parents=True, exist_ok=True)

    config_path = config_dir / CONFIG_FILE
    if not config_path.exists():
        config_path.write_text(
            "# payloadcheck configuration\n"
            "\n"
            "fetch:\n"
            "  timeout_seconds: 10\n"
            "  follow_redirects: true\n"
            "\n"
            "batch:\n"
            "  concurrency: 1\n"
            "\n"
            "scoring:\n"
            f"  pass_threshold: {PASS_THRESHOLD}\n"
            "\n"
            "output:\n"
            "  format: text\n",
            encoding="utf-8",
        )
    return config_path
