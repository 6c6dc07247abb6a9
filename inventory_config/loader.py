"""
Configuration Loader (``inventory_config.loader``).

Responsibility
--------------
Loads a YAML policy file and parses its ``metrics_policy`` section into a
``MetricsPolicy``. Runtime callers go through
``inventory_config.get_active_policy()``; this module is the tooling
underneath it.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``metrics_policy`` section or a bad setting
  -> ``PolicyConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from inventory_kernel.domain.policy import MetricsPolicy
from inventory_kernel.exceptions import PolicyConfigurationError

POLICY_SECTION = "metrics_policy"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_metrics_policy(data: dict[str, Any]) -> MetricsPolicy:
    """
    Parse the ``metrics_policy`` section of a loaded document.

    Settings absent from the section keep their defaults. YAML floats are
    converted through their text form by ``MetricsPolicy``.
    """
    if not isinstance(data, dict) or POLICY_SECTION not in data:
        raise PolicyConfigurationError(POLICY_SECTION, "section is missing")
    section = data[POLICY_SECTION] or {}
    if not isinstance(section, dict):
        raise PolicyConfigurationError(POLICY_SECTION, "section must be a mapping")
    return MetricsPolicy.from_dict(section)


def load_policy(path: Path) -> MetricsPolicy:
    """Load and parse a policy file."""
    return parse_metrics_policy(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
