"""
Configuration Loader (``lease_config.loader``).

Responsibility
--------------
Loads ledger-account YAML files and parses them into
``LedgerAccountMapping`` instances.  Callers normally go through
``lease_config.load_ledger_accounts()``.

Invariants enforced
-------------------
* Roles absent from a file fall back to the standard defaults, so a file
  may override only the accounts an entity has renumbered.
* Unknown role keys and entries missing ``code``/``name`` raise; there are
  no silent defaults for an entry that is present but malformed.
* ``compute_checksum`` produces a deterministic SHA-256 hash for change
  detection between two mapping versions.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* ``ledger_accounts`` not a mapping  -> ``ValueError``.
* Unknown key  -> ``UnknownLedgerAccountError``.
* Entry without code/name  -> ``IncompleteLedgerMappingError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from lease_kernel.domain.ledger_accounts import (
    DEFAULT_LEDGER_ACCOUNTS,
    LedgerAccountMapping,
    LedgerRole,
)
from lease_kernel.exceptions import IncompleteLedgerMappingError
from lease_kernel.logging_config import get_logger

logger = get_logger("config.loader")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_ledger_accounts(data: dict[str, Any]) -> LedgerAccountMapping:
    """
    Parse a ``LedgerAccountMapping`` from a loaded document.

    Accepts either the full document (with a ``ledger_accounts`` section)
    or the section itself.
    """
    section = data.get("ledger_accounts", data)
    if not isinstance(section, dict):
        raise ValueError(
            f"ledger_accounts must be a mapping, got {type(section).__name__}"
        )

    overrides: dict[LedgerRole, dict[str, Any]] = {}
    for key, value in section.items():
        role = LedgerRole.parse(key)
        if not isinstance(value, dict):
            raise IncompleteLedgerMappingError(role.value, ("code", "name"))
        overrides[role] = value

    return LedgerAccountMapping(DEFAULT_LEDGER_ACCOUNTS).merged(overrides)


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def load_ledger_accounts_file(path: Path) -> tuple[LedgerAccountMapping, str]:
    """Load and parse one file; returns the mapping and its checksum."""
    data = load_yaml_file(path)
    mapping = parse_ledger_accounts(data)
    checksum = compute_checksum(mapping.as_dict())
    logger.info(
        "ledger_accounts_loaded",
        extra={
            "path": str(path),
            "config_id": data.get("config_id"),
            "checksum": checksum,
        },
    )
    return mapping, checksum
