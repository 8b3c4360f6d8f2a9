"""
Serialization module for TakeHome scenarios and profiles.

Purpose
-------
JSON persistence for life-event scenarios and household profiles, so that
what-if scenarios can be saved, edited by hand, shared and reloaded.

Design Principles
-----------------
- Type-safe: every load goes through the Pydantic configs
- Human-readable: indented JSON, enums as their string values
- Exact: Decimals are written as strings, never floats
- Backward compatible: files carry a schema version; a mismatch warns

Example
-------
>>> from pathlib import Path
>>> from takehome.templates import job_loss
>>> from takehome.serialization import save_scenario, load_scenario
>>>
>>> save_scenario(job_loss(), Path("job_loss.json"))
>>> scenario = load_scenario(Path("job_loss.json"))
"""

from __future__ import annotations
from typing import Dict, Any
from pathlib import Path
import json
import warnings

from pydantic import ValidationError

from .config import LifeEventScenarioConfig, ProfileConfig
from .exceptions import ConfigurationError
from .scenario import LifeEventScenario

__all__ = [
    "SCHEMA_VERSION",
    "scenario_to_dict",
    "scenario_from_dict",
    "save_scenario",
    "load_scenario",
    "profile_from_dict",
    "load_profile",
]


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "1.0.0"
"""Version written to every file and checked on load."""


def _check_schema(data: Dict[str, Any], path: Any = None) -> None:
    schema_version = data.get("schema_version", "0.0.0")
    if schema_version != SCHEMA_VERSION:
        source = f" in {path}" if path is not None else ""
        warnings.warn(
            f"Schema version {schema_version}{source} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path} is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"{path} is not UTF-8 text: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a JSON object")
    return data


# ---------------------------------------------------------------------------
# LifeEventScenario Serialization
# ---------------------------------------------------------------------------

def scenario_to_dict(scenario: LifeEventScenario) -> Dict[str, Any]:
    """
    Convert a scenario to a JSON-ready dictionary.

    Ids are not written; they are regenerated on load.

    Examples
    --------
    >>> data = scenario_to_dict(first_child())
    >>> data["scenario"]["expense_changes"][0]["amount"]
    '1500'
    """
    config = LifeEventScenarioConfig.from_domain(scenario)
    return {
        "schema_version": SCHEMA_VERSION,
        "scenario": config.model_dump(mode="json"),
    }


def scenario_from_dict(data: Dict[str, Any]) -> LifeEventScenario:
    """
    Rebuild a scenario from :func:`scenario_to_dict` output.

    A bare scenario object (without the ``schema_version`` wrapper) is also
    accepted, without a version check.

    Raises
    ------
    ConfigurationError
        If the data fails validation.
    """
    if "scenario" in data:
        _check_schema(data)
        payload = data["scenario"]
    else:
        payload = data
    try:
        config = LifeEventScenarioConfig.model_validate(payload)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid scenario: {e}") from e
    return config.to_domain()


def save_scenario(scenario: LifeEventScenario, path: Path) -> None:
    """Save *scenario* as indented JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(scenario_to_dict(scenario), f, indent=2)


def load_scenario(path: Path) -> LifeEventScenario:
    """
    Load a scenario saved with :func:`save_scenario`.

    Raises
    ------
    ConfigurationError
        Malformed JSON or invalid scenario data.
    FileNotFoundError
        If *path* does not exist.
    """
    path = Path(path)
    data = _read_json(path)
    if "scenario" in data:
        _check_schema(data, path)
        data = data["scenario"]
    return scenario_from_dict(data)


# ---------------------------------------------------------------------------
# Profile Serialization
# ---------------------------------------------------------------------------

def profile_from_dict(data: Dict[str, Any]) -> ProfileConfig:
    """
    Validate a household profile.

    Accepts either ``{"schema_version": ..., "profile": {...}}`` or the bare
    profile object.
    """
    if "profile" in data:
        _check_schema(data)
        data = data["profile"]
    try:
        return ProfileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid profile: {e}") from e


def load_profile(path: Path) -> ProfileConfig:
    """Load and validate a household profile JSON file."""
    return profile_from_dict(_read_json(Path(path)))
