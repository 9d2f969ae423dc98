# ABOUTME: Holds the scoring weights and thresholds used by the review scheduler.
# ABOUTME: Loads overrides from a YAML config file on top of the built-in defaults.

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

CONFIG_ENV_VAR = "REVIEW_SCHEDULER_CONFIG"


@dataclass(frozen=True)
class ScoreWeights:
    incorrect_answer: int = 50
    weak_topic: int = 30  # topic accuracy below threshold
    time_decay: int = 20  # last attempt older than stale_after_days
    fast_guess: int = 10  # response faster than fast_guess_seconds
    few_attempts: int = 15  # answered fewer than min_attempts times
    low_accuracy: int = 25  # question accuracy below low_accuracy_pct


@dataclass(frozen=True)
class ScoreThresholds:
    weak_topic_accuracy: float = 70
    stale_after_days: float = 3
    fast_guess_seconds: float = 3
    min_attempts: int = 3
    low_accuracy_pct: float = 50


@dataclass(frozen=True)
class SchedulerConfig:
    weights: ScoreWeights = field(default_factory=ScoreWeights)
    thresholds: ScoreThresholds = field(default_factory=ScoreThresholds)
    default_limit: int = 20


DEFAULT_CONFIG = SchedulerConfig()


def load_config(path: Union[str, Path]) -> SchedulerConfig:
    """
    Load a scheduler config from YAML.

    Expected layout (every section and key optional)::

        weights:
          incorrect_answer: 50
        thresholds:
          weak_topic_accuracy: 70
        queue:
          default_limit: 20
    """

    with open(path) as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, Mapping):
        raise ValueError(f"Config at {path} must be a mapping, got {type(cfg).__name__}.")
    return config_from_dict(cfg)


def config_from_dict(cfg: Mapping[str, Any]) -> SchedulerConfig:
    unknown = set(cfg) - {"weights", "thresholds", "queue"}
    if unknown:
        raise ValueError(f"Unknown config sections: {', '.join(sorted(unknown))}.")

    weights = _override(ScoreWeights(), cfg.get("weights") or {}, "weights")
    thresholds = _override(ScoreThresholds(), cfg.get("thresholds") or {}, "thresholds")

    queue_cfg = cfg.get("queue") or {}
    if not isinstance(queue_cfg, Mapping):
        raise ValueError("Config section 'queue' must be a mapping.")
    unknown = set(queue_cfg) - {"default_limit"}
    if unknown:
        raise ValueError(f"Unknown keys in 'queue': {', '.join(sorted(unknown))}.")
    default_limit = _as_number(queue_cfg.get("default_limit", DEFAULT_CONFIG.default_limit), "queue.default_limit", int)

    return SchedulerConfig(weights=weights, thresholds=thresholds, default_limit=default_limit)


def _override(base, section: Mapping[str, Any], name: str):
    if not isinstance(section, Mapping):
        raise ValueError(f"Config section '{name}' must be a mapping.")
    types = {f.name: f.type for f in fields(base)}
    unknown = set(section) - set(types)
    if unknown:
        raise ValueError(f"Unknown keys in '{name}': {', '.join(sorted(unknown))}.")

    updates: Dict[str, Any] = {}
    for key, value in section.items():
        cast = int if types[key] == "int" else float
        updates[key] = _as_number(value, f"{name}.{key}", cast)
    return replace(base, **updates)


def _as_number(value: Any, key: str, cast):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Config value '{key}' must be numeric, got {value!r}.")
    if cast is int and not float(value).is_integer():
        raise ValueError(f"Config value '{key}' must be a whole number, got {value!r}.")
    return cast(value)
