from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from bid_tracker.log import set_level
from bid_tracker.skills import LayerWeights

WEIGHT_TOLERANCE = 0.001
AUTO_REJECT_AFTER_DAYS = 14


def _default_layer_weights() -> LayerWeights:
    return LayerWeights(
        frontend=0.20,
        backend=0.30,
        database=0.15,
        cloud=0.10,
        devops=0.15,
        others=0.10,
    )


class Settings(BaseModel):
    auto_reject_after_days: int = AUTO_REJECT_AFTER_DAYS
    weight_tolerance: float = WEIGHT_TOLERANCE
    default_layer_weights: LayerWeights = Field(default_factory=_default_layer_weights)
    log_level: str = "INFO"


def load_config(path: str) -> Settings:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"YAML must be a dict: {p}")

    cfg = Settings(**raw)

    total = cfg.default_layer_weights.total()
    if abs(total - 1.0) > cfg.weight_tolerance:
        raise ValueError(f"default_layer_weights must sum to 1.0 (got {total})")

    set_level(cfg.log_level)
    return cfg
