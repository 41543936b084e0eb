# bid_tracker/skills.py
"""
Skill data attached to a bid.

A bid carries either a flat list of stack names (the legacy shape) or a
per-layer structure with weighted skills. Both shapes are pydantic models
tagged by ``kind`` so a ``SkillData`` value is always one or the other.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from bid_tracker.errors import ValidationError

LAYERS = ("frontend", "backend", "database", "cloud", "devops", "others")


class SkillWeight(BaseModel):
    skill: str
    weight: float


class LayerSkills(BaseModel):
    frontend: List[SkillWeight] = Field(default_factory=list)
    backend: List[SkillWeight] = Field(default_factory=list)
    database: List[SkillWeight] = Field(default_factory=list)
    cloud: List[SkillWeight] = Field(default_factory=list)
    devops: List[SkillWeight] = Field(default_factory=list)
    others: List[SkillWeight] = Field(default_factory=list)

    def layer(self, name: str) -> List[SkillWeight]:
        return getattr(self, name)

    def skill_names(self) -> List[str]:
        return [sw.skill for name in LAYERS for sw in self.layer(name)]


class LayerWeights(BaseModel):
    frontend: float
    backend: float
    database: float
    cloud: float
    devops: float
    others: float

    def total(self) -> float:
        return sum(self.model_dump().values())


class LegacySkills(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["legacy"] = "legacy"
    stacks: List[str]

    def names(self) -> List[str]:
        return list(self.stacks)


class LayeredSkills(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["layered"] = "layered"
    layers: LayerSkills

    def names(self) -> List[str]:
        return self.layers.skill_names()


SkillData = Annotated[Union[LegacySkills, LayeredSkills], Field(discriminator="kind")]


def validate_layer_skills(layers: LayerSkills, tolerance: float) -> None:
    """Every non-empty layer's weights must sum to 1.0 (empty layers are fine)."""
    for name in LAYERS:
        entries = layers.layer(name)
        if not entries:
            continue
        for sw in entries:
            if not sw.skill or not sw.skill.strip():
                raise ValidationError(f"Layer {name} contains a skill with an empty name")
            if sw.weight < 0:
                raise ValidationError(f"Layer {name} skill {sw.skill} has a negative weight")
        total = sum(sw.weight for sw in entries)
        if abs(total - 1.0) > tolerance:
            raise ValidationError(
                f"Skill weights in layer {name} must sum to 1.0 (got {total:.4f})"
            )


def validate_layer_weights(weights: LayerWeights, tolerance: float) -> None:
    total = weights.total()
    if abs(total - 1.0) > tolerance:
        raise ValidationError(f"Layer weights must sum to 1.0 (got {total:.4f})")


def validate_skill_data(skills: Union[LegacySkills, LayeredSkills], tolerance: float) -> None:
    if isinstance(skills, LegacySkills):
        if not [s for s in skills.stacks if s and s.strip()]:
            raise ValidationError("Bid mainStacks is required")
    elif isinstance(skills, LayeredSkills):
        validate_layer_skills(skills.layers, tolerance)
    else:
        raise ValidationError(f"Unsupported skill data: {type(skills).__name__}")


def parse_skill_data(raw: Any) -> Union[LegacySkills, LayeredSkills]:
    """
    Accepts the shapes callers actually send:
      - a plain list of stack names -> LegacySkills
      - a dict keyed by the six layer names -> LayeredSkills
      - a tagged dict ({"kind": ...}) or an already-built model
    """
    if isinstance(raw, (LegacySkills, LayeredSkills)):
        return raw
    if isinstance(raw, LayerSkills):
        return LayeredSkills(layers=raw)
    if isinstance(raw, (list, tuple)):
        return LegacySkills(stacks=[str(x) for x in raw])
    if isinstance(raw, dict):
        try:
            if raw.get("kind") == "legacy":
                return LegacySkills(**raw)
            if raw.get("kind") == "layered":
                return LayeredSkills(**raw)
            unknown = set(raw) - set(LAYERS)
            if unknown:
                raise ValidationError(f"Unknown skill layers: {', '.join(sorted(unknown))}")
            return LayeredSkills(layers=LayerSkills(**raw))
        except ValidationError:
            raise
        except ValueError as e:
            raise ValidationError(f"Malformed skill data: {e}") from e
    raise ValidationError("Skill data must be a list of stacks or a layered structure")


def parse_layer_weights(raw: Any) -> LayerWeights:
    if isinstance(raw, LayerWeights):
        return raw
    if not isinstance(raw, dict):
        raise ValidationError("Layer weights must provide a value for each of the six layers")
    missing = [name for name in LAYERS if name not in raw]
    if missing:
        raise ValidationError(f"Layer weights missing: {', '.join(missing)}")
    try:
        return LayerWeights(**{name: raw[name] for name in LAYERS})
    except ValueError as e:
        raise ValidationError(f"Malformed layer weights: {e}") from e
