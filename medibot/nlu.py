"""Pydantic models for Wit.ai classification results.

Wit.ai returns ``intents`` sorted by confidence and ``entities`` keyed by
``<entity>:<role>`` (or just ``<entity>`` on older app versions).  Only the
fields the dialogue needs are modelled; everything else is ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class IntentScore(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    confidence: float = 0.0


class EntityValue(BaseModel):
    """One extracted entity.  Ambiguous date/time parses carry ``values``."""

    model_config = ConfigDict(extra="ignore")

    value: Any = None
    values: list[EntityValue] = Field(default_factory=list)

    def resolved(self) -> str | None:
        """Return ``value`` or, failing that, the first nested candidate."""
        if self.value not in (None, ""):
            return str(self.value)
        for candidate in self.values[:1]:
            return candidate.resolved()
        return None


class ClassifierResult(BaseModel):
    """Per-turn output of the intent classifier."""

    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    intents: list[IntentScore] = Field(default_factory=list)
    entities: dict[str, list[EntityValue]] = Field(default_factory=dict)

    @classmethod
    def from_wit(cls, payload: dict[str, Any]) -> ClassifierResult:
        return cls.model_validate(payload or {})

    @property
    def top_intent_name(self) -> str | None:
        return self.intents[0].name if self.intents else None

    @property
    def top_intent_confidence(self) -> float:
        return self.intents[0].confidence if self.intents else 0.0

    def first_value(self, key: str) -> str | None:
        """Resolved value of the first entity stored under *key*, if any."""
        found = self.entities.get(key)
        if not found:
            return None
        return found[0].resolved()
