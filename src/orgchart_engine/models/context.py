"""Per-render viewer context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UserContext(BaseModel):
    """Who is looking at the chart, resolved against the person list.

    Rebuilt whenever the person list changes; ``person_id`` is ``None`` when
    the host identity could not be matched to any record.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    person_id: str | None = None
    direct_subordinate_ids: frozenset[str] = Field(default_factory=frozenset)
    all_subordinate_ids: frozenset[str] = Field(default_factory=frozenset)

    @property
    def is_resolved(self) -> bool:
        return self.person_id is not None
