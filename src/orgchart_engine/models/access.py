"""Access verdict types produced by the policy engine."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class AccessLevel(StrEnum):
    EDIT = "edit"  # may fill in the survey
    VIEW = "view"  # read-only
    NONE = "none"  # button hidden


class Relation(StrEnum):
    """How the target person relates to the viewer in the reporting tree."""

    SELF = "self"
    DIRECT = "direct"
    INDIRECT = "indirect"
    UNRELATED = "unrelated"


class WorkerClass(StrEnum):
    BLUE_COLLAR = "blue_collar"
    WHITE_COLLAR = "white_collar"


class AccessReason(StrEnum):
    """Machine-usable explanation attached to every verdict."""

    SELF_VIEW = "self_view"
    SELF_FILL = "self_fill"
    SELF_AWAITING_MANAGER = "self_awaiting_manager"
    DIRECT_VIEW = "direct_view"
    DIRECT_FILL_FOR_WORKER = "direct_fill_for_worker"
    AWAITING_SELF_ASSESSMENT = "awaiting_self_assessment"
    AWAITING_PREVIOUS_STAGE = "awaiting_previous_stage"
    DIRECT_FILL = "direct_fill"
    INDIRECT_VIEW = "indirect_view"
    INDIRECT_NO_ACCESS = "indirect_no_access"
    FILLED_BY_DIRECT_MANAGER = "filled_by_direct_manager"
    NO_RELATION = "no_relation"


class AccessResult(BaseModel):
    """Verdict for one (viewer, target person, stage) triple.

    ``reason``, ``is_chain_blocked`` and ``disabled_reason`` are advisory:
    the host uses them for tooltips, only ``access_level`` gates anything.
    """

    model_config = ConfigDict(frozen=True)

    access_level: AccessLevel
    reason: AccessReason
    is_chain_blocked: bool = False
    disabled_reason: str | None = None

    @property
    def is_editable(self) -> bool:
        return self.access_level is AccessLevel.EDIT

    @property
    def is_visible(self) -> bool:
        return self.access_level is not AccessLevel.NONE
