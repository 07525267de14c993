"""Survey stage detection, access policy, and pending-task counts."""

from orgchart_engine.access.pending import count_pending, pending_notifications, pending_targets
from orgchart_engine.access.policy import (
    can_edit_survey,
    classify_relation,
    classify_worker,
    decide,
    find_response_for_person,
    find_stage_survey,
    has_response,
    is_blue_collar_email,
    is_stage_completed,
    should_show_survey_button,
)
from orgchart_engine.access.stage import detect_stage, effective_stage

__all__ = [
    "can_edit_survey",
    "classify_relation",
    "classify_worker",
    "count_pending",
    "decide",
    "detect_stage",
    "effective_stage",
    "find_response_for_person",
    "find_stage_survey",
    "has_response",
    "is_blue_collar_email",
    "is_stage_completed",
    "pending_notifications",
    "pending_targets",
    "should_show_survey_button",
]
