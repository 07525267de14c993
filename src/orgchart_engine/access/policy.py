"""Survey access policy.

Decides, for one viewer and one person in the chart, whether the viewer may
fill in (edit), read (view) or not see (none) that person's survey response.

Stage 1 is the self-assessment. Blue-collar workers (numeric mailbox on the
company domain) have no computer access, so their direct supervisor fills it
in for them; everyone else completes it themselves and the supervisor only
reads it. Stages 2 and 3 are filled in by the direct supervisor, and only
after the previous stage is on file for that person.

Everything here is pure: no I/O, no caching, same inputs give the same answer.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache

from orgchart_engine.access.stage import detect_stage
from orgchart_engine.config import DEFAULT_BLUE_COLLAR_DOMAIN
from orgchart_engine.exceptions import InvalidStageError
from orgchart_engine.models.access import (
    AccessLevel,
    AccessReason,
    AccessResult,
    Relation,
    WorkerClass,
)
from orgchart_engine.models.context import UserContext
from orgchart_engine.models.survey import Survey, SurveyResponse, SurveyStage


@lru_cache(maxsize=32)
def _blue_collar_pattern(domain: str) -> re.Pattern[str]:
    return re.compile(rf"^\d+@{re.escape(domain)}$", re.IGNORECASE)


def is_blue_collar_email(
    email: str | None, domain: str = DEFAULT_BLUE_COLLAR_DOMAIN
) -> bool:
    """Digits-only mailbox on the company domain, e.g. ``123456@assaabloy.com``."""
    if not email:
        return False
    return _blue_collar_pattern(domain).match(email.strip()) is not None


def classify_worker(
    email: str | None, domain: str = DEFAULT_BLUE_COLLAR_DOMAIN
) -> WorkerClass:
    if is_blue_collar_email(email, domain):
        return WorkerClass.BLUE_COLLAR
    return WorkerClass.WHITE_COLLAR


def classify_relation(target_person_id: str, context: UserContext) -> Relation:
    if context.person_id is not None and target_person_id == context.person_id:
        return Relation.SELF
    if target_person_id in context.direct_subordinate_ids:
        return Relation.DIRECT
    if target_person_id in context.all_subordinate_ids:
        return Relation.INDIRECT
    return Relation.UNRELATED


def has_response(
    responses: Sequence[SurveyResponse], person_id: str, survey_id: str
) -> bool:
    """Any response for the pair counts; duplicates are not an error."""
    return any(r.person_id == person_id and r.survey_id == survey_id for r in responses)


def find_response_for_person(
    responses: Sequence[SurveyResponse],
    person_id: str,
    survey_id: str | None = None,
) -> SurveyResponse | None:
    for response in responses:
        if response.person_id != person_id:
            continue
        if survey_id is None or response.survey_id == survey_id:
            return response
    return None


def find_stage_survey(surveys: Sequence[Survey], stage: SurveyStage) -> Survey | None:
    """First survey whose name carries the given stage marker."""
    for survey in surveys:
        if detect_stage(survey.name) == stage:
            return survey
    return None


def is_stage_completed(
    stage: SurveyStage,
    person_id: str,
    responses: Sequence[SurveyResponse] | None,
    surveys: Sequence[Survey] | None,
) -> bool:
    """Whether ``person_id`` has a response to the survey for ``stage``.

    Fails closed: no responses, no surveys, or no survey for that stage all
    count as not completed.
    """
    if not responses or not surveys:
        return False
    survey = find_stage_survey(surveys, stage)
    if survey is None:
        return False
    return has_response(responses, person_id, survey.id)


def _coerce_stage(stage: object) -> SurveyStage:
    if stage is None:
        return SurveyStage.SELF_ASSESSMENT
    if isinstance(stage, bool) or not isinstance(stage, int):
        raise InvalidStageError(stage)
    try:
        return SurveyStage(stage)
    except ValueError:
        raise InvalidStageError(stage) from None


def _result(
    level: AccessLevel,
    reason: AccessReason,
    *,
    chain_blocked: bool = False,
    disabled_reason: str | None = None,
) -> AccessResult:
    return AccessResult(
        access_level=level,
        reason=reason,
        is_chain_blocked=chain_blocked,
        disabled_reason=disabled_reason,
    )


def decide(
    stage: SurveyStage | int | None,
    target_person_id: str,
    context: UserContext,
    has_existing_response: bool,
    all_responses: Sequence[SurveyResponse] | None = None,
    all_surveys: Sequence[Survey] | None = None,
    target_email: str | None = None,
    *,
    blue_collar_domain: str = DEFAULT_BLUE_COLLAR_DOMAIN,
) -> AccessResult:
    """Access verdict for one person node.

    ``stage=None`` (no marker in the survey name) is treated as stage 1.
    Raises InvalidStageError for anything else outside 1-3.
    """
    effective = _coerce_stage(stage)
    relation = classify_relation(target_person_id, context)

    if relation is Relation.UNRELATED:
        return _result(AccessLevel.NONE, AccessReason.NO_RELATION)

    if effective is SurveyStage.SELF_ASSESSMENT:
        return _decide_self_assessment(
            relation,
            classify_worker(target_email, blue_collar_domain),
            has_existing_response,
        )

    return _decide_manager_review(
        effective,
        relation,
        has_existing_response,
        is_stage_completed(effective.prerequisite, target_person_id, all_responses, all_surveys),
    )


def _decide_self_assessment(
    relation: Relation, worker: WorkerClass, has_existing_response: bool
) -> AccessResult:
    if relation is Relation.SELF:
        if has_existing_response:
            return _result(AccessLevel.VIEW, AccessReason.SELF_VIEW)
        return _result(AccessLevel.EDIT, AccessReason.SELF_FILL)

    if relation is Relation.DIRECT:
        if has_existing_response:
            return _result(AccessLevel.VIEW, AccessReason.DIRECT_VIEW)
        if worker is WorkerClass.BLUE_COLLAR:
            return _result(AccessLevel.EDIT, AccessReason.DIRECT_FILL_FOR_WORKER)
        return _result(
            AccessLevel.NONE,
            AccessReason.AWAITING_SELF_ASSESSMENT,
            chain_blocked=True,
            disabled_reason="The employee must complete the self-assessment themselves",
        )

    if has_existing_response:
        return _result(AccessLevel.VIEW, AccessReason.INDIRECT_VIEW)
    return _result(AccessLevel.NONE, AccessReason.INDIRECT_NO_ACCESS)


def _decide_manager_review(
    stage: SurveyStage,
    relation: Relation,
    has_existing_response: bool,
    prerequisite_completed: bool,
) -> AccessResult:
    if relation is Relation.SELF:
        if has_existing_response:
            return _result(AccessLevel.VIEW, AccessReason.SELF_VIEW)
        return _result(AccessLevel.NONE, AccessReason.SELF_AWAITING_MANAGER)

    if relation is Relation.DIRECT:
        if not prerequisite_completed:
            previous = stage.prerequisite.value
            return _result(
                AccessLevel.NONE,
                AccessReason.AWAITING_PREVIOUS_STAGE,
                chain_blocked=True,
                disabled_reason=(
                    f"Stage {previous} must be completed before stage {stage.value}"
                ),
            )
        if has_existing_response:
            return _result(AccessLevel.VIEW, AccessReason.DIRECT_VIEW)
        return _result(AccessLevel.EDIT, AccessReason.DIRECT_FILL)

    if has_existing_response:
        return _result(AccessLevel.VIEW, AccessReason.INDIRECT_VIEW)
    return _result(AccessLevel.NONE, AccessReason.FILLED_BY_DIRECT_MANAGER)


def should_show_survey_button(*args, **kwargs) -> bool:
    """Shortcut over decide(): anything but NONE shows a button."""
    return decide(*args, **kwargs).is_visible


def can_edit_survey(*args, **kwargs) -> bool:
    """Shortcut over decide(): only EDIT opens the survey for filling in."""
    return decide(*args, **kwargs).is_editable
