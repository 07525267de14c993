"""Pending-task counts for the survey panel badges.

A pending task is a direct report whose survey the viewer could fill in
right now. The count is derived from decide() itself, so the badge and the
per-node buttons always agree.
"""

from __future__ import annotations

from collections.abc import Sequence

from orgchart_engine.access.policy import decide, has_response
from orgchart_engine.access.stage import detect_stage
from orgchart_engine.config import DEFAULT_BLUE_COLLAR_DOMAIN
from orgchart_engine.models.access import AccessLevel
from orgchart_engine.models.context import UserContext
from orgchart_engine.models.person import Person
from orgchart_engine.models.survey import Survey, SurveyResponse


def pending_targets(
    survey: Survey,
    context: UserContext,
    all_people: Sequence[Person],
    all_responses: Sequence[SurveyResponse],
    all_surveys: Sequence[Survey],
    *,
    blue_collar_domain: str = DEFAULT_BLUE_COLLAR_DOMAIN,
) -> list[Person]:
    """Direct reports the viewer can currently fill ``survey`` in for."""
    stage = detect_stage(survey.name)
    targets: list[Person] = []
    seen: set[str] = set()
    for person in all_people:
        if person.id not in context.direct_subordinate_ids or person.id in seen:
            continue
        seen.add(person.id)
        result = decide(
            stage,
            person.id,
            context,
            has_response(all_responses, person.id, survey.id),
            all_responses,
            all_surveys,
            person.email,
            blue_collar_domain=blue_collar_domain,
        )
        if result.access_level is AccessLevel.EDIT:
            targets.append(person)
    return targets


def count_pending(
    survey: Survey,
    context: UserContext,
    all_people: Sequence[Person],
    all_responses: Sequence[SurveyResponse],
    all_surveys: Sequence[Survey],
    *,
    blue_collar_domain: str = DEFAULT_BLUE_COLLAR_DOMAIN,
) -> int:
    return len(
        pending_targets(
            survey,
            context,
            all_people,
            all_responses,
            all_surveys,
            blue_collar_domain=blue_collar_domain,
        )
    )


def pending_notifications(
    surveys: Sequence[Survey],
    context: UserContext,
    all_people: Sequence[Person],
    all_responses: Sequence[SurveyResponse],
    *,
    blue_collar_domain: str = DEFAULT_BLUE_COLLAR_DOMAIN,
) -> dict[str, int]:
    """Badge count per survey id."""
    return {
        survey.id: count_pending(
            survey,
            context,
            all_people,
            all_responses,
            surveys,
            blue_collar_domain=blue_collar_domain,
        )
        for survey in surveys
    }
