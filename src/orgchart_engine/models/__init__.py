"""Record models, viewer context, and access verdict types."""

from orgchart_engine.models.access import (
    AccessLevel,
    AccessReason,
    AccessResult,
    Relation,
    WorkerClass,
)
from orgchart_engine.models.context import UserContext
from orgchart_engine.models.person import Hierarchy, Person
from orgchart_engine.models.survey import Survey, SurveyResponse, SurveyStage

__all__ = [
    "AccessLevel",
    "AccessReason",
    "AccessResult",
    "Hierarchy",
    "Person",
    "Relation",
    "Survey",
    "SurveyResponse",
    "SurveyStage",
    "UserContext",
    "WorkerClass",
]
