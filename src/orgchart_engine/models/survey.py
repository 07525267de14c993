"""Survey and survey response records."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import IntEnum

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

logger = logging.getLogger(__name__)


class SurveyStage(IntEnum):
    """Stage of the chained evaluation workflow.

    Stage 1 is the self-assessment, stages 2 and 3 are manager evaluations
    that each require the previous stage to be completed first.
    """

    SELF_ASSESSMENT = 1
    MANAGER_REVIEW = 2
    FINAL_REVIEW = 3

    @property
    def prerequisite(self) -> SurveyStage | None:
        if self is SurveyStage.SELF_ASSESSMENT:
            return None
        return SurveyStage(self.value - 1)


class Survey(BaseModel):
    """A survey definition. The stage marker lives in ``name``."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(alias="msfp_surveyid")
    name: str = Field(default="", alias="msfp_name")
    url: str | None = Field(default=None, alias="msfp_surveyurl")
    description: str | None = Field(default=None, alias="msfp_description")
    project_id: str | None = Field(default=None, alias="msfp_projectid")

    @field_validator("name", mode="before")
    @classmethod
    def _none_name(cls, value: object) -> object:
        return "" if value is None else value


class SurveyResponse(BaseModel):
    """A submitted response for one person to one survey."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    response_id: str = Field(
        validation_alias=AliasChoices("responseId", "response_id"),
        serialization_alias="responseId",
    )
    survey_id: str = Field(
        validation_alias=AliasChoices("survey_id", "surveyId"),
        serialization_alias="survey_id",
    )
    person_id: str = Field(
        validation_alias=AliasChoices("personId", "person_id"),
        serialization_alias="personId",
    )
    url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("responseUrl", "url"),
        serialization_alias="responseUrl",
    )
    date: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("responseDate", "date"),
        serialization_alias="responseDate",
    )

    @field_validator("url", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("date", mode="wrap")
    @classmethod
    def _lenient_date(
        cls, value: object, handler: ValidatorFunctionWrapHandler
    ) -> datetime | None:
        """An unreadable date is dropped; the response itself still counts."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            return handler(value)
        except ValidationError:
            logger.warning("Ignoring unreadable response date %r", value)
            return None
