"""Record loading: the file-based stand-in for the host dataset adapter.

A record file is JSON or YAML with three lists keyed by collection name::

    people:
      - {id: "1", name: CEO}
      - {id: "2", name: Manager, managerId: "1", ag_userid: "{...}"}
    surveys:
      - {msfp_surveyid: s1, msfp_name: "Evaluation - Stage 1"}
    responses:
      - {responseId: r1, survey_id: s1, personId: "2"}

Each record is validated on its own. A bad record is skipped with a warning
so one broken row does not blank the whole chart.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, Field, ValidationError

from orgchart_engine.exceptions import RecordFileError
from orgchart_engine.models.person import Person
from orgchart_engine.models.survey import Survey, SurveyResponse

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


class RecordSet(BaseModel):
    """The three collections one render pass works from."""

    people: list[Person] = Field(default_factory=list)
    surveys: list[Survey] = Field(default_factory=list)
    responses: list[SurveyResponse] = Field(default_factory=list)

    def survey_by_id(self, survey_id: str) -> Survey | None:
        for survey in self.surveys:
            if survey.id == survey_id:
                return survey
        return None

    def responses_for_survey(self, survey_id: str) -> list[SurveyResponse]:
        return [r for r in self.responses if r.survey_id == survey_id]


def parse_records(raw: list, model: type[_M], collection: str) -> list[_M]:
    """Validate each raw mapping, skipping and logging the ones that fail."""
    parsed: list[_M] = []
    for position, item in enumerate(raw):
        try:
            parsed.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(
                "Skipping %s record #%d: %s", collection, position, e.errors(include_url=False)
            )
    return parsed


def records_from_dict(data: dict) -> RecordSet:
    collections = {}
    for key, model in (("people", Person), ("surveys", Survey), ("responses", SurveyResponse)):
        raw = data.get(key) or []
        if not isinstance(raw, list):
            logger.warning("Ignoring '%s': expected a list, got %s", key, type(raw).__name__)
            raw = []
        collections[key] = parse_records(raw, model, key)
    return RecordSet(**collections)


def load_records(path: Path) -> RecordSet:
    """Read a JSON (``.json``) or YAML (anything else) record file."""
    try:
        text = path.read_text()
    except OSError as e:
        raise RecordFileError(f"Cannot read {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RecordFileError(f"Cannot parse {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise RecordFileError(f"{path} must contain a mapping, got {type(data).__name__}")

    records = records_from_dict(data)
    logger.info(
        "Loaded %d people, %d surveys, %d responses from %s",
        len(records.people),
        len(records.surveys),
        len(records.responses),
        path,
    )
    return records
