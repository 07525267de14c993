"""Survey stage detection from the survey name."""

from __future__ import annotations

from orgchart_engine.models.survey import SurveyStage

# English and Polish markers, e.g. "Evaluation 2025 - Stage 2" / "Ocena - Etap 2"
_STAGE_WORDS = ("stage", "etap")


def detect_stage(survey_name: str | None) -> SurveyStage | None:
    """Return the stage marked in the name, or None if there is no marker."""
    if not survey_name:
        return None
    lower = survey_name.lower()
    for stage in SurveyStage:
        if any(f"{word} {stage.value}" in lower for word in _STAGE_WORDS):
            return stage
    return None


def effective_stage(stage: SurveyStage | None) -> SurveyStage:
    """Unmarked surveys get the most permissive policy, stage 1."""
    return SurveyStage.SELF_ASSESSMENT if stage is None else stage
