"""Example analyzer client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalyzerClient and register the provider in AnalyzerFactory.
"""

import json
from typing import ClassVar

from resume_review.review.client_base import BaseAnalyzerClient
from resume_review.review.stages import STAGE_FIELDS, ReviewStage


class ExampleClientAdapter(BaseAnalyzerClient):
    """Example adapter that returns fixed, valid stage responses.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters (OpenAI, Anthropic, etc.).
    """

    DEFAULT_SCORES: ClassVar[dict[ReviewStage, float]] = {
        ReviewStage.INITIAL_ANALYSIS: 72,
        ReviewStage.TECHNICAL_OPTIMIZATION: 75,
        ReviewStage.ATS_OPTIMIZATION: 80,
        ReviewStage.EXECUTIVE_IMPACT: 70,
        ReviewStage.FINAL_INTEGRATION: 85,
    }

    OPTIMIZED_DOCUMENT: ClassVar[str] = (
        "SUMMARY\n"
        "Results-driven professional with a record of measurable impact.\n"
        "EXPERIENCE\n"
        "- Led cross-functional initiatives that improved delivery speed by 30%\n"
        "SKILLS\n"
        "Leadership, Communication, Data Analysis"
    )

    def __init__(self) -> None:
        self._score_fields = {
            fields.score_field: stage for stage, fields in STAGE_FIELDS.items()
        }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object] | None,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        stage = self._stage_from_schema(json_schema)
        payload = json.dumps(self._stage_payload(stage), indent=2)
        if stage is ReviewStage.FINAL_INTEGRATION:
            return f"{payload}\n\nOptimized Resume:\n{self.OPTIMIZED_DOCUMENT}"
        return payload

    def _stage_from_schema(self, json_schema: dict[str, object] | None) -> ReviewStage:
        # Final integration is requested as free text, without a schema.
        if json_schema is None:
            return ReviewStage.FINAL_INTEGRATION
        required = json_schema.get("required")
        if isinstance(required, list) and required and required[0] in self._score_fields:
            return self._score_fields[required[0]]
        return ReviewStage.INITIAL_ANALYSIS

    def _stage_payload(self, stage: ReviewStage) -> dict[str, object]:
        fields = STAGE_FIELDS[stage]
        payload: dict[str, object] = {fields.score_field: self.DEFAULT_SCORES[stage]}
        for name in fields.list_fields:
            payload[name] = [f"Example {name.replace('_', ' ')}"]
        return payload
