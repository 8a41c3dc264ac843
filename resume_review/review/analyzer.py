"""AI-powered structured résumé analyzer."""

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import ClassVar

from resume_review.logging.logger import Log
from resume_review.review.base import BaseStructuredAnalyzer
from resume_review.review.client_base import BaseAnalyzerClient
from resume_review.review.exceptions import PromptTemplateError
from resume_review.review.extraction import parse_json_response, split_integration_response
from resume_review.review.models import AnalyzerResponse, ReviewResult
from resume_review.review.prompt_loader import load_prompt_templates
from resume_review.review.stages import ReviewStage
from resume_review.review.validator import build_json_schema


class StructuredAnalyzer(BaseStructuredAnalyzer):
    """Runs one review stage through a chat-completion provider."""

    SYSTEM_PROMPTS: ClassVar[dict[ReviewStage, str]] = {
        ReviewStage.INITIAL_ANALYSIS: "You are an expert resume analyzer.",
        ReviewStage.TECHNICAL_OPTIMIZATION: "You are an expert in the {domain_tag} industry.",
        ReviewStage.ATS_OPTIMIZATION: "You are an expert in ATS optimization.",
        ReviewStage.EXECUTIVE_IMPACT: "You are an expert in executive resume writing.",
        ReviewStage.FINAL_INTEGRATION: "You are an expert resume integration specialist.",
    }

    def __init__(
        self,
        *,
        client: BaseAnalyzerClient,
        model: str,
        temperature: float = 0.2,
        prompt_dir: Path | None = None,
        templates: Mapping[ReviewStage, str] | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._templates = dict(templates) if templates is not None else load_prompt_templates(
            prompt_dir
        )

    def analyze(
        self,
        stage: ReviewStage,
        document_text: str,
        target_description: str,
        domain_tag: str,
        prior_results: ReviewResult,
        target_systems: Sequence[str] = (),
    ) -> AnalyzerResponse:
        prompt = self._build_prompt(
            stage, document_text, target_description, domain_tag, prior_results, target_systems
        )
        Log.debug(f"{stage.display_name} prompt:\n{prompt}")

        is_final = stage is ReviewStage.FINAL_INTEGRATION
        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self.SYSTEM_PROMPTS[stage].format(domain_tag=domain_tag),
            user_prompt=prompt,
            json_schema=None if is_final else build_json_schema(stage),
        )
        Log.debug(f"{stage.display_name} raw response:\n{raw_response}")

        if is_final:
            structured, rewritten = split_integration_response(raw_response)
            return AnalyzerResponse(structured_result=structured, rewritten_text=rewritten)
        return AnalyzerResponse(structured_result=parse_json_response(raw_response))

    def _build_prompt(
        self,
        stage: ReviewStage,
        document_text: str,
        target_description: str,
        domain_tag: str,
        prior_results: ReviewResult,
        target_systems: Sequence[str],
    ) -> str:
        template = self._templates.get(stage)
        if template is None:
            raise PromptTemplateError(f"No prompt template for stage {stage.value}")
        try:
            return template.format(
                document_text=document_text,
                target_description=target_description,
                domain_tag=domain_tag,
                prior_results=self._format_prior_results(prior_results),
                target_systems=", ".join(target_systems) or "any",
            )
        except (KeyError, IndexError, ValueError) as exc:
            raise PromptTemplateError(
                f"Failed to render prompt template for {stage.value}: {exc}"
            ) from exc

    @staticmethod
    def _format_prior_results(prior_results: ReviewResult) -> str:
        payload = prior_results.to_dict()
        blocks = [
            f"{stage.display_name}:\n{json.dumps(payload[stage.value], indent=2)}"
            for stage in prior_results.completed_stages()
        ]
        return "\n\n".join(blocks)
