from typing import Any

import httpx
import openai

from resume_review.review.client_base import BaseAnalyzerClient
from resume_review.review.exceptions import AnalyzerNetworkError, MalformedAnalyzerResponseError


class OpenAIClientAdapter(BaseAnalyzerClient):
    """Analyzer AI client adapter built on OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object] | None,
    ) -> str:
        request: dict[str, Any] = {
            "model": model,
            "temperature": temperature,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if json_schema is not None:
            request["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": "stage_result",
                    "strict": True,
                    "schema": json_schema,
                },
            }
        try:
            response = self._client.chat.completions.create(**request)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalyzerNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise AnalyzerNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise MalformedAnalyzerResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise MalformedAnalyzerResponseError("AI returned empty response")
        return content
