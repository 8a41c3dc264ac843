from abc import ABC, abstractmethod


class BaseAnalyzerClient(ABC):
    """Contract for provider-specific analyzer AI clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object] | None,
    ) -> str:
        """Return provider response as plain text.

        When `json_schema` is given the provider is asked for a strict JSON
        object; otherwise free text is allowed.
        """
