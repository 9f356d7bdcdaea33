"""Interface for structured LLM completions."""

from typing import Protocol


class CompletionClient(Protocol):
    """Returns JSON matching a schema for a prompt and optional image."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Return structured output for the prompt."""
