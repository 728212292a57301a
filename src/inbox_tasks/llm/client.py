from __future__ import annotations

import logging
from typing import Any, Protocol

from openai import OpenAI, OpenAIError

from inbox_tasks.config.settings import Settings

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """The text model could not produce an answer."""


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


class OpenAIGenerator:
    """
    Single-shot text generation through the OpenAI Responses API.
    One request per call, no retries. Failures surface as GenerationError.
    """

    def __init__(self, client: Any, model: str) -> None:
        self._client = client
        self._model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIGenerator":
        # The SDK falls back to OPENAI_API_KEY when api_key is None.
        client = OpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.llm_timeout,
            max_retries=0,
        )
        return cls(client, settings.model)

    @property
    def model(self) -> str:
        return self._model

    def generate(self, prompt: str) -> str:
        logger.debug("Calling model=%s prompt_chars=%d", self._model, len(prompt))
        try:
            resp = self._client.responses.create(model=self._model, input=prompt)
        except OpenAIError as exc:
            raise GenerationError(f"{type(exc).__name__}: {exc}") from exc

        output_text = getattr(resp, "output_text", None)
        if not output_text:
            raise GenerationError("Model response was empty.")
        return output_text
