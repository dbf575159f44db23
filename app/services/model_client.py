"""Model client - sends a rendered prompt to one Gemini model and parses the JSON reply"""

import json
from abc import ABC, abstractmethod
from typing import Any, Optional

from openai import AsyncOpenAI, OpenAIError

from app.services.errors import MalformedOutputError, ModelInvocationError

SYSTEM_INSTRUCTION = (
    "You are the AI engine of a career guidance platform for students and professionals in India. "
    "Return only a valid JSON object that matches the requested fields. No markdown, no other text."
)


class ModelClient(ABC):
    """Boundary to the hosted model.

    `generate` returns the parsed JSON payload, or raises ModelInvocationError
    with the upstream error text preserved in its message. A reply that
    arrives but cannot be parsed raises MalformedOutputError.
    """

    @abstractmethod
    async def generate(self, prompt: str, model: str) -> Any:
        ...


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if the model added one."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


class GeminiModelClient(ModelClient):
    """Gemini through its OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout_seconds: float = 90.0,
        temperature: float = 0.4,
        client: Optional[AsyncOpenAI] = None,
    ):
        if not api_key and client is None:
            raise ValueError(
                "GEMINI_API_KEY not found. Set it in the environment or in .env "
                "before starting the server."
            )
        self.client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self.temperature = temperature

    async def generate(self, prompt: str, model: str) -> Any:
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": SYSTEM_INSTRUCTION},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=self.temperature,
            )
        except OpenAIError as e:
            raise ModelInvocationError(str(e), model=model) from e

        if not response.choices or not response.choices[0].message.content:
            raise MalformedOutputError("AI response was empty.", model=model)

        content = strip_code_fences(response.choices[0].message.content)
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedOutputError(f"AI response was not valid JSON: {e}", model=model) from e
