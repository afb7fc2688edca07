"""
Structured Extraction Client

Thin wrapper around the OpenAI chat completions API in JSON mode.
Sends an instruction (with the target schema) plus page text and
returns the parsed JSON object.

Usage:
    client = StructuredExtractionClient.from_settings(settings)
    data = client.extract(PRICE_INSTRUCTION, PRICE_SCHEMA, text,
                          model="gpt-4.1-mini", subject="product pricing information")
"""

import json
import logging
from typing import Any, Dict

import openai
from openai import OpenAI

from ..common.config_loader import CrawlerSettings

logger = logging.getLogger(__name__)


class ExtractionServiceError(Exception):
    """The extraction call failed or returned something other than a JSON object."""


class StructuredExtractionClient:
    """Schema-constrained extraction backed by an injected OpenAI client."""

    def __init__(self, client: OpenAI):
        """
        Initialize the extraction client.

        Args:
            client: Configured OpenAI client (created once per process)
        """
        self.client = client

    @classmethod
    def from_settings(cls, settings: CrawlerSettings) -> "StructuredExtractionClient":
        """Create the OpenAI client from settings."""
        return cls(OpenAI(api_key=settings.openai_api_key))

    def extract(
        self,
        instruction: str,
        schema: Dict[str, Any],
        text: str,
        model: str,
        subject: str = "information",
    ) -> Dict[str, Any]:
        """
        Run one extraction call.

        Args:
            instruction: System instruction; ``{schema}`` is replaced with the schema
            schema: JSON schema the response should follow
            text: Input text (already normalized and truncated)
            model: OpenAI model name
            subject: What to extract, used in the user message

        Returns:
            Parsed JSON object

        Raises:
            ExtractionServiceError: On API errors, malformed responses or invalid JSON
        """
        system_prompt = instruction.replace("{schema}", json.dumps(schema, indent=2))
        user_prompt = f"Extract the {subject} as JSON from this HTML content: {text}"

        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            raise ExtractionServiceError(f"{type(e).__name__}: {e}") from e

        usage = getattr(response, "usage", None)
        logger.info(
            "Token usage (%s): prompt=%d, completion=%d, total=%d",
            model,
            getattr(usage, "prompt_tokens", 0) or 0,
            getattr(usage, "completion_tokens", 0) or 0,
            getattr(usage, "total_tokens", 0) or 0,
        )

        try:
            content = response.choices[0].message.content or "{}"
        except (IndexError, AttributeError) as e:
            raise ExtractionServiceError(f"Malformed response: {e}") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ExtractionServiceError(f"Invalid JSON in response: {e}") from e

        if not isinstance(data, dict):
            raise ExtractionServiceError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        return data
