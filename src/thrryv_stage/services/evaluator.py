"""AI content evaluation.

Sends raw content to the external AI capability with a fixed instruction set
and parses the strict-JSON reply into an `Evaluation`. The evaluator holds no
state and writes nothing; the same content may score differently across
calls.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re

from pydantic import ValidationError

from thrryv_stage.core.errors import (
    EvaluationTimeoutError,
    InvalidInputError,
    MalformedEvaluationError,
)
from thrryv_stage.core.settings import settings
from thrryv_stage.schemas.evaluation import Evaluation
from thrryv_stage.services.ai_client import TextGenerator

# Configure logger for this module
logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTIONS = """You are an AI content evaluator for Thrryv, a reputation-driven social platform.
Evaluate content for:
1. Quality Score (0-100): How useful, insightful, and well-articulated is the content?
2. Credibility Score (0-100): How credible and trustworthy is the information?
3. Misinformation Risk (0-100): What is the likelihood this contains misinformation?
4. Overall Score (0-100): Combined assessment of quality and credibility.

Also:
- Identify any claims that need fact-checking
- Suggest improvements
- Determine if content should be flagged

Respond in valid JSON format ONLY with no additional text:
{
  "quality_score": number,
  "credibility_score": number,
  "misinformation_risk": number,
  "overall_score": number,
  "fact_checks": [{"claim": string, "verdict": string, "confidence": number}],
  "improvements": [string],
  "should_flag": boolean,
  "flag_reason": string | null
}"""

# A lone ```json ... ``` wrapper around the object.
_CODE_FENCE = re.compile(r"^```(?:json)?\s*(?P<body>.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def build_prompt(content: str) -> str:
    """Return the user prompt sent alongside the system instructions."""
    return f'Evaluate this content: "{content}"'


def parse_evaluation(text: str) -> Evaluation:
    """Parse the provider's reply into an `Evaluation`.

    Raises:
        MalformedEvaluationError: If the reply is not a JSON object of the
            expected shape.
    """
    candidate = text.strip()
    fenced = _CODE_FENCE.match(candidate)
    if fenced:
        candidate = fenced.group("body")

    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise MalformedEvaluationError("Failed to parse AI evaluation") from exc

    if not isinstance(payload, dict):
        raise MalformedEvaluationError("Failed to parse AI evaluation")

    try:
        return Evaluation.model_validate(payload)
    except ValidationError as exc:
        raise MalformedEvaluationError("AI evaluation is missing required fields") from exc


class ContentEvaluator:
    """Scores content through an injected `TextGenerator`."""

    def __init__(
        self,
        generator: TextGenerator,
        *,
        temperature: float | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.generator = generator
        self.temperature = (
            settings.evaluator_temperature if temperature is None else temperature
        )
        self.timeout_seconds = (
            settings.evaluator_timeout_seconds if timeout_seconds is None else timeout_seconds
        )

    async def evaluate(self, content: str | None) -> Evaluation:
        """Evaluate a piece of content.

        The returned scores are the provider's raw values; run them through
        `normalize` before persisting or returning them.

        Raises:
            InvalidInputError: If the content is empty after trimming.
            EvaluationTimeoutError: If the provider does not answer in time.
            MalformedEvaluationError: If the reply cannot be parsed.
            EvaluationError: If the provider call fails otherwise.
        """
        if content is None or not content.strip():
            raise InvalidInputError("Content is required")

        try:
            text = await asyncio.wait_for(
                self.generator.generate(
                    SYSTEM_INSTRUCTIONS,
                    build_prompt(content),
                    self.temperature,
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            logger.warning("Content evaluation exceeded %.1fs", self.timeout_seconds)
            raise EvaluationTimeoutError("AI evaluation timed out") from exc

        try:
            return parse_evaluation(text)
        except MalformedEvaluationError:
            logger.warning("AI provider returned a malformed evaluation: %.200r", text)
            raise
