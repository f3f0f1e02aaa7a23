"""Tests for the AI content evaluator."""

import asyncio
import json

import pytest

from tests.conftest import DEFAULT_EVALUATION, FakeTextGenerator
from thrryv_stage.core.errors import (
    EvaluationError,
    EvaluationTimeoutError,
    InvalidInputError,
    MalformedEvaluationError,
)
from thrryv_stage.services.evaluator import (
    SYSTEM_INSTRUCTIONS,
    ContentEvaluator,
    build_prompt,
    parse_evaluation,
)


class SlowTextGenerator:
    async def generate(self, system_instructions: str, prompt: str, temperature: float) -> str:
        await asyncio.sleep(1)
        return json.dumps(DEFAULT_EVALUATION)


@pytest.mark.asyncio
async def test_evaluate_returns_parsed_evaluation() -> None:
    generator = FakeTextGenerator()
    evaluator = ContentEvaluator(generator, temperature=0.3)

    evaluation = await evaluator.evaluate("The sky is blue.")

    assert evaluation.quality_score == 80
    assert evaluation.improvements == ["Cite a source"]
    assert generator.calls == [
        (SYSTEM_INSTRUCTIONS, 'Evaluate this content: "The sky is blue."', 0.3)
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, "", "   \n\t"])
async def test_evaluate_rejects_blank_content_without_calling_provider(content) -> None:
    generator = FakeTextGenerator()
    evaluator = ContentEvaluator(generator)

    with pytest.raises(InvalidInputError):
        await evaluator.evaluate(content)

    assert generator.calls == []


@pytest.mark.asyncio
async def test_evaluate_returns_raw_out_of_range_scores() -> None:
    reply = dict(DEFAULT_EVALUATION, quality_score=150)
    evaluator = ContentEvaluator(FakeTextGenerator(json.dumps(reply)))

    evaluation = await evaluator.evaluate("Anything")

    assert evaluation.quality_score == 150


@pytest.mark.asyncio
async def test_evaluate_malformed_reply() -> None:
    evaluator = ContentEvaluator(FakeTextGenerator("Sure! Here is my evaluation."))

    with pytest.raises(MalformedEvaluationError):
        await evaluator.evaluate("Anything")


@pytest.mark.asyncio
async def test_evaluate_times_out() -> None:
    evaluator = ContentEvaluator(SlowTextGenerator(), timeout_seconds=0.01)

    with pytest.raises(EvaluationTimeoutError):
        await evaluator.evaluate("Anything")


@pytest.mark.asyncio
async def test_evaluate_propagates_provider_failure() -> None:
    generator = FakeTextGenerator(error=EvaluationError("AI provider is unreachable"))
    evaluator = ContentEvaluator(generator)

    with pytest.raises(EvaluationError) as exc_info:
        await evaluator.evaluate("Anything")

    assert exc_info.value.status_code == 502


def test_build_prompt_wraps_content() -> None:
    assert build_prompt("hello") == 'Evaluate this content: "hello"'


def test_parse_evaluation_strips_code_fence() -> None:
    text = "```json\n" + json.dumps(DEFAULT_EVALUATION) + "\n```"

    evaluation = parse_evaluation(text)

    assert evaluation.overall_score == 78


def test_parse_evaluation_applies_defaults() -> None:
    evaluation = parse_evaluation(
        json.dumps(
            {
                "quality_score": 10,
                "credibility_score": 20,
                "misinformation_risk": 30,
                "overall_score": 40,
            }
        )
    )

    assert evaluation.fact_checks == []
    assert evaluation.improvements == []
    assert evaluation.should_flag is False
    assert evaluation.flag_reason is None


@pytest.mark.parametrize(
    "text",
    [
        "",
        "[1, 2, 3]",
        json.dumps({"quality_score": 10}),
        json.dumps(dict(DEFAULT_EVALUATION, overall_score="high")),
        '{"quality_score": NaN, "credibility_score": 1, "misinformation_risk": 1, "overall_score": 1}',
    ],
)
def test_parse_evaluation_rejects_bad_payloads(text) -> None:
    with pytest.raises(MalformedEvaluationError):
        parse_evaluation(text)
