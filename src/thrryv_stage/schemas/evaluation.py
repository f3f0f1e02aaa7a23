"""Schemas for AI content evaluations."""

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat


class FactCheck(BaseModel):
    """A single claim the evaluator singled out for fact-checking."""

    claim: str
    verdict: str
    confidence: FiniteFloat


class Evaluation(BaseModel):
    """Structured evaluation of a piece of content.

    The four scores are intended to lie in [0, 100]; only evaluations that
    went through the score normalizer are guaranteed to.
    """

    quality_score: FiniteFloat
    credibility_score: FiniteFloat
    misinformation_risk: FiniteFloat
    overall_score: FiniteFloat
    fact_checks: list[FactCheck] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    should_flag: bool = False
    flag_reason: str | None = None

    model_config = ConfigDict(extra="ignore")


class EvaluateContentRequest(BaseModel):
    """Body of the evaluate-content endpoint."""

    content: str | None = Field(None, description="Raw content to evaluate")
