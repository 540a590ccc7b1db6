"""Market oracle agent: career intelligence for a skill set."""

import logging

from pydantic import ValidationError

from hirely.schemas.common import FeatureResult
from hirely.schemas.market import MarketInsights
from hirely.services.ai_client import CompletionError, text_completion
from hirely.services.json_extract import NoJSONFoundError, parse_json_lenient

logger = logging.getLogger(__name__)

ORACLE_SYSTEM = """You are the Hirely.ai Market Oracle. Analyze skill sets and provide career intelligence.

You MUST respond with a valid JSON object containing:
1. "marketValueScore": Number 0-100 (overall market value)
2. "salaryRange": {min: number, max: number, median: number} (in USD)
3. "demandLevel": "high" | "medium" | "low"
4. "skillHeatmap": Array of {skill: string, demand: number, growth: number}
5. "nextLogicalSkill": {name: string, reason: string, potentialIncrease: number}
6. "careerPaths": Array of {title: string, probability: number}

Base your analysis on current market trends for tech roles."""


async def get_market_insights(skills: list[str]) -> FeatureResult[MarketInsights]:
    cleaned = [s.strip() for s in skills if s.strip()]
    if not cleaned:
        return FeatureResult.failure("Add at least one skill", kind="validation")

    user_prompt = (
        "Analyze the market value and career potential for this skill set:\n"
        f"Skills: {', '.join(cleaned)}\n\n"
        "Provide comprehensive market intelligence as a JSON object."
    )
    try:
        content = await text_completion(ORACLE_SYSTEM, user_prompt, temperature=0.5, max_tokens=2048)
    except CompletionError as e:
        logger.warning("Market insight generation failed: %s", e)
        return FeatureResult.failure(str(e))

    try:
        return FeatureResult.success(MarketInsights.model_validate(parse_json_lenient(content)))
    except (NoJSONFoundError, ValidationError, OverflowError) as e:
        logger.warning("Market insights reply was unusable: %s", e)
        return FeatureResult.failure("AI response did not contain usable market insights", kind="shape")


def calculate_fit_score(user_skills: list[str], job_skills: list[str]) -> float:
    """Share of the job's skills the user covers, clamped to [0.1, 1].

    A job skill counts as covered when it and one of the user's skills
    contain each other, case-insensitively. A job with no listed skills
    scores 0.5.
    """
    if not job_skills:
        return 0.5
    mine = [s.strip().lower() for s in user_skills if s.strip()]
    matched = [
        skill for skill in job_skills
        if any(m in skill.lower() or skill.lower() in m for m in mine)
    ]
    return min(1.0, max(0.1, len(matched) / len(job_skills)))
