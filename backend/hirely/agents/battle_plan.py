"""Interview-suite agent: battle plans, co-pilot nudges, and calibration.

The recruiter-side flow is Detective (battle plan from CV + JD), Co-Pilot
(follow-ups during the interview) and Calibration (AI grades and a short
summary once the transcript is in).
"""

import logging

from pydantic import ValidationError

from hirely.schemas.common import FeatureResult
from hirely.schemas.interview import GRADE_KEYS, BattlePlan, ChatMessage, Grades
from hirely.services.ai_client import (
    CompletionError,
    chat_messages,
    json_completion,
    text_completion,
)

logger = logging.getLogger(__name__)

MIN_TRANSCRIPT_CHARS = 50

DETECTIVE_SYSTEM = (
    "You are an expert technical interviewer and talent assessor at Hirely.ai. Your role is to "
    "analyze candidate CVs against job descriptions and create comprehensive interview battle-plans. "
    "You identify skill gaps, generate strategic questions, and create trap questions to validate "
    "claimed expertise."
)

NUDGE_SYSTEM = "You are the Shadow Interviewer at Hirely.ai. Provide 2 strategic follow-up questions."

COPILOT_SYSTEM = (
    "You are the Shadow Interviewer co-pilot at Hirely.ai, sitting in on a live interview. "
    "Answer the interviewer's questions about the conversation so far, point out vague or "
    "unverified claims, and suggest sharp follow-ups. Keep answers under 120 words.\n\n"
    "LIVE TRANSCRIPT:\n{transcript}"
)

ASSESS_SYSTEM = "You are an expert interviewer at Hirely.ai. Analyze transcripts and provide objective assessments."

SUMMARY_SYSTEM = "You are a professional interviewer. Create concise interview summaries."


async def generate_battle_plan(cv_text: str, jd_text: str, candidate_name: str) -> FeatureResult[BattlePlan]:
    """Risk factors, 10 core questions and 3 trap questions for one candidate.

    The counts are asked for in the prompt, not enforced on the reply.
    """
    if not cv_text.strip() or not jd_text.strip() or not candidate_name.strip():
        return FeatureResult.failure(
            "Candidate name, CV and job description are all required", kind="validation"
        )

    user_prompt = f"""Analyze this candidate CV against the Job Description and generate a comprehensive interview battle-plan.

CANDIDATE NAME: {candidate_name}

JOB DESCRIPTION:
{jd_text}

CANDIDATE CV:
{cv_text}

Provide your analysis in JSON format with the following structure:
{{
  "riskFactors": [
    {{"level": "high|medium|low", "description": "Detailed explanation of the risk factor or skill gap"}}
  ],
  "coreQuestions": [
    {{"question": "The interview question to ask", "purpose": "Why this question is important and what it tests", "expectedAnswer": "What a good answer should include or demonstrate"}}
  ],
  "trapQuestions": [
    {{"question": "A trap question designed to test deep expertise", "trap": "What makes this a trap question and what to watch for", "goodAnswer": "What a strong candidate should answer"}}
  ]
}}

Requirements:
- Generate 3-5 risk factors (prioritize high and medium risks)
- Generate exactly 10 core questions that test claimed expertise
- Generate exactly 3 trap questions to validate deep knowledge
- Be specific and actionable - questions should be tailored to this specific candidate and role
- Risk factors should identify actual skill gaps or concerns, not generic statements"""

    try:
        raw = await json_completion(DETECTIVE_SYSTEM, user_prompt, temperature=0.7, max_tokens=4096)
    except CompletionError as e:
        logger.warning("Battle plan generation failed for %s: %s", candidate_name, e)
        return FeatureResult.failure(str(e))

    if not isinstance(raw, dict) or not any(k in raw for k in ("riskFactors", "coreQuestions", "trapQuestions")):
        logger.warning("Battle plan reply had none of the expected sections")
        return FeatureResult.failure("Invalid response format from AI", kind="shape")
    try:
        return FeatureResult.success(BattlePlan.model_validate(raw))
    except ValidationError as e:
        logger.warning("Battle plan reply failed validation: %s", e)
        return FeatureResult.failure("Invalid response format from AI", kind="shape")


async def generate_follow_ups(question: str, purpose: str, response_transcript: str) -> FeatureResult[str]:
    """Two deep-dive follow-ups for a question, from the tail of the answer."""
    if not response_transcript.strip():
        return FeatureResult.failure("No transcript available", kind="validation")

    user_prompt = (
        f'Question: "{question}"\n'
        f"Purpose: {purpose}\n"
        f"Response: {response_transcript[-800:]}\n\n"
        "Provide 2 deep-dive follow-ups (numbered list, under 100 words)."
    )
    try:
        nudge = await text_completion(NUDGE_SYSTEM, user_prompt, temperature=0.7, max_tokens=256)
    except CompletionError as e:
        logger.warning("Follow-up generation failed: %s", e)
        return FeatureResult.failure(str(e))
    return FeatureResult.success(nudge.strip())


async def live_copilot_reply(messages: list[ChatMessage], transcript: str) -> FeatureResult[str]:
    """Answer the interviewer's latest message with the live transcript as context."""
    if not messages:
        return FeatureResult.failure("Ask the co-pilot something first", kind="validation")

    system_prompt = COPILOT_SYSTEM.format(transcript=transcript.strip() or "(nothing transcribed yet)")
    try:
        reply = await chat_messages(
            system_prompt,
            [m.model_dump() for m in messages],
            temperature=0.7,
            max_tokens=512,
        )
    except CompletionError as e:
        logger.warning("Co-pilot reply failed: %s", e)
        return FeatureResult.failure(str(e))
    return FeatureResult.success(reply.strip())


async def assess_transcript(candidate_name: str, jd_text: str, transcript: str) -> FeatureResult[Grades]:
    """AI grades (0-10) on six dimensions for the calibration view."""
    if len(transcript.strip()) < MIN_TRANSCRIPT_CHARS:
        return FeatureResult.failure("Transcript too short", kind="validation")

    user_prompt = (
        "Analyze this interview and provide grades (0-10) for: communication, technical, "
        "problemSolving, cultureFit, leadership, energy.\n\n"
        f"CANDIDATE: {candidate_name or 'Unknown'}\n"
        f"JD: {jd_text[:500]}...\n"
        f"TRANSCRIPT: {transcript[:3000]}...\n\n"
        'Return JSON: { "grades": { "communication": X, "technical": X, "problemSolving": X, '
        '"cultureFit": X, "leadership": X, "energy": X } }'
    )
    try:
        raw = await json_completion(ASSESS_SYSTEM, user_prompt, temperature=0.5, max_tokens=1024)
    except CompletionError as e:
        logger.warning("Transcript assessment failed: %s", e)
        return FeatureResult.failure(str(e))

    grades = raw.get("grades") if isinstance(raw, dict) else None
    if not isinstance(grades, dict):
        return FeatureResult.failure("AI response did not include grades", kind="shape")
    return FeatureResult.success(Grades.model_validate(grades))


async def summarize_interview(candidate_name: str, transcript: str) -> FeatureResult[str]:
    """3-4 sentence summary used as the candidate's notes."""
    if len(transcript.strip()) < MIN_TRANSCRIPT_CHARS:
        return FeatureResult.failure("Transcript too short", kind="validation")

    user_prompt = (
        f"Create a 3-4 sentence summary for: {candidate_name or 'Unknown'}\n"
        f"Transcript: {transcript[:2000]}"
    )
    try:
        summary = await text_completion(SUMMARY_SYSTEM, user_prompt, temperature=0.7, max_tokens=256)
    except CompletionError as e:
        logger.warning("Interview summary failed: %s", e)
        return FeatureResult.failure(str(e))
    return FeatureResult.success(summary.strip())


def grade_average(grades: Grades) -> float:
    values = [getattr(grades, key) for key in GRADE_KEYS]
    return sum(values) / len(values)
