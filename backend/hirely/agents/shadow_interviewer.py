"""Shadow interviewer agent: persona-driven mock interviews.

Each turn asks the model for a JSON object with the interviewer's next
message and, once the candidate has answered something, structured
feedback on that answer. Feedback is optional: a reply whose feedback
block is missing or malformed still yields its message.
"""

import logging
from typing import AsyncIterator, Optional

from pydantic import TypeAdapter, ValidationError

from hirely.agents.personas import DIFFICULTIES, DIFFICULTY_GUIDANCE, get_persona
from hirely.schemas.common import FeatureResult
from hirely.schemas.interview import ChatMessage, InterviewTip, ShadowFeedback, ShadowTurn
from hirely.services.ai_client import CompletionError, json_completion, stream_completion

logger = logging.getLogger(__name__)

MAX_TIPS = 10

OPENING_INSTRUCTION = "Begin the interview. Acknowledge the candidate briefly and ask your first question."
TURN_INSTRUCTION = "Provide feedback on the user's response and ask your next question."

TIPS_SYSTEM = (
    'You are an expert career coach. Generate 10 highly specific "Unfair Advantage" interview tips '
    "based on this resume and job description."
)

_tip_list = TypeAdapter(list[InterviewTip])


def build_system_prompt(persona_id: str, difficulty: str, resume_text: str, jd_text: str, *, structured: bool = True) -> str:
    """Persona prompt for one session.

    structured=False drops the JSON reply contract; used when the reply is
    streamed to the client as plain text.
    """
    persona = get_persona(persona_id)
    rules = [
        "NEVER ask generic questions. Use specific details from the resume (projects, experiences, skills).",
        f"Stay in character as {persona['name']} throughout.",
    ]
    if difficulty == "high-stress":
        rules.append("Occasionally push back or express skepticism to test composure.")
    if structured:
        rules.append(
            'Respond with a JSON object: {"message": "<what you say to the candidate>", '
            '"feedback": {"score": <1-10 hireability score>, "refinement": "<a better way to phrase '
            'their answer>", "trap": "<what the interviewer was really looking for behind the question>"}}. '
            'Set "feedback" to null when the candidate has not answered anything yet.'
        )
    rules.append("Then ask your next question naturally.")
    numbered = "\n".join(f"{i}. {rule}" for i, rule in enumerate(rules, start=1))

    return f"""You are the "Polymath Shadow," an elite interview simulator for Hirely.ai. You are currently playing the role of: {persona['name']}.

YOUR PERSONA:
- Name: {persona['name']}
- Focus Areas: {persona['focus']}
- Communication Style: {persona['style']}

CANDIDATE RESUME:
{resume_text}

JOB DESCRIPTION:
{jd_text}

CURRENT DIFFICULTY: {difficulty.upper()}
- {DIFFICULTY_GUIDANCE[difficulty]}

SIMULATION RULES:
{numbered}"""


def _transcript_prompt(history: list[ChatMessage], answer: str) -> str:
    turns = [*history, ChatMessage(role="user", content=answer)]
    body = "\n\n".join(f"{m.role.upper()}: {m.content}" for m in turns)
    return f"{body}\n\n{TURN_INSTRUCTION}"


def _parse_feedback(value) -> Optional[ShadowFeedback]:
    if not isinstance(value, dict) or "score" not in value:
        return None
    try:
        float(value["score"])
    except (TypeError, ValueError, OverflowError):
        logger.debug("Discarding feedback with non-numeric score: %r", value.get("score"))
        return None
    try:
        return ShadowFeedback.model_validate(value)
    except ValidationError as e:
        logger.debug("Discarding malformed feedback block: %s", e)
        return None


def validate_session(persona_id: str, difficulty: str, resume_text: str, jd_text: str) -> Optional[str]:
    if not resume_text.strip() or not jd_text.strip():
        return "Please provide both resume and JD"
    if difficulty not in DIFFICULTIES:
        return f"Unknown difficulty: {difficulty}"
    try:
        get_persona(persona_id)
    except ValueError as e:
        return str(e)
    return None


async def _ask(persona_id: str, system_prompt: str, user_prompt: str) -> FeatureResult[ShadowTurn]:
    try:
        raw = await json_completion(system_prompt, user_prompt, temperature=0.7, max_tokens=1000)
    except CompletionError as e:
        logger.warning("Shadow interview turn failed: %s", e)
        return FeatureResult.failure(str(e))

    message = raw.get("message") if isinstance(raw, dict) else None
    if not isinstance(message, str) or not message.strip():
        logger.warning("Shadow interview reply had no message")
        return FeatureResult.failure("Interviewer reply had no message", kind="shape")
    return FeatureResult.success(
        ShadowTurn(message=message.strip(), feedback=_parse_feedback(raw.get("feedback")), persona=persona_id)
    )


async def start_interview(persona_id: str, difficulty: str, resume_text: str, jd_text: str) -> FeatureResult[ShadowTurn]:
    """Opening message: a brief acknowledgement and the first question."""
    problem = validate_session(persona_id, difficulty, resume_text, jd_text)
    if problem:
        return FeatureResult.failure(problem, kind="validation")
    system_prompt = build_system_prompt(persona_id, difficulty, resume_text, jd_text)
    return await _ask(persona_id, system_prompt, OPENING_INSTRUCTION)


async def interview_turn(
    history: list[ChatMessage],
    answer: str,
    persona_id: str,
    difficulty: str,
    resume_text: str,
    jd_text: str,
) -> FeatureResult[ShadowTurn]:
    """Feedback on the candidate's answer plus the next question.

    The persona may differ from earlier turns; switching mid-interview keeps
    the same history.
    """
    problem = validate_session(persona_id, difficulty, resume_text, jd_text)
    if problem:
        return FeatureResult.failure(problem, kind="validation")
    if not answer.strip():
        return FeatureResult.failure("Answer the question before continuing", kind="validation")
    system_prompt = build_system_prompt(persona_id, difficulty, resume_text, jd_text)
    return await _ask(persona_id, system_prompt, _transcript_prompt(history, answer))


async def stream_interview_turn(
    history: list[ChatMessage],
    answer: str,
    persona_id: str,
    difficulty: str,
    resume_text: str,
    jd_text: str,
) -> AsyncIterator[str]:
    """Plain-text interviewer reply, chunk by chunk. No feedback block.

    Raises ValueError on invalid input before any provider call.
    """
    problem = validate_session(persona_id, difficulty, resume_text, jd_text)
    if problem:
        raise ValueError(problem)
    system_prompt = build_system_prompt(persona_id, difficulty, resume_text, jd_text, structured=False)
    user_prompt = _transcript_prompt(history, answer) if answer.strip() else OPENING_INSTRUCTION
    stream = stream_completion(system_prompt, user_prompt, temperature=0.7, max_tokens=1000)
    try:
        async for chunk in stream:
            yield chunk
    finally:
        await stream.aclose()


def next_difficulty(scores: list[int], current: str) -> str:
    """Step one tier up after two scores >= 8, one tier down after two <= 4."""
    if current not in DIFFICULTIES or len(scores) < 2:
        return current
    last_two = scores[-2:]
    tier = DIFFICULTIES.index(current)
    if all(s >= 8 for s in last_two):
        tier = min(tier + 1, len(DIFFICULTIES) - 1)
    elif all(s <= 4 for s in last_two):
        tier = max(tier - 1, 0)
    return DIFFICULTIES[tier]


def average_score(scores: list[int]) -> float:
    if not scores:
        return 0.0
    return round(sum(scores) / len(scores), 1)


async def generate_interview_tips(resume_text: str, jd_text: str) -> FeatureResult[list[InterviewTip]]:
    if not resume_text.strip() or not jd_text.strip():
        return FeatureResult.failure("Please provide both resume and JD", kind="validation")

    user_prompt = f"""RESUME:
{resume_text}

JOB DESCRIPTION:
{jd_text}

Generate tips in JSON format:
{{
  "tips": [
    {{"title": "Short title", "content": "Detailed actionable tip", "category": "behavioral|technical|negotiation|general"}}
  ]
}}

Make tips SPECIFIC to this candidate's background - reference their actual projects, skills, and experiences."""

    try:
        raw = await json_completion(TIPS_SYSTEM, user_prompt, temperature=0.2, max_tokens=2000)
    except CompletionError as e:
        logger.warning("Interview tip generation failed: %s", e)
        return FeatureResult.failure(str(e))

    try:
        tips = _tip_list.validate_python(raw.get("tips", []) if isinstance(raw, dict) else [])
    except ValidationError as e:
        logger.warning("Interview tips failed validation: %s", e)
        return FeatureResult.failure("AI response did not contain usable tips", kind="shape")
    return FeatureResult.success(tips[:MAX_TIPS])
