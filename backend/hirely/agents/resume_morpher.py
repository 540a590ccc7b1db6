"""Resume morpher agent: matches a resume to a job description.

Covers morphing (score + reorder), skill insights, summary rewriting,
resume drafting from a prompt, per-section suggestions, and the
"Liquid Resume" gap analysis.
"""

import json
import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from hirely.schemas.common import FeatureResult
from hirely.schemas.resume import (
    DEFAULT_SECTION_ORDER,
    GapAnalysis,
    MorphAnalysis,
    MorphedResume,
    Resume,
    ResumeDraft,
    SkillInsight,
    SuggestionSection,
)
from hirely.services.ai_client import CompletionError, json_completion, text_completion
from hirely.services.json_extract import NoJSONFoundError, parse_json_lenient

logger = logging.getLogger(__name__)

SUGGESTIONS_UNAVAILABLE = ["Unable to generate suggestions at this time"]

MORPH_SYSTEM = (
    "You are an expert resume optimizer and ATS (Applicant Tracking System) specialist. "
    "Analyze job descriptions and resumes to provide precise matching insights."
)

SKILLS_SYSTEM = "You are a career development expert specializing in skill categorization and market analysis."

SUMMARY_SYSTEM = (
    "You are a professional resume writer specializing in crafting compelling career summaries. "
    "Write concise, impactful summaries that highlight relevant experience and match job requirements."
)

GENERATE_SYSTEM = "You are a professional resume builder. Create structured resume content based on user descriptions."

SUGGESTIONS_SYSTEM = "You are a resume improvement expert. Provide specific, actionable suggestions."

GAP_SYSTEM = (
    "You are the Liquid Resume Architect. Compare a candidate resume with a job description "
    "and respond with a JSON object containing:\n"
    '1. "gapAnalysis": array of {skill, importance: "critical" | "important" | "nice-to-have", suggestion}\n'
    '2. "morphSuggestions": array of {original, suggested, reason} rewriting specific resume bullets\n'
    '3. "talentDensityScore": number 0-100 for the overall match\n'
    "Be specific and actionable."
)

_skill_list = TypeAdapter(list[SkillInsight])
_string_list = TypeAdapter(list[str])


def _reorder(items: list, indices: Optional[list[int]]) -> list:
    """Apply the model's ordering; unknown or repeated indices are dropped."""
    if not indices:
        return list(items)
    seen: set[int] = set()
    ordered = []
    for idx in indices:
        if isinstance(idx, int) and 0 <= idx < len(items) and idx not in seen:
            seen.add(idx)
            ordered.append(items[idx])
    return ordered or list(items)


def _unavailable(resume: Resume, error: str) -> MorphedResume:
    return MorphedResume(
        **resume.model_dump(),
        match_score=0,
        highlighted_skills=[],
        prioritized_sections=list(DEFAULT_SECTION_ORDER),
        analysis_available=False,
        error=error,
    )


async def morph_resume_for_jd(resume: Resume, job_description: str) -> MorphedResume:
    """Score a resume against a JD and reorder its experience.

    Never raises on provider or shape problems: the original resume comes
    back untouched with analysis_available=False.
    """
    user_prompt = (
        "Analyze this job description and resume, then provide optimization insights.\n\n"
        f"Job Description:\n{job_description}\n\n"
        f"Resume:\n{json.dumps(resume.model_dump(exclude_none=True), indent=2)}\n\n"
        "Return a JSON object with:\n"
        "{\n"
        '  "matchScore": <number 0-100>,\n'
        '  "highlightedSkills": [<array of skills from resume that match JD>],\n'
        '  "prioritizedExperienceIndices": [<array of indices showing best order for experience items>],\n'
        '  "recommendedSectionOrder": ["experience", "skills", "projects", "education"],\n'
        '  "reasoning": "<brief explanation>"\n'
        "}"
    )

    try:
        raw = await json_completion(MORPH_SYSTEM, user_prompt, temperature=0.3, max_tokens=2048)
        analysis = MorphAnalysis.model_validate(raw)
    except CompletionError as e:
        logger.warning("Resume morphing failed: %s", e)
        return _unavailable(resume, str(e))
    except ValidationError as e:
        logger.warning("Resume morphing returned an unexpected shape: %s", e)
        return _unavailable(resume, "AI response did not match the expected shape")

    logger.debug("Resume morphing analysis: %s", analysis.reasoning)
    morphed = resume.model_dump()
    morphed["experience"] = _reorder(resume.experience, analysis.prioritized_experience_indices)
    return MorphedResume(
        **morphed,
        match_score=analysis.match_score,
        highlighted_skills=analysis.highlighted_skills,
        prioritized_sections=analysis.recommended_section_order or list(DEFAULT_SECTION_ORDER),
        analysis_available=True,
        reasoning=analysis.reasoning,
    )


async def generate_skill_insights(skills: list[str]) -> list[SkillInsight]:
    """Categorize skills and estimate a 1-10 level; falls back to General/5."""
    fallback = [SkillInsight(skill=s, category="General", level=5) for s in skills]
    if not skills:
        return []

    user_prompt = (
        "Analyze these skills and categorize them. For each skill, provide:\n"
        '- category (e.g., "Frontend", "Backend", "DevOps", "Soft Skills", "Data Science", etc.)\n'
        "- level (estimated proficiency 1-10 based on common industry standards)\n\n"
        f"Skills: {', '.join(skills)}\n\n"
        'Return a JSON object: {"insights": [{"skill": "React", "category": "Frontend", "level": 8}]}'
    )
    try:
        raw = await json_completion(SKILLS_SYSTEM, user_prompt, temperature=0.2, max_tokens=1024)
        # JSON mode always returns an object; accept a bare array too.
        items = raw.get("insights", []) if isinstance(raw, dict) else raw
        insights = _skill_list.validate_python(items)
    except (CompletionError, ValidationError) as e:
        logger.warning("Skill insight generation failed: %s", e)
        return fallback
    return insights or fallback


async def optimize_summary(summary: str, job_description: str) -> str:
    """Rewrite a professional summary for a JD; the original on failure."""
    user_prompt = (
        "Rewrite this professional summary to better match the job description.\n"
        "Keep it concise (2-3 sentences), professional, and impactful.\n"
        "Focus on the most relevant experience and skills for this role.\n\n"
        f"Current Summary:\n{summary}\n\n"
        f"Target Job Description:\n{job_description}\n\n"
        "Return ONLY the optimized summary text, no explanations or formatting."
    )
    try:
        optimized = await text_completion(SUMMARY_SYSTEM, user_prompt, temperature=0.5, max_tokens=256)
    except CompletionError as e:
        logger.warning("Summary optimization failed: %s", e)
        return summary
    return optimized.strip() or summary


async def generate_resume_from_prompt(prompt: str) -> FeatureResult[ResumeDraft]:
    """Draft resume content from a free-text description of the candidate."""
    if not prompt.strip():
        return FeatureResult.failure("Describe the candidate before generating a resume", kind="validation")

    user_prompt = (
        f"Based on this description, generate resume content:\n\n{prompt}\n\n"
        "Return a JSON object with:\n"
        "{\n"
        '  "personal": {"title": "<job title>", "summary": "<professional summary>"},\n'
        '  "experience": [{"title": "<job title or project name>", "items": ["<achievement 1>", "<achievement 2>"]}],\n'
        '  "skills": ["<skill 1>", "<skill 2>"],\n'
        '  "education": [{"title": "<degree or certification>", "items": []}]\n'
        "}"
    )
    try:
        raw = await json_completion(GENERATE_SYSTEM, user_prompt, temperature=0.7, max_tokens=2048)
    except CompletionError as e:
        logger.warning("Resume generation failed: %s", e)
        return FeatureResult.failure(str(e))
    try:
        return FeatureResult.success(ResumeDraft.model_validate(raw))
    except ValidationError as e:
        logger.warning("Resume generation returned an unexpected shape: %s", e)
        return FeatureResult.failure("AI response did not match the expected resume shape", kind="shape")


async def get_resume_suggestions(resume: Resume, section: SuggestionSection) -> list[str]:
    """3-5 improvement suggestions for one resume section."""
    payload = resume.personal.model_dump() if section == "summary" else resume.model_dump()[section]
    user_prompt = (
        "Review this resume section and provide 3-5 specific improvement suggestions.\n\n"
        f"Resume Section ({section}):\n{json.dumps(payload, indent=2)}\n\n"
        'Return a JSON object: {"suggestions": ["<suggestion 1>", "<suggestion 2>", "<suggestion 3>"]}'
    )
    try:
        raw = await json_completion(SUGGESTIONS_SYSTEM, user_prompt, temperature=0.6, max_tokens=512)
        items = raw.get("suggestions", []) if isinstance(raw, dict) else raw
        suggestions = _string_list.validate_python(items)
    except (CompletionError, ValidationError) as e:
        logger.warning("Suggestion generation failed: %s", e)
        return list(SUGGESTIONS_UNAVAILABLE)
    return suggestions or list(SUGGESTIONS_UNAVAILABLE)


async def analyze_resume_gaps(resume_text: str, job_description: str) -> FeatureResult[GapAnalysis]:
    """Gap analysis with bullet rewrites and a talent density score.

    Uses a plain text completion, so the reply may wrap its JSON in prose
    or fences; it is recovered with parse_json_lenient.
    """
    if not resume_text.strip() or not job_description.strip():
        return FeatureResult.failure("Both a resume and a job description are required", kind="validation")

    user_prompt = (
        "Analyze this resume against the job description:\n\n"
        f"JOB DESCRIPTION:\n{job_description}\n\n"
        f"CANDIDATE RESUME:\n{resume_text}\n\n"
        "Provide your analysis as a JSON object with gapAnalysis (missing skills with importance levels), "
        "morphSuggestions (specific bullet rewrites), and talentDensityScore (0-100 overall match)."
    )
    try:
        content = await text_completion(GAP_SYSTEM, user_prompt, temperature=0.5, max_tokens=4096)
    except CompletionError as e:
        logger.warning("Resume gap analysis failed: %s", e)
        return FeatureResult.failure(str(e))

    try:
        parsed = parse_json_lenient(content)
        return FeatureResult.success(GapAnalysis.model_validate(parsed))
    except (NoJSONFoundError, ValidationError) as e:
        logger.warning("Resume gap analysis returned an unusable reply: %s", e)
        return FeatureResult.failure("AI response did not contain a usable gap analysis", kind="shape")
