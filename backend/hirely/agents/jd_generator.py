"""JD generator agent: "Mission Blueprint" job descriptions.

Generation is one JSON completion. Everything after it (talent density
score, flattened text, bias scan) is computed locally.
"""

import logging
import math

from pydantic import ValidationError

from hirely.schemas.common import FeatureResult
from hirely.schemas.jd import GeneratedJD, JDRequest, JDResult
from hirely.services.ai_client import CompletionError, json_completion
from hirely.services.bias_scanner import detect_bias

logger = logging.getLogger(__name__)

JD_STYLES = {
    "startup": {"name": "Startup Vibe", "description": "Energetic, mission-driven"},
    "corporate": {"name": "Corporate Pro", "description": "Formal, structured"},
    "technical": {"name": "Tech-Forward", "description": "Skills-focused, detailed"},
    "creative": {"name": "Creative Agency", "description": "Bold, inspiring"},
}

SENIORITY_LEVELS = [
    "Entry Level", "Junior", "Mid-Level", "Senior", "Lead",
    "Principal", "Director", "VP", "C-Level",
]

DEPARTMENTS = [
    "Engineering", "Product", "Design", "Marketing", "Sales", "Operations", "Finance",
    "HR", "Legal", "Customer Success", "Data Science", "DevOps", "Security",
]

DEFAULT_COMPENSATION = "Competitive salary + equity"


def _system_prompt(request: JDRequest) -> str:
    style = JD_STYLES.get(request.style, JD_STYLES["startup"])
    compensation = request.salary_range if request.include_compensation and request.salary_range else DEFAULT_COMPENSATION
    return f"""You are a world-class Silicon Valley talent acquisition expert. Create a compelling "Mission Blueprint" job description that attracts exceptional talent.

Style: {style["name"]} - {style["description"]}

Return a JSON object with this EXACT structure:
{{
  "roleTitle": "Full role title",
  "missionStatement": "One inspiring sentence about the role's impact",
  "overview": "2-3 paragraph compelling description of the role and its importance",
  "first90Days": [
    {{ "day": "Day 1-30", "milestone": "What they'll accomplish" }},
    {{ "day": "Day 31-60", "milestone": "What they'll accomplish" }},
    {{ "day": "Day 61-90", "milestone": "What they'll accomplish" }}
  ],
  "coreRequirements": ["Requirement 1", "Requirement 2"],
  "niceToHave": ["Bonus skill 1", "Bonus skill 2"],
  "culturePulse": [
    {{ "trait": "Trait name", "description": "What this means at our company" }}
  ],
  "talentDensity": "Description of what exceptional looks like in this role",
  "growthPath": ["Year 1 potential", "Year 2-3 potential", "Long-term trajectory"],
  "compensation": "{compensation}",
  "benefits": ["Benefit 1", "Benefit 2"]
}}

Make it compelling, specific, and free of bias. Use inclusive language."""


def _user_prompt(request: JDRequest) -> str:
    lines = [
        "Create a Mission Blueprint JD for:",
        f"Role: {request.seniority} {request.role_title}",
        f"Department: {request.department}",
        f"Team Context: {request.team_context or 'Growing team focused on innovation'}",
        f"Company Info: {request.company_info or 'Fast-growing tech company'}",
    ]
    if request.include_compensation:
        lines.append(f"Salary Range: {request.salary_range}")
    lines.append("")
    lines.append("Generate a professional, compelling job description that would attract top-tier talent.")
    return "\n".join(lines)


def talent_density_score(jd: GeneratedJD, seniority: str) -> int:
    """30 base, +5 per core requirement, +2.5 per nice-to-have, +20 for Senior/Lead; capped at 100."""
    requirement_weight = len(jd.core_requirements) + 0.5 * len(jd.nice_to_have)
    bonus = 20 if ("Senior" in seniority or "Lead" in seniority) else 0
    # Halves round up.
    return min(100, math.floor(30 + requirement_weight * 5 + bonus + 0.5))


def _bullets(items: list[str]) -> str:
    return "\n".join(f"• {item}" for item in items)


def format_jd_text(jd: GeneratedJD) -> str:
    """Flatten a generated JD into the editable plain-text layout."""
    blocks = [
        jd.role_title,
        jd.mission_statement,
        f"ABOUT THE ROLE\n{jd.overview}",
        "FIRST 90 DAYS\n" + "\n".join(f"• {m.day}: {m.milestone}" for m in jd.first_90_days),
        f"WHAT YOU'LL BRING\n{_bullets(jd.core_requirements)}",
        f"NICE TO HAVE\n{_bullets(jd.nice_to_have)}",
        "OUR CULTURE\n" + "\n".join(f"• {c.trait}: {c.description}" for c in jd.culture_pulse),
        f"WHAT EXCEPTIONAL LOOKS LIKE\n{jd.talent_density}",
        f"GROWTH PATH\n{_bullets(jd.growth_path)}",
    ]
    if jd.compensation:
        blocks.append(f"COMPENSATION\n{jd.compensation}")
    if jd.benefits:
        blocks.append(f"BENEFITS\n{_bullets(jd.benefits)}")
    return "\n\n".join(blocks)


async def generate_jd(request: JDRequest) -> FeatureResult[JDResult]:
    if not request.role_title.strip():
        return FeatureResult.failure("Enter a role title", kind="validation")

    try:
        raw = await json_completion(
            _system_prompt(request), _user_prompt(request), temperature=0.7, max_tokens=4000
        )
    except CompletionError as e:
        logger.warning("JD generation failed for %r: %s", request.role_title, e)
        return FeatureResult.failure(str(e))

    try:
        jd = GeneratedJD.model_validate(raw)
    except ValidationError as e:
        logger.warning("JD generation returned an unexpected shape: %s", e)
        return FeatureResult.failure("AI response did not match the expected JD shape", kind="shape")

    text = format_jd_text(jd)
    return FeatureResult.success(
        JDResult(
            jd=jd,
            text=text,
            talent_density_score=talent_density_score(jd, request.seniority),
            bias_flags=detect_bias(text),
        )
    )
