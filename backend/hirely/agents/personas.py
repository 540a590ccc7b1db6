"""Interviewer persona definitions for the shadow interview."""

DEFAULT_PERSONA = "tech-lead"

DIFFICULTIES = ["coaching", "standard", "high-stress"]

DIFFICULTY_GUIDANCE = {
    "coaching": "Be supportive, offer hints, and build the candidate's confidence.",
    "standard": "Run a professional interview with a balanced level of challenge.",
    "high-stress": "Push back, interrupt occasionally, and test the candidate's composure.",
}

PERSONAS = {
    "ceo": {
        "name": "The Visionary CEO",
        "emoji": "👔",
        "focus": "long-term strategy, cultural fit, leadership potential, and soft skills",
        "style": "thoughtful, strategic, occasionally philosophical",
    },
    "tech-lead": {
        "name": "The Skeptical Tech Lead",
        "emoji": "💻",
        "focus": 'technical depth, system design, edge cases, and "Why X over Y?" decisions',
        "style": "direct, challenging, technically rigorous, sometimes interrupts",
    },
    "recruiter": {
        "name": "The Gritty Recruiter",
        "emoji": "🎯",
        "focus": "immediate value, compensation expectations, availability, and cultural logistics",
        "style": "pragmatic, fast-paced, focused on specifics and timelines",
    },
}


def get_persona(persona_key: str) -> dict:
    """Get a persona by key."""
    if persona_key not in PERSONAS:
        raise ValueError(f"Unknown persona: {persona_key}")
    return PERSONAS[persona_key]


def get_all_persona_keys() -> list[str]:
    return list(PERSONAS.keys())
