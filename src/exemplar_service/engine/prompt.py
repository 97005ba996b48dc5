"""Prompt construction for the exemplar model.

The system prompt carries the studio ethos: vocabulary to use and avoid, the
JT section labels, the studio voice, the numbered criteria and the strict JSON
output contract. The user prompt quotes the project directions verbatim and
spells out the exact JSON shape to return.
"""

import json

PREFERRED_TERMS = (
    "learners",
    "guides",
    "studio",
    "badge",
    "session",
    "exhibition",
    "tribe",
    "audit committee",
    "world-class",
    "JourneyTracker (JT)",
)

AVOIDED_TERMS = (
    "students",
    "teacher(s)",
    "classroom",
    "assignment(s)",
    "grade(s)/report card(s)",
    "homework",
)

SECTION_LABELS = ("Goal", "Process", "Evidence", "Reflection", "Peer Feedback", "Next Step")

VOICE_BY_STUDIO = {
    "ES": (
        "ES (7–11): Grade 2–4 readability; short sentences (≤12 words); 2–4 sentence "
        'paragraphs; first-person "I… because… I noticed… Next I will…".'
    ),
    "MS": (
        "MS (12–15): Grade 6–8 readability; short headings and bullets allowed; "
        "concrete evidence and simple citations."
    ),
    "LP": (
        "LP (16–18): Professional, concise, plain English; clear claims → evidence → "
        "citation; analytical tone."
    ),
}

LENGTH_BY_STUDIO = {
    "ES": "Keep each submission under 200 words.",
    "MS": "Aim for 200–350 words per submission.",
    "LP": "Write at least 350 words for the world-class submission.",
}

OUTPUT_SHAPE = """{
  "worldClass": {
    "text": "full JT text with line breaks",
    "criteriaCovered": ["criterion", "criterion", "criterion"]
  },
  "notApproved": {
    "text": "full JT text with line breaks",
    "criteriaMissing": ["criterion", "criterion"]
  }
}"""


def format_criteria(criteria: list[str]) -> str:
    return "\n".join(f"{i}. {c}" for i, c in enumerate(criteria, start=1))


def build_system_prompt(studio: str, criteria: list[str]) -> str:
    voice = "\n".join(f"- {v}" for v in VOICE_BY_STUDIO.values())
    use_terms = ", ".join(PREFERRED_TERMS)
    avoid_terms = ", ".join(AVOIDED_TERMS)
    structure = " • ".join(SECTION_LABELS)
    length_rule = LENGTH_BY_STUDIO.get(studio, "Keep readability aligned to the studio.")
    return f"""You are a Guide at Acton Academy. Your job is to produce two contrasting JourneyTracker (JT) submissions from project directions: a WORLD-CLASS example and a NOT APPROVED example.

ACTON ETHOS & TERMS (MUST FOLLOW)
- Use: {use_terms}.
- Avoid: {avoid_terms}. Use these only if quoted from the prompt.
- Guides never judge quality or approve badges; peers do. Encourage peer review, not guide approval.

EXCELLENCE ORIENTATION
- Standards focus on doing hard things with freedom and responsibility.
- For repeated attempts: flag improvement ("better than last time").
- In upper studios, note world-class comparison and public exhibition/contest when appropriate.

VOICE & READABILITY BY STUDIO
{voice}

STRUCTURE (use section labels in the text)
{structure}

CRITERIA TO TARGET FOR {studio}
{format_criteria(criteria)}

OUTPUT CONTRACT
- Return STRICT JSON only (no prose, no markdown, no code fences).
- Use natural paragraphing and \\n line breaks inside the JSON strings.
- WORLD-CLASS must explicitly satisfy the listed criteria for {studio}.
- NOT APPROVED must clearly miss several key criteria in a realistic way (respectful tone, no sarcasm).
- {length_rule}
- Use Acton terminology and studio context throughout."""


def build_user_prompt(studio: str, prompt_text: str, criteria: list[str]) -> str:
    criteria_json = json.dumps(criteria, ensure_ascii=False)
    sections = ", ".join(SECTION_LABELS)
    use_terms = ", ".join(PREFERRED_TERMS)

    return f"""Project Directions: "{prompt_text}"

Studio: {studio}
Criteria: {criteria_json}

Create TWO JourneyTracker submissions about these directions for the specified studio:

1) WORLD-CLASS EXAMPLE: Meets ALL criteria. Clear sections: {sections}.
2) NOT APPROVED EXAMPLE: Misses SEVERAL key criteria (e.g., no evidence, vague goal, no sources, no revision). Keep tone respectful and realistic.

FORMATTING
- Write like real learner work with natural paragraph breaks and headings.
- Use \\n for line breaks. Keep readability aligned to the studio.

CRITICAL: Return ONLY valid JSON. No markdown, no code blocks, no extra text.

{OUTPUT_SHAPE}

Rules:
- "criteriaCovered" and "criteriaMissing" must be copied exactly from the provided Criteria array for {studio}. Do not invent criteria.
- Use Acton terms ({use_terms}).
- Do not ask a guide to approve a badge; suggest peer feedback or audit processes if relevant."""
