"""Deterministic fallback examples.

Used whenever the model cannot be reached or its output cannot be parsed.
Each studio has a hand-written world-class template (every JT section present)
and a not-approved template that leaves out evidence, sources and real
reflection. The project prompt is clipped and dropped into the opening line.
Output depends only on the inputs: no randomness, no I/O.
"""

from ..config import PolicyConfig, policy_config
from ..criteria.catalog import get_criteria
from ..policy.policy import default_criteria_covered, default_criteria_missing
from ..schemas.response import Example, GenerationResult

WORLD_CLASS_TEMPLATES = {
    "ES": """Goal
My goal is to show I understand {topic}.

Process
I planned, tried, and fixed mistakes. I wrote notes each day.

Evidence
[Photo: my labeled work]
[Link: simple resource I used]

Reflection
I learned one clear idea and why it matters.
Next I will improve one part tomorrow.

Peer Feedback
A studio mate reviewed it. I changed two parts.

Next Step
I will add one more example and a clearer label.""",
    "MS": """Goal
Complete a clear deliverable on {topic} by Friday.

Process
Planned tasks, researched, built artifact, revised once after feedback.

Evidence
[Artifact link]
[Photo with caption]
[Data table]

Sources
Title, Author (link); Article (link).

Reflection
What changed in my thinking and why.

Peer Feedback
Reviewer: studio mate; Changes: clarified method and added caption.

Next Step
Specific improvement and due date; how this is better than last time.""",
    "LP": """Goal
Deliver a professional analysis of {topic} with a clear deliverable, stated constraints, and two success metrics an outside reviewer can check by exhibition day.

Process
I scoped the question in the first session, listed constraints (time, budget, access to data) and named the main risks before starting. I gathered data from primary and secondary sources, logged every decision in my JT, and ran one small test before committing to the full build. After the first draft I compared my work with a world-class exemplar, rewrote the weakest section, and ran the test again with the changes.

Evidence
Each claim in my findings is backed by data and followed by a short interpretation, not a summary of what others said.
[Data table: baseline vs. second test results]
[Chart: trend across three iterations with labeled axes]
[Link: project folder with raw notes, verified]
Attachments share one format and every link was checked the day before submission.

Citations
1. Primary source with author, title and date, cited in-line where used.
2. Industry or government report supporting the main finding.
3. Expert source that challenges one of my assumptions, with my response.

World-Class Comparison
I compared my analysis with a published professional example. The gap was depth of data: the exemplar tested with real users while I relied on desk research. My plan to close the gap is a user test with five people before the next iteration.

Reflection
Compared with my last iteration, my claims are tighter and every number has a source. My thinking changed when the second test contradicted my first assumption; instead of hiding the result, I rebuilt the findings around it. The hardest part was cutting material that was interesting but did not serve the deliverable.

Peer Feedback
I presented a draft to two studio mates and one outside expert. The expert questioned my success metric, so I replaced a vague target with a measurable one. A peer flagged unclear headings, and I restructured the document to follow claim, evidence, citation.

Next Step
Run the user test by the end of next session, update the findings with the new data, and present the final version at exhibition. I will record whether this iteration beats the last one on both success metrics, with the date of the next test in my JT.""",
}

NOT_APPROVED_TEMPLATES = {
    "ES": """Goal
I did a project about {topic}.

Process
I worked on it.

Evidence
(Nothing attached)

Reflection
I think it is good.""",
    "MS": """Goal
Research {topic}.

Process
Looked things up.

Evidence
Nothing added yet; no captions.

Sources
Not listed.

Reflection
I learned a lot.""",
    "LP": """Overview
Project about {topic}.

Method
General search; not documented.

Findings
Summary without data.

Citations
Missing.

Reflection
Seems fine.""",
}


def clip_prompt(prompt_text: str, limit: int) -> str:
    prompt_text = prompt_text.strip()
    if len(prompt_text) > limit:
        return prompt_text[:limit] + "..."
    return prompt_text


def fallback_world_class_text(studio: str, prompt_text: str, limit: int = 80) -> str:
    return WORLD_CLASS_TEMPLATES[studio].format(topic=clip_prompt(prompt_text, limit))


def fallback_not_approved_text(studio: str, prompt_text: str, limit: int = 80) -> str:
    return NOT_APPROVED_TEMPLATES[studio].format(topic=clip_prompt(prompt_text, limit))


def build_fallback_result(
    studio: str,
    prompt_text: str,
    api_error: str,
    policy: PolicyConfig | None = None,
) -> GenerationResult:
    policy = policy or policy_config
    criteria = get_criteria(studio)
    limit = policy.fallback.prompt_preview_chars

    return GenerationResult(
        world_class=Example(
            text=fallback_world_class_text(studio, prompt_text, limit),
            criteria_covered=default_criteria_covered(criteria, policy.defaults),
        ),
        not_approved=Example(
            text=fallback_not_approved_text(studio, prompt_text, limit),
            criteria_missing=default_criteria_missing(criteria, policy.defaults),
        ),
        criteria_all=criteria,
        is_mock_data=True,
        api_error=api_error,
    )
