"""Studio criteria catalog.

The rubric criteria per studio, in display order. The order matters: the
default criteriaCovered/criteriaMissing slices and the numbered list in the
system prompt both follow it. The catalog is frozen at import time and shared
by every request; callers get list copies.
"""

from types import MappingProxyType
from typing import Mapping

from ..schemas.studio import STUDIO_CODES, STUDIO_NAMES, CriteriaSet

CRITERIA_CATALOG: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "ES": (
            "Complete sentences with correct capitalization and punctuation",
            'Simple goal in my own words (starts with "My goal is…")',
            '3–5 step process written as "I…" statements',
            "At least one labeled piece of evidence attached [photo/scan/link]",
            "Name one source OR observation (book title, website, expert, or field note)",
            "Reflection includes one thing learned and one next step",
            "Kind, specific peer feedback mentioned (who and what changed)",
        ),
        "MS": (
            "Clear goal + deliverable + due date stated up front",
            "Evidence attached with captions (artifact, data table, photos, links)",
            "At least two credible sources cited (title/author/link)",
            "Personal reflection explains how thinking changed",
            "Revision noted (how this is better than last time)",
            "Peer feedback loop documented (who reviewed, what changed)",
            "All listed criteria addressed (no missing sections)",
        ),
        "LP": (
            "Professional tone and structure with clear headings",
            "Clear deliverable, constraints, and success metrics",
            "Three or more credible sources with in-line citations",
            "Original analysis supported by data/evidence (not summary)",
            "Comparison to a world-class example and gap analysis",
            "Real-world stakes shown (exhibition, contest, user test, stakeholder)",
            "Reflection on improvement vs. last iteration with next-step plan and date",
            "Attachments are well-formatted; all links verified",
        ),
    }
)


def is_known_studio(value: object) -> bool:
    return isinstance(value, str) and value in CRITERIA_CATALOG


def get_criteria(studio: str) -> list[str]:
    """Return a fresh copy of the studio's criteria. Raises KeyError if unknown."""
    return list(CRITERIA_CATALOG[studio])


def list_criteria_sets() -> list[CriteriaSet]:
    return [
        CriteriaSet(studio=code, name=STUDIO_NAMES[code], criteria=get_criteria(code))
        for code in STUDIO_CODES
    ]
