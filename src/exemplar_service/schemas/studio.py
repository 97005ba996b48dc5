from typing import Literal

from pydantic import BaseModel

Studio = Literal["ES", "MS", "LP"]

STUDIO_CODES: tuple[str, ...] = ("ES", "MS", "LP")

STUDIO_NAMES: dict[str, str] = {
    "ES": "Elementary Studio",
    "MS": "Middle Studio",
    "LP": "Launchpad",
}


class CriteriaSet(BaseModel):
    studio: Studio
    name: str
    criteria: list[str]


class CriteriaListResponse(BaseModel):
    studios: list[CriteriaSet]
