"""In-memory comparison store.

Saved comparisons live for the lifetime of the process. Listing supports the
studio filter and the case-insensitive title/prompt search the UI offers.
"""

import uuid
from datetime import datetime, timezone

from ..logging import logger
from ..schemas.request import SaveComparisonRequest
from ..schemas.response import Comparison


class ComparisonStore:
    def __init__(self):
        self._items: dict[str, Comparison] = {}

    def __len__(self) -> int:
        return len(self._items)

    def save(self, request: SaveComparisonRequest) -> Comparison:
        title = (request.title or "").strip() or f"Generated Example - {request.studio}"
        comparison = Comparison(
            id=uuid.uuid4().hex[:12],
            title=title,
            studio=request.studio,
            prompt_text=request.prompt_text,
            world_class=request.world_class,
            not_approved=request.not_approved,
            created_at=datetime.now(timezone.utc).isoformat(),
            created_by_role=request.created_by_role,
            is_mock_data=request.is_mock_data,
        )
        self._items[comparison.id] = comparison
        logger.info(f"Saved comparison {comparison.id} ({comparison.studio}): {title}")
        return comparison

    def get(self, comparison_id: str) -> Comparison | None:
        return self._items.get(comparison_id)

    def list_comparisons(
        self, studio: str | None = None, search: str | None = None
    ) -> list[Comparison]:
        items = list(self._items.values())
        if studio:
            items = [c for c in items if c.studio == studio]
        if search:
            needle = search.lower()
            items = [
                c for c in items if needle in c.title.lower() or needle in c.prompt_text.lower()
            ]
        return sorted(items, key=lambda c: c.created_at, reverse=True)
