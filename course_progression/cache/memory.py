"""Process-local cache of paginated course listings."""

import structlog

from .base import Item, Page, PatchMode, patch_pages


logger = structlog.get_logger(__name__)


class InMemoryCourseListCache:
    """Course listings held in memory, keyed by listing key (e.g. a query)."""

    def __init__(self) -> None:
        self._listings: dict[str, list[Page]] = {}

    def store(self, listing_key: str, pages: list[Page]) -> None:
        self._listings[listing_key] = pages

    def get(self, listing_key: str) -> list[Page] | None:
        return self._listings.get(listing_key)

    def clear(self) -> None:
        self._listings.clear()

    async def patch(
        self,
        item: Item,
        mode: PatchMode | str,
        children: str | None = None,
        pin: bool = False,
    ) -> int:
        """Patch every cached listing; returns the number of listings changed."""
        changed_count = 0
        for listing_key, pages in list(self._listings.items()):
            patched, changed = patch_pages(pages, item, mode, children, pin)
            if changed:
                self._listings[listing_key] = patched
                changed_count += 1

        logger.debug(
            "course_list_cache_patched",
            item_id=item.get("id"),
            mode=PatchMode(mode).value,
            listings_changed=changed_count,
        )
        return changed_count
