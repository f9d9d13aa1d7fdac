"""Optimistic patching of cached paginated listings.

A listing is a list of pages shaped ``{"items": [...], "page": n, "total": t}``.
Patching never refetches: the cached pages are rewritten in place so views
reflect a change before the server confirms it.
"""

from copy import deepcopy
from enum import Enum
from typing import Any, Protocol


class PatchMode(str, Enum):
    """How an item is applied to cached listings."""

    UPDATE = "update"
    CREATE = "create"
    DELETE = "delete"


Page = dict[str, Any]
Item = dict[str, Any]


class CourseListCache(Protocol):
    async def patch(
        self,
        item: Item,
        mode: PatchMode | str,
        children: str | None = None,
        pin: bool = False,
    ) -> int: ...


def _patch_items(
    items: list[Item],
    item: Item,
    mode: PatchMode,
    children: str | None,
    pin: bool,
) -> tuple[list[Item], bool]:
    found: Item | None = None
    changed = False
    patched: list[Item] = []

    for existing in items:
        if existing.get("id") == item["id"]:
            found = {**existing, **item}
            changed = True
            if mode != PatchMode.DELETE:
                patched.append(found)
            continue
        if children and isinstance(existing.get(children), list):
            nested, nested_changed = _patch_items(
                existing[children], item, mode, children, pin
            )
            if nested_changed:
                existing = {**existing, children: nested}
                changed = True
        patched.append(existing)

    if pin and found is not None and mode == PatchMode.UPDATE:
        patched = [found] + [i for i in patched if i.get("id") != item["id"]]

    return patched, changed


def patch_pages(
    pages: list[Page],
    item: Item,
    mode: PatchMode | str,
    children: str | None = None,
    pin: bool = False,
) -> tuple[list[Page], bool]:
    """Apply ``item`` to a cached listing.

    Args:
        pages: Cached pages of one listing
        item: Item fields; must include ``id``
        mode: update merges, create prepends to the first page, delete removes
        children: Field holding nested items to search as well
        pin: Move an updated item to the top of its page

    Returns:
        Tuple of (patched pages, whether the listing changed)
    """
    mode = PatchMode(mode)
    pages = deepcopy(pages)

    if mode == PatchMode.CREATE:
        if not pages:
            return pages, False
        first = pages[0]
        first["items"] = [item, *first.get("items", [])]
        for page in pages:
            page["total"] = page.get("total", 0) + 1
        return pages, True

    changed = False
    for page in pages:
        page["items"], found = _patch_items(
            page.get("items", []), item, mode, children, pin
        )
        changed = changed or found

    if changed and mode == PatchMode.DELETE:
        for page in pages:
            page["total"] = max(page.get("total", 0) - 1, 0)

    return pages, changed
