"""Tests for optimistic patching of cached course listings."""

import pytest

from course_progression.cache.base import PatchMode, patch_pages
from course_progression.cache.memory import InMemoryCourseListCache


def listing() -> list[dict]:
    """Two pages of courses; c3 groups c4 as a child."""
    return [
        {
            "items": [{"id": "c1", "progress": 0}, {"id": "c2", "progress": 10}],
            "page": 1,
            "total": 4,
        },
        {
            "items": [{"id": "c3", "children": [{"id": "c4", "progress": 0}]}],
            "page": 2,
            "total": 4,
        },
    ]


class TestPatchPages:
    """Tests for patch_pages."""

    def test_update_merges_fields(self) -> None:
        """Update should merge fields into the matching item only."""
        pages, changed = patch_pages(listing(), {"id": "c2", "progress": 60}, "update")

        assert changed is True
        assert pages[0]["items"][1] == {"id": "c2", "progress": 60}
        assert pages[0]["items"][0] == {"id": "c1", "progress": 0}

    def test_does_not_mutate_input(self) -> None:
        """The cached pages passed in should be left untouched."""
        cached = listing()
        patch_pages(cached, {"id": "c1", "progress": 99}, PatchMode.UPDATE)
        assert cached == listing()

    def test_missing_item_unchanged(self) -> None:
        """Patching an unknown item should report no change."""
        pages, changed = patch_pages(listing(), {"id": "zz", "progress": 1}, "update")
        assert changed is False
        assert pages == listing()

    def test_update_nested_children(self) -> None:
        """Nested items should be found through the children field."""
        pages, changed = patch_pages(
            listing(), {"id": "c4", "progress": 30}, "update", children="children"
        )
        assert changed is True
        assert pages[1]["items"][0]["children"][0] == {"id": "c4", "progress": 30}

    def test_nested_ignored_without_children(self) -> None:
        """Without a children field nested items are not searched."""
        _, changed = patch_pages(listing(), {"id": "c4", "progress": 30}, "update")
        assert changed is False

    def test_pin_moves_item_to_top(self) -> None:
        """A pinned update should move the item to the top of its page."""
        pages, _ = patch_pages(listing(), {"id": "c2", "progress": 60}, "update", pin=True)
        assert [item["id"] for item in pages[0]["items"]] == ["c2", "c1"]

    def test_create_prepends_and_counts(self) -> None:
        """Create should prepend to the first page and bump every total."""
        pages, changed = patch_pages(listing(), {"id": "c9"}, "create")

        assert changed is True
        assert pages[0]["items"][0] == {"id": "c9"}
        assert [page["total"] for page in pages] == [5, 5]

    def test_create_without_pages(self) -> None:
        """Create on an empty listing has nowhere to go."""
        assert patch_pages([], {"id": "c9"}, "create") == ([], False)

    def test_delete_removes_and_counts(self) -> None:
        """Delete should remove the item and decrement every total."""
        pages, changed = patch_pages(listing(), {"id": "c1"}, "delete")

        assert changed is True
        assert [item["id"] for item in pages[0]["items"]] == ["c2"]
        assert [page["total"] for page in pages] == [3, 3]

    def test_delete_missing_keeps_totals(self) -> None:
        """Deleting an unknown item should not touch totals."""
        pages, changed = patch_pages(listing(), {"id": "zz"}, "delete")
        assert changed is False
        assert [page["total"] for page in pages] == [4, 4]

    def test_invalid_mode(self) -> None:
        """Unknown modes should be rejected."""
        with pytest.raises(ValueError):
            patch_pages(listing(), {"id": "c1"}, "upsert")


class TestInMemoryCourseListCache:
    """Tests for InMemoryCourseListCache."""

    @pytest.mark.asyncio
    async def test_patches_matching_listings(self) -> None:
        """Only listings containing the item should be rewritten."""
        cache = InMemoryCourseListCache()
        cache.store("all", listing())
        cache.store("other", [{"items": [{"id": "x1"}], "page": 1, "total": 1}])

        changed = await cache.patch({"id": "c1", "progress": 75}, "update")

        assert changed == 1
        assert cache.get("all")[0]["items"][0]["progress"] == 75
        assert cache.get("other") == [{"items": [{"id": "x1"}], "page": 1, "total": 1}]

    @pytest.mark.asyncio
    async def test_empty_cache(self) -> None:
        """Patching an empty cache changes nothing."""
        cache = InMemoryCourseListCache()
        assert await cache.patch({"id": "c1"}, "update") == 0
        assert cache.get("all") is None

    def test_clear(self) -> None:
        """Clear should drop every listing."""
        cache = InMemoryCourseListCache()
        cache.store("all", listing())
        cache.clear()
        assert cache.get("all") is None
