"""Integration tests against the bundled help content."""

import json
import sqlite3
from concurrent.futures import ThreadPoolExecutor
from importlib import resources

import pytest

from danmaku_help.lib.exceptions import NotFoundError
from danmaku_help.models import DEFAULT_MANUAL_SECTIONS
from danmaku_help.services.forum import ForumSeeder, SqliteForumStore
from danmaku_help.services.help import export_payload, load_bundled_registry, load_registry


@pytest.fixture(scope="module")
def bundled():
    return load_bundled_registry()


class TestBundledRegistry:
    """Tests for the shipped categories."""

    def test_category_order(self, bundled):
        """All manual categories ship, in source order."""
        assert bundled.list_categories() == [
            "specialKeywords",
            "builtInVariables",
            "danmakuHelpers",
            "dragonBones",
            "javaScriptStuff",
            "mathFunctions",
            "arrayMethods",
            "stringMethods",
            "numberMethods",
            "globalFunctions",
            "arrayConstructor",
            "stringNumberConstructors",
        ]

    def test_math_functions_order(self, bundled):
        """mathFunctions starts at abs(x) and ends at tan(x)."""
        entries = bundled.get_category("mathFunctions")

        assert entries[0].name == "abs(x)"
        assert entries[-1].name == "tan(x)"
        assert len(entries) == 15

    def test_repeat_keyword(self, bundled):
        """The repeat keyword documents block repetition."""
        entry = bundled.find_entry("specialKeywords", "repeat")

        assert "Repeats a block of code n times" in entry.content

    def test_missing_keyword(self, bundled):
        """Unknown keywords are not found."""
        with pytest.raises(NotFoundError):
            bundled.find_entry("specialKeywords", "doesNotExist")

    def test_background_in_two_categories(self, bundled):
        """background is both a keyword and a helper, independently."""
        keyword = bundled.find_entry("specialKeywords", "background")
        helper = bundled.find_entry("danmakuHelpers", "background")

        assert keyword is not helper

    def test_all_content_non_empty(self, bundled):
        """Every shipped entry has a body."""
        for _, entry in bundled.iter_entries():
            assert entry.content.strip()

    def test_single_canonical_code_tag(self, bundled):
        """Only the [code] tag set ships."""
        for _, entry in bundled.iter_entries():
            assert "[code-manual]" not in entry.content

    def test_payload_matches_asset(self, bundled):
        """Re-serializing yields the asset's records unchanged."""
        asset = (
            resources.files("danmaku_help.content")
            .joinpath("help_content.json")
            .read_text(encoding="utf-8")
        )

        assert bundled.to_payload() == json.loads(asset)

    def test_export_reload_identical(self, bundled, tmp_path):
        """Exported bundled content loads back to the same payload."""
        path = export_payload(bundled, tmp_path / "help.json")

        assert load_registry(path).to_payload() == bundled.to_payload()


class TestBundledSeeding:
    """Tests for seeding the default manual sections."""

    def test_default_sections_seed(self, bundled, tmp_path):
        """Every default section seeds; shared JS names are seeded once."""
        store = SqliteForumStore(str(tmp_path / "forum.db"))

        report = ForumSeeder(bundled, store).seed()

        by_name = {s.section: s for s in report.sections}
        assert by_name["Special Keywords"].created == 5
        assert by_name["Built-in Variables"].created == 10
        assert by_name["Danmaku Helpers"].created == 46
        assert by_name["DragonBones"].created == 6
        # isNaN(x) and isFinite(x) appear in numberMethods and globalFunctions
        assert by_name["JavaScript Stuff"].created == 75
        assert by_name["JavaScript Stuff"].skipped == 2

    def test_default_sections_idempotent(self, bundled, tmp_path):
        """A second default seeding changes nothing."""
        store = SqliteForumStore(str(tmp_path / "forum.db"))
        ForumSeeder(bundled, store).seed()

        report = ForumSeeder(bundled, store).seed()

        assert report.changed is False
        assert report.unchanged == 142

    def test_concurrent_seeders_share_store(self, bundled, tmp_path):
        """Seeders running at once on one store write each thread once."""
        db_path = str(tmp_path / "forum.db")
        store = SqliteForumStore(db_path)

        with ThreadPoolExecutor(max_workers=4) as pool:
            reports = list(pool.map(lambda _: ForumSeeder(bundled, store).seed(), range(4)))

        assert sum(report.created for report in reports) == 142
        with sqlite3.connect(db_path) as conn:
            threads = conn.execute("SELECT COUNT(*) FROM forum_threads").fetchone()[0]
            posts = conn.execute("SELECT COUNT(*) FROM forum_posts").fetchone()[0]
            sections = conn.execute("SELECT COUNT(*) FROM forum_categories").fetchone()[0]
        assert (threads, posts, sections) == (142, 142, 6)


def test_every_default_section_category_exists(bundled):
    """Default sections only reference shipped categories."""
    for section in DEFAULT_MANUAL_SECTIONS:
        for category_id in section.category_ids:
            assert bundled.has_category(category_id)
