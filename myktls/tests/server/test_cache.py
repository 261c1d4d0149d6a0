from __future__ import annotations

from myktls.cache import DocumentCache
from myktls.config import Settings
from myktls.test_helpers import position_of, range_of_text

URI = "file:///work/main.mykt"

BEFORE = "val x = 1\nuse(x)\n"
AFTER = "\n\nval x = 1\nuse(x)\n"


def test_entries_are_built_lazily_and_reused():
	cache = DocumentCache()
	assert URI not in cache

	first = cache.ensure_parsed(URI, BEFORE)
	second = cache.ensure_parsed(URI, BEFORE)

	assert first is second
	assert URI in cache and len(cache) == 1


def test_invalidation_never_serves_stale_locations():
	cache = DocumentCache()
	old = cache.ensure_parsed(URI, BEFORE).definition(position_of(BEFORE, "x", 1))

	cache.invalidate(URI)
	new = cache.ensure_parsed(URI, AFTER).definition(position_of(AFTER, "x", 1))

	assert old.location.name_range == range_of_text(BEFORE, "x", 0)
	assert new.location.name_range == range_of_text(AFTER, "x", 0)
	assert new.location.name_range.start.line == 2


def test_without_invalidation_the_cached_analysis_wins():
	cache = DocumentCache()
	cache.ensure_parsed(URI, BEFORE)

	assert cache.ensure_parsed(URI, AFTER).source == BEFORE


def test_reporter_sees_diagnostics_of_fresh_analyses_only():
	seen = []
	cache = DocumentCache(reporter=lambda uri, diags: seen.append((uri, [d.code for d in diags])))

	cache.ensure_parsed(URI, "import nowhere_to_be_found\n")
	cache.ensure_parsed(URI, "import nowhere_to_be_found\n")

	assert seen == [(URI, ["import-not-found"])]


def test_syntax_errors_leave_no_tree_and_no_results():
	seen = []
	cache = DocumentCache(reporter=lambda uri, diags: seen.extend(diags))

	entry = cache.ensure_parsed(URI, "val = \n")

	assert entry.tree is None
	assert entry.definition(position_of("val = \n", "val")) is None
	assert [d.code for d in seen] == ["syntax"]
	assert seen[0].severity == "error"
	assert seen[0].span.line == 0


def test_discard_and_configure_drop_entries():
	cache = DocumentCache()
	cache.ensure_parsed(URI, BEFORE)
	cache.discard(URI)
	assert URI not in cache

	cache.ensure_parsed(URI, BEFORE)
	cache.configure(Settings(file_extension=".kt"))
	assert len(cache) == 0
	assert cache.settings.file_extension == ".kt"
