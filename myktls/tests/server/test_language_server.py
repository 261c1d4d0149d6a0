from __future__ import annotations

from lsprotocol import types as lsp

from myktls.core.diagnostics import Diagnostic
from myktls.server import MyktLanguageServer, server
from myktls.test_helpers import position_of, range_of_text

URI = "file:///work/main.mykt"
SOURCE = "fun greet() {}\ngreet()\n"


def _server_with(monkeypatch, sources: dict[str, str]) -> MyktLanguageServer:
	ls = MyktLanguageServer()
	monkeypatch.setattr(ls, "document_source", sources.__getitem__)
	return ls


def test_module_level_server_is_wired():
	assert isinstance(server, MyktLanguageServer)
	assert len(server.cache) == 0


def test_find_definition_returns_a_location_link(monkeypatch):
	ls = _server_with(monkeypatch, {URI: SOURCE})

	links = ls.find_definition(URI, position_of(SOURCE, "greet", 1))

	assert links is not None and len(links) == 1
	link = links[0]
	assert link.target_uri == URI
	assert link.target_range == range_of_text(SOURCE, "fun greet() {}")
	assert link.target_selection_range == range_of_text(SOURCE, "greet", 0)
	assert link.origin_selection_range == range_of_text(SOURCE, "greet", 1)


def test_find_definition_without_a_match_is_none(monkeypatch):
	ls = _server_with(monkeypatch, {URI: "use(nobody)\n"})

	assert ls.find_definition(URI, lsp.Position(line=0, character=5)) is None


def test_changed_document_is_reanalyzed_after_invalidation(monkeypatch):
	sources = {URI: SOURCE}
	ls = _server_with(monkeypatch, sources)
	ls.find_definition(URI, position_of(SOURCE, "greet", 1))

	changed = "\n" + SOURCE
	sources[URI] = changed
	ls.cache.invalidate(URI)
	links = ls.find_definition(URI, position_of(changed, "greet", 1))

	assert links[0].target_selection_range == range_of_text(changed, "greet", 0)


def test_diagnostics_are_shown_as_messages(monkeypatch):
	ls = MyktLanguageServer()
	shown = []
	monkeypatch.setattr(ls, "window_show_message", shown.append)

	ls.report_diagnostics(URI, [Diagnostic(message="Imported file not found: /x.mykt", severity="warning")])

	assert len(shown) == 1
	assert shown[0].type == lsp.MessageType.Warning
	assert shown[0].message == "Imported file not found: /x.mykt"


def test_missing_imports_reach_the_user_on_first_query(monkeypatch):
	source = "import nowhere\nval x = 1\n"
	ls = _server_with(monkeypatch, {URI: source})
	shown = []
	monkeypatch.setattr(ls, "window_show_message", shown.append)

	ls.find_definition(URI, lsp.Position(line=1, character=4))
	ls.find_definition(URI, lsp.Position(line=1, character=4))

	assert [m.type for m in shown] == [lsp.MessageType.Warning]
