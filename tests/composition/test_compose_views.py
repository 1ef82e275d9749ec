from __future__ import annotations

from typing import Any, Mapping

from gencompose.core.composition import copy_views
from gencompose.core.host import Application


def _with_views(a: Application) -> None:
    a.create("files")
    a.add_views("files", {"a.txt": {"content": "A"}, "b.md": {"content": "B"}})
    a.create("templates", {"inflection": "tmpl", "engine": "hbs"})
    a.add_view("templates", "page.hbs", {"content": "<p/>"})


def test_copy_all_collections(app: Application) -> None:
    app.register("a", _with_views)

    app.compose(["a"]).views()

    assert set(app.collections) == {"files", "templates"}
    assert app.get_view("files", "a.txt") == {"content": "A"}
    assert app.get_view("templates", "page.hbs") == {"content": "<p/>"}


def test_created_collection_keeps_inflection_and_options(app: Application) -> None:
    app.register("a", _with_views)

    app.compose("a").views("templates")

    collection = app.collections["templates"]
    assert collection.inflection == "tmpl"
    assert collection.options == {"engine": "hbs"}
    assert app.collections == {"templates": collection}


def test_existing_collection_is_reused(app: Application) -> None:
    app.create("files", {"inflection": "document"})
    app.add_view("files", "mine.txt", {"content": "mine"})
    app.register("a", _with_views)

    app.compose("a").views(["files"])

    collection = app.collections["files"]
    assert collection.inflection == "document"
    assert set(collection.views) == {"mine.txt", "a.txt", "b.md"}


def test_only_named_collections_copied(app: Application) -> None:
    app.register("a", _with_views)

    app.compose(["a"]).views(["files"])

    assert "templates" not in app.collections
    assert set(app.views["files"]) == {"a.txt", "b.md"}


def test_filter_with_named_collections(app: Application) -> None:
    calls = []

    def only_txt(key: str, view: Any, views: Mapping[str, Any]) -> bool:
        calls.append((key, set(views)))
        return key.endswith(".txt")

    app.register("a", _with_views)
    app.compose(["a"]).views(["files"], only_txt)

    assert set(app.views["files"]) == {"a.txt"}
    assert calls == [("a.txt", {"a.txt", "b.md"}), ("b.md", {"a.txt", "b.md"})]


def test_filter_passed_as_only_argument(app: Application) -> None:
    app.register("a", _with_views)

    app.compose(["a"]).views(lambda key, view, views: key != "b.md")

    assert set(app.views["files"]) == {"a.txt"}
    assert set(app.views["templates"]) == {"page.hbs"}


def test_rejecting_filter_still_creates_collection(app: Application) -> None:
    app.register("a", _with_views)

    app.compose("a").views("files", lambda *args: False)

    assert app.views == {"files": {}}


def test_collection_missing_on_one_generator_is_skipped(app: Application) -> None:
    app.register("a", lambda a: a.create("pages"))
    app.register("b", _with_views)

    app.compose(["a", "b"]).views("files")

    assert set(app.views["files"]) == {"a.txt", "b.md"}
    assert "pages" not in app.collections


def test_later_generator_view_wins(app: Application) -> None:
    app.register("a", _with_views)

    def override(b: Application) -> None:
        b.create("files")
        b.add_view("files", "a.txt", {"content": "from b"})

    app.register("b", override)
    app.compose(["a", "b"]).views()

    assert app.get_view("files", "a.txt") == {"content": "from b"}
    assert app.get_view("files", "b.md") == {"content": "B"}


def test_copy_views_reports_counts() -> None:
    source = Application("src")
    _with_views(source)
    target = Application("dest")

    counts = copy_views(source, target, ["files", "missing"], lambda key, view, views: key == "b.md")

    assert counts == {"files": 1}
