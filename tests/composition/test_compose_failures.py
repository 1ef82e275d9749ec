"""What each operation leaves on the app when it cannot finish."""
from __future__ import annotations

import logging

import pytest

from gencompose import compose
from gencompose.core.exceptions import CapabilityMissingError, GeneratorNotFoundError
from gencompose.core.host import Application


class _NoRegistry:
    """Accepts options but cannot look generators up."""

    def __init__(self) -> None:
        self.options: dict = {}

    def option(self, key, value=None):
        self.options.update(key)


def test_target_without_registry_raises_capability_error() -> None:
    target = _NoRegistry()

    with pytest.raises(CapabilityMissingError) as exc:
        compose(target, ["a"]).options()

    assert str(exc.value) == '.options expects a ".get_generator()" method on "app"'
    assert exc.value.context == {"operation": "options", "method": "get_generator"}
    assert target.options == {}


def test_parent_without_registry_raises_capability_error() -> None:
    target = Application("t")

    with pytest.raises(CapabilityMissingError) as exc:
        compose(target, ["a"], parent=object()).options()

    assert str(exc.value) == '.options expects a ".get_generator()" method on "parent"'
    assert exc.value.context["owner"] == "parent"
    assert target.options == {}


def test_iterator_without_registry_raises_before_calling_fn() -> None:
    seen = []

    with pytest.raises(CapabilityMissingError, match=r"^\.iterator expects"):
        compose(_NoRegistry(), "a").iterator(lambda gen, app: seen.append(gen))

    assert seen == []


def test_handles_do_not_need_a_registry() -> None:
    loose = Application("loose")
    loose.option("foo", "aaa")
    target = _NoRegistry()

    compose(target, [loose]).options()
    assert target.options == {"foo": "aaa"}


@pytest.mark.parametrize("operation", ["options", "data", "engines"])
def test_accumulating_operations_write_nothing_on_failure(app: Application, operation: str) -> None:
    app.register("a", lambda a: (a.option("foo", "aaa"), a.data("foo", "aaa"), a.engine("hbs", object())))

    with pytest.raises(GeneratorNotFoundError):
        getattr(app.compose(["a", "missing"]), operation)()

    assert app.options == {}
    assert app.cache.data == {}
    assert app.engines == {}


def test_helpers_keep_copies_made_before_failure(app: Application) -> None:
    app.register("a", lambda a: a.helper("upper", str.upper))

    with pytest.raises(GeneratorNotFoundError):
        app.compose(["a", "missing"]).helpers()

    assert set(app.helpers.sync) == {"upper"}


def test_views_keep_copies_made_before_failure(app: Application) -> None:
    def configure(a: Application) -> None:
        a.create("pages")
        a.add_view("pages", "home", {"content": ""})

    app.register("a", configure)

    with pytest.raises(GeneratorNotFoundError):
        app.compose(["a", "missing"]).views()

    assert app.views == {"pages": {"home": {"content": ""}}}


def test_questions_and_plugins_keep_copies_made_before_failure(app: Application) -> None:
    def lint(files):
        return files

    app.register("a", lambda a: (a.question("name"), a.plugin("lint", lint)))

    with pytest.raises(GeneratorNotFoundError):
        app.compose(["a", "missing"]).questions()
    with pytest.raises(GeneratorNotFoundError):
        app.compose(["a", "missing"]).pipeline()

    assert app.questions == {"name": {"message": "name"}}
    assert app.plugins == {"lint": lint}


class _CreateOnly:
    def __init__(self, registry: Application) -> None:
        self.registry = registry
        self.created = []

    def get_generator(self, name):
        return self.registry.get_generator(name)

    def create(self, name, options=None):
        self.created.append(name)


class _NoCollections(_CreateOnly):
    def add_views(self, name, entries):
        pass


def test_views_target_needs_add_views(app: Application) -> None:
    app.register("a", lambda a: a.create("pages"))
    target = _CreateOnly(app)

    with pytest.raises(CapabilityMissingError) as exc:
        compose(target, "a").views()

    assert str(exc.value) == '.views expects a ".add_views()" method on "app"'
    assert target.created == []


def test_views_target_needs_collections_mapping(app: Application) -> None:
    app.register("a", lambda a: a.create("pages"))
    target = _NoCollections(app)

    with pytest.raises(CapabilityMissingError) as exc:
        compose(target, "a").views()

    assert str(exc.value) == '.views expects a "collections" attribute on "app"'
    assert target.created == []


def test_debug_log_counts_generators_visited(app: Application, caplog: pytest.LogCaptureFixture) -> None:
    app.register("a", lambda a: (a.option("x", 1), a.data("x", 1)))
    app.register("b", lambda b: (b.option("y", 2), b.data("y", 2)))
    app.register("c")

    with caplog.at_level(logging.DEBUG, logger="gencompose.core.composition.handler"):
        app.compose(["a", "b"]).options().data("x")

    assert "Composed options from 2 generator(s)" in caplog.text
    assert "Composed data at 'x' from 2 generator(s)" in caplog.text
