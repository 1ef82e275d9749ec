from __future__ import annotations

from typing import List

import pytest

from gencompose.core.composition import copy_task
from gencompose.core.exceptions import TaskNotFoundError
from gencompose.core.host import Application, TaskRun


def _recorder(output: List[str]):
    def run(ctx: TaskRun) -> None:
        output.append(f"{ctx.app.name}: {ctx.name}")

    return run


def test_copy_single_task_runs_on_target(app: Application) -> None:
    output: List[str] = []
    app.register("a", lambda a: a.task("default", _recorder(output)))

    app.compose(["a"]).tasks("default")

    assert app.build("default") == ["default"]
    assert output == ["app: default"]


def test_copy_task_with_dependencies(app: Application) -> None:
    output: List[str] = []

    def configure(a: Application) -> None:
        a.task("foo", _recorder(output))
        a.task("default", ["foo"], _recorder(output))

    app.register("a", configure)
    app.compose(["a"]).tasks(["default"])

    assert list(app.tasks) == ["foo", "default"]
    assert app.tasks["default"].deps == ("foo",)
    app.build("default")
    assert output == ["app: foo", "app: default"]


def test_transitive_dependencies_copied_first(app: Application) -> None:
    def configure(a: Application) -> None:
        a.task("clean")
        a.task("compile", ["clean"])
        a.task("test", ["compile"])
        a.task("unrelated")

    app.register("a", configure)
    app.compose("a").tasks("test")

    assert list(app.tasks) == ["clean", "compile", "test"]


def test_all_tasks_copied_when_none_named(app: Application) -> None:
    output: List[str] = []

    def configure(a: Application) -> None:
        a.task("foo", _recorder(output))
        a.task("bar", _recorder(output))
        a.task("default", ["foo", "bar"], _recorder(output))

    app.register("a", configure)
    app.compose(["a"]).tasks()

    assert set(app.tasks) == {"foo", "bar", "default"}
    app.build()
    assert output == ["app: foo", "app: bar", "app: default"]


def test_unknown_task_raises_and_copies_nothing(app: Application) -> None:
    def configure(a: Application) -> None:
        a.task("foo")
        a.task("default")

    app.register("a", configure)

    with pytest.raises(TaskNotFoundError) as exc:
        app.compose(["a"]).tasks(["foo", "bar"])

    assert str(exc.value) == '"bar" not found in tasks'
    assert exc.value.context == {"task": "bar", "generator": "a"}
    assert app.tasks == {}


def test_unknown_task_on_later_generator_keeps_earlier_copies(app: Application) -> None:
    app.register("a", lambda a: a.task("build"))
    app.register("b", lambda b: b.task("other"))

    with pytest.raises(TaskNotFoundError):
        app.compose(["a", "b"]).tasks("build")

    assert list(app.tasks) == ["build"]


def test_missing_dependency_is_not_an_error(app: Application) -> None:
    app.task("setup", lambda ctx: None)
    app.register("a", lambda a: a.task("default", ["setup"]))

    app.compose("a").tasks("default")

    assert app.build("default") == ["setup", "default"]


def test_later_generator_task_overwrites(app: Application) -> None:
    first, second = [], []
    app.register("a", lambda a: a.task("default", _recorder(first)))
    app.register("b", lambda b: b.task("default", _recorder(second)))

    app.compose(["a", "b"]).tasks("default")
    app.build("default")

    assert first == []
    assert second == ["app: default"]


def test_copy_task_handles_dependency_cycles() -> None:
    source = Application("src")
    source.task("a", ["b"])
    source.task("b", ["a"])
    target = Application("dest")

    copied = copy_task(source, target, "a")

    assert copied == ["b", "a"]
    assert set(target.tasks) == {"a", "b"}
