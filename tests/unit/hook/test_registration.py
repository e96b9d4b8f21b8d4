from __future__ import annotations

from typing import Any

import pytest

from captain_hook import DEFAULT_PRIORITY, HandlerRecord, captain_hook


@pytest.fixture()
def hooks() -> Any:
    return captain_hook()


def test_handlers_respect_priority_order(hooks: Any) -> None:
    hooks.on("demo:event", lambda this: "a", priority=2)
    hooks.on("demo:event", lambda this: "b", priority=9)

    assert hooks._emit("demo:event") == ["b", "a"]


def test_many_priorities_run_highest_first(hooks: Any) -> None:
    calls: list[int] = []
    for priority in (3, 50, 1, 20, 7, 11):
        hooks.on("demo:order", lambda this, p=priority: calls.append(p), priority=priority)

    hooks._emit("demo:order")

    assert calls == [50, 20, 11, 7, 3, 1]


def test_list_stays_sorted_after_each_insert(hooks: Any) -> None:
    for priority in (5, 30, 15):
        hooks.on("demo:sorted", lambda this: None, priority=priority)
        priorities = [record.priority for record in hooks._handlers["demo:sorted"]]
        assert priorities == sorted(priorities, reverse=True)


def test_default_priority_is_ten(hooks: Any) -> None:
    hooks.on("demo:default", lambda this: "default")
    hooks.on("demo:default", lambda this: "low", priority=9)
    hooks.on("demo:default", lambda this: "high", priority=11)

    assert hooks._handlers["demo:default"][1].priority == DEFAULT_PRIORITY
    assert hooks._emit("demo:default") == ["high", "default", "low"]


def test_zero_priority_is_treated_as_unset(hooks: Any) -> None:
    hooks.on("demo:zero", lambda this: "zero", priority=0)
    hooks.on("demo:zero", lambda this: "five", priority=5)

    assert hooks._handlers["demo:zero"][0].priority == DEFAULT_PRIORITY
    assert hooks._emit("demo:zero") == ["zero", "five"]


def test_negative_priority_runs_after_default(hooks: Any) -> None:
    hooks.on("demo:negative", lambda this: "negative", priority=-1)
    hooks.on("demo:negative", lambda this: "default")

    assert hooks._emit("demo:negative") == ["default", "negative"]


def test_options_mapping_is_accepted(hooks: Any) -> None:
    hooks.on("demo:opts", lambda this: "x", {"tag": "t", "priority": 4, "once": True})

    record = hooks._handlers["demo:opts"][0]
    assert (record.tag, record.priority, record.once) == ("t", 4, True)


def test_keyword_options_override_mapping(hooks: Any) -> None:
    hooks.on("demo:opts", lambda this: None, {"priority": 4}, priority=6)

    assert hooks._handlers["demo:opts"][0].priority == 6


def test_unknown_options_are_ignored(hooks: Any) -> None:
    hooks.on("demo:opts", lambda this: "ok", {"colour": "red"})

    assert hooks._emit("demo:opts") == ["ok"]


def test_register_returns_none(hooks: Any) -> None:
    assert hooks.on("demo:none", lambda this: None) is None


def test_decorator_form_registers_and_returns_function(hooks: Any) -> None:
    @hooks.on("demo:decorated", priority=20, tag="deco")
    def handler(this: Any, value: int) -> int:
        return value * 2

    assert handler(None, 2) == 4
    assert hooks._emit("demo:decorated", 5) == [10]
    assert hooks._handlers["demo:decorated"][0].tag == "deco"


def test_non_callable_handler_fails_only_on_dispatch(hooks: Any) -> None:
    hooks.on("demo:broken", "not a function")

    with pytest.raises(TypeError):
        hooks._emit("demo:broken")


def test_same_function_registered_twice_gives_two_records(hooks: Any) -> None:
    def handler(this: Any) -> str:
        return "twice"

    hooks.on("demo:twice", handler)
    hooks.on("demo:twice", handler)

    assert hooks._emit("demo:twice") == ["twice", "twice"]


def test_record_build_defaults() -> None:
    receiver = object()
    record = HandlerRecord.build(print, receiver)

    assert record.context is receiver
    assert record.tag is None
    assert record.priority == DEFAULT_PRIORITY
    assert record.once is False
