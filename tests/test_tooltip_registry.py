from __future__ import annotations

import pytest

from ndtips.core.registry import TooltipNotFoundError, TooltipRegistry

GROUP = "SQFClass:Group"
ADD_UNIT = "<div>Adds an existing Unit to this group.</div>"


def test_lookup_returns_registered_fragment() -> None:
    registry = TooltipRegistry()
    registry.register(GROUP, {212: ADD_UNIT})

    assert registry.lookup(GROUP, 212) == ADD_UNIT


def test_lookup_unknown_topic_raises_not_found() -> None:
    registry = TooltipRegistry()
    registry.register(GROUP, {212: ADD_UNIT})

    with pytest.raises(TooltipNotFoundError) as info:
        registry.lookup(GROUP, 999)
    assert info.value.reason == "topic"
    assert info.value.namespace == GROUP
    assert info.value.topic_id == 999


def test_lookup_unknown_namespace_raises_not_found() -> None:
    registry = TooltipRegistry()
    registry.register(GROUP, {212: ADD_UNIT})

    with pytest.raises(TooltipNotFoundError) as info:
        registry.lookup("Other:NS", 212)
    assert info.value.reason == "namespace"
    assert "Other:NS" in str(info.value)


def test_not_found_is_a_key_error() -> None:
    registry = TooltipRegistry()
    with pytest.raises(KeyError):
        registry.lookup(GROUP, 1)


def test_register_twice_replaces_entries() -> None:
    registry = TooltipRegistry()
    registry.register("N", {1: "a"})
    registry.register("N", {2: "b"})

    assert registry.lookup("N", 2) == "b"
    with pytest.raises(TooltipNotFoundError):
        registry.lookup("N", 1)
    assert registry.topics("N") == [2]


def test_register_copies_caller_mapping() -> None:
    entries = {1: "a"}
    registry = TooltipRegistry()
    registry.register("N", entries)
    entries[1] = "changed"
    entries[2] = "b"

    assert registry.lookup("N", 1) == "a"
    assert ("N", 2) not in registry


def test_get_returns_default_instead_of_raising() -> None:
    registry = TooltipRegistry()
    registry.register(GROUP, {212: ADD_UNIT})

    assert registry.get(GROUP, 212) == ADD_UNIT
    assert registry.get(GROUP, 999) is None
    assert registry.get("Other:NS", 212, default="") == ""


def test_fragments_are_stored_verbatim() -> None:
    fragment = '<div class="x">&lt;AIGroup&gt; "quoted" <b>unclosed</div>'
    registry = TooltipRegistry()
    registry.register("N", {0: fragment, 5: ""})

    assert registry.lookup("N", 0) == fragment
    assert registry.lookup("N", 5) == ""


@pytest.mark.parametrize(
    ("entries", "error"),
    [
        ({"1": "a"}, TypeError),
        ({True: "a"}, TypeError),
        ({-1: "a"}, ValueError),
        ({1: None}, TypeError),
    ],
)
def test_register_rejects_invalid_entries(entries, error) -> None:
    registry = TooltipRegistry()
    with pytest.raises(error):
        registry.register("N", entries)
    assert "N" not in registry.namespaces()


def test_introspection_helpers() -> None:
    registry = TooltipRegistry.from_payloads(
        [
            ("SQFClass:Unit", {3: "c"}),
            (GROUP, {212: ADD_UNIT, 173: "e"}),
        ],
    )

    assert len(registry) == 2
    assert registry.namespaces() == [GROUP, "SQFClass:Unit"]
    assert registry.topics(GROUP) == [173, 212]
    assert registry.entries(GROUP) == {212: ADD_UNIT, 173: "e"}
    assert (GROUP, 173) in registry
    assert (GROUP, 3) not in registry
    assert GROUP not in registry
    with pytest.raises(TooltipNotFoundError):
        registry.topics("Missing")


def test_entries_returns_a_copy() -> None:
    registry = TooltipRegistry()
    registry.register("N", {1: "a"})
    registry.entries("N")[1] = "changed"

    assert registry.lookup("N", 1) == "a"


def test_registries_are_independent() -> None:
    first = TooltipRegistry()
    second = TooltipRegistry()
    first.register("N", {1: "a"})

    assert second.get("N", 1) is None
    assert len(second) == 0


def test_contains_rejects_unhashable_keys() -> None:
    registry = TooltipRegistry()
    registry.register("N", {1: "a"})

    assert (["N"], 1) not in registry
    assert ("N", [1]) not in registry
    assert ("N", 1) in registry
