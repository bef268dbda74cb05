from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Literal

NotFoundReason = Literal["namespace", "topic"]


class TooltipNotFoundError(KeyError):
    def __init__(self, namespace: str, topic_id: int | None, reason: NotFoundReason) -> None:
        super().__init__(namespace if topic_id is None else (namespace, topic_id))
        self.namespace = namespace
        self.topic_id = topic_id
        self.reason = reason

    def __str__(self) -> str:
        if self.reason == "namespace":
            return f"no tooltips registered for namespace {self.namespace!r}"
        return f"no tooltip {self.topic_id} in namespace {self.namespace!r}"

    @classmethod
    def missing_namespace(cls, namespace: str) -> TooltipNotFoundError:
        return cls(namespace, None, "namespace")

    @classmethod
    def missing_topic(cls, namespace: str, topic_id: int) -> TooltipNotFoundError:
        return cls(namespace, topic_id, "topic")


def _checked_entries(namespace: str, entries: Mapping[int, str]) -> dict[int, str]:
    checked: dict[int, str] = {}
    for topic_id, fragment in entries.items():
        if isinstance(topic_id, bool) or not isinstance(topic_id, int):
            raise TypeError(f"{namespace}: topic id must be int, got {topic_id!r}")  # noqa: TRY003
        if topic_id < 0:
            raise ValueError(f"{namespace}: topic id must be non-negative, got {topic_id}")  # noqa: TRY003
        if not isinstance(fragment, str):
            raise TypeError(f"{namespace}#{topic_id}: fragment must be str")  # noqa: TRY003
        checked[topic_id] = fragment
    return checked


@dataclass
class TooltipRegistry:
    """
    Tooltip fragments keyed by namespace and topic id.

    Each namespace is populated by a single ``register`` call; registering a
    namespace again replaces its entries rather than merging them.
    """

    _namespaces: dict[str, dict[int, str]] = field(default_factory=dict)

    @classmethod
    def from_payloads(cls, payloads: Iterable[tuple[str, Mapping[int, str]]]) -> TooltipRegistry:
        registry = cls()
        for namespace, entries in payloads:
            registry.register(namespace, entries)
        return registry

    def register(self, namespace: str, entries: Mapping[int, str]) -> None:
        checked = _checked_entries(namespace, entries)
        if namespace in self._namespaces:
            logging.debug("replacing %d tooltips for %s", len(self._namespaces[namespace]), namespace)
        self._namespaces[namespace] = checked

    def lookup(self, namespace: str, topic_id: int) -> str:
        topics = self._namespaces.get(namespace)
        if topics is None:
            raise TooltipNotFoundError.missing_namespace(namespace)
        try:
            return topics[topic_id]
        except KeyError:
            raise TooltipNotFoundError.missing_topic(namespace, topic_id) from None

    def get(self, namespace: str, topic_id: int, default: str | None = None) -> str | None:
        try:
            return self.lookup(namespace, topic_id)
        except TooltipNotFoundError:
            return default

    def namespaces(self) -> list[str]:
        return sorted(self._namespaces)

    def topics(self, namespace: str) -> list[int]:
        return sorted(self._entries_for(namespace))

    def entries(self, namespace: str) -> dict[int, str]:
        return dict(self._entries_for(namespace))

    def _entries_for(self, namespace: str) -> dict[int, str]:
        topics = self._namespaces.get(namespace)
        if topics is None:
            raise TooltipNotFoundError.missing_namespace(namespace)
        return topics

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        namespace, topic_id = key
        if not isinstance(namespace, str) or not isinstance(topic_id, int):
            return False
        return topic_id in self._namespaces.get(namespace, {})

    def __len__(self) -> int:
        return len(self._namespaces)
