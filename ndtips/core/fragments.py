from __future__ import annotations

import re
from dataclasses import dataclass

from bs4 import BeautifulSoup

_WS_RE = re.compile(r"\s+")

SUMMARY_CLASS = "TTSummary"
PROTOTYPE_CLASSES = ["TTPrototype", "NDPrototype"]


@dataclass(frozen=True)
class TooltipSummary:
    topic_type: str | None
    language: str | None
    prototype: str | None
    summary: str


def _clean(text: str) -> str:
    return _WS_RE.sub(" ", text.replace("\xa0", " ")).strip()


def _prefixed(classes: list[str], prefix: str) -> str | None:
    for name in classes:
        if name == SUMMARY_CLASS or name in PROTOTYPE_CLASSES:
            continue
        if name.startswith(prefix) and len(name) > len(prefix) and name[len(prefix)].isupper():
            return name[len(prefix) :]
    return None


def describe(fragment: str) -> TooltipSummary:
    """
    Describe a Natural Docs tooltip fragment without modifying it.

    Topic type and language come from the ``T<Type>`` and ``L<Language>``
    classes on the outermost element.
    """
    soup = BeautifulSoup(fragment, "html.parser")
    root = soup.find(True)
    classes = list(root.get("class") or []) if root is not None else []
    summary_tag = soup.find(class_=SUMMARY_CLASS)
    prototype_tag = soup.find(class_=PROTOTYPE_CLASSES)
    summary = _clean((summary_tag if summary_tag is not None else soup).get_text(" "))
    prototype = _clean(prototype_tag.get_text(" ")) if prototype_tag is not None else ""
    return TooltipSummary(
        topic_type=_prefixed(classes, "T"),
        language=_prefixed(classes, "L"),
        prototype=prototype or None,
        summary=summary,
    )


def summary_text(fragment: str) -> str:
    return describe(fragment).summary
