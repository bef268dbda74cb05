from __future__ import annotations

import os
import sys
from pathlib import Path

from fastmcp import FastMCP

from ndtips.core.config import docs_root
from ndtips.core.fragments import describe
from ndtips.core.registry import TooltipRegistry
from ndtips.naturaldocs.tooltips import load_directory

DEV_FLAG = "NDTIPS_MCP_DEV"

mcp = FastMCP("ndtips-tooltips-dev")

_REGISTRY: TooltipRegistry | None = None


def _registry() -> TooltipRegistry:
    global _REGISTRY
    if _REGISTRY is None:
        root = docs_root()
        if root is None:
            raise RuntimeError("Set NDTIPS_DOCS_ROOT or docs_root in the ndtips config")  # noqa: TRY003
        _REGISTRY = load_directory(Path(root))
    return _REGISTRY


def list_namespaces() -> list[str]:
    return _registry().namespaces()


def list_topics(namespace: str) -> list[int]:
    registry = _registry()
    if namespace not in registry.namespaces():
        return []
    return registry.topics(namespace)


def lookup_tooltip(namespace: str, topic_id: int, plain_text: bool = False) -> str | None:
    fragment = _registry().get(namespace, topic_id)
    if fragment is None or not plain_text:
        return fragment
    return describe(fragment).summary


def describe_tooltip(namespace: str, topic_id: int) -> dict[str, str | None] | None:
    fragment = _registry().get(namespace, topic_id)
    if fragment is None:
        return None
    summary = describe(fragment)
    return {
        "topic_type": summary.topic_type,
        "language": summary.language,
        "prototype": summary.prototype,
        "summary": summary.summary,
    }


for _tool in (list_namespaces, list_topics, lookup_tooltip, describe_tooltip):
    mcp.tool(_tool)


def main() -> int:
    if os.environ.get(DEV_FLAG) != "1":
        sys.stderr.write(
            "ndtips-tooltips-mcp is development-only. "
            f"Set {DEV_FLAG}=1 to run.\n",
        )
        return 2
    mcp.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
