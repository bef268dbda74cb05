from __future__ import annotations

from .tooltips import (
    TooltipPayload,
    TooltipPayloadError,
    discover,
    load_directory,
    load_file,
    load_files,
    parse_payload,
)

__all__ = [
    "TooltipPayload",
    "TooltipPayloadError",
    "discover",
    "load_directory",
    "load_file",
    "load_files",
    "parse_payload",
]
