from .fragments import TooltipSummary, describe, summary_text
from .registry import TooltipNotFoundError, TooltipRegistry

__all__ = [
    "TooltipNotFoundError",
    "TooltipRegistry",
    "TooltipSummary",
    "describe",
    "summary_text",
]
