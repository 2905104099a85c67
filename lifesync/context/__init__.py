from lifesync.context.compactor import (
    CompactedContext,
    HistoryOrder,
    compact,
    compact_history,
    summarize_profile,
)

__all__ = [
    "CompactedContext",
    "HistoryOrder",
    "compact",
    "compact_history",
    "summarize_profile",
]
