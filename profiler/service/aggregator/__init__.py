from .aggregator import (
    DETAIL_TOP_N,
    REPORT_TOP_N,
    SUMMARY_TOP_N,
    Aggregator,
    build_process_rollups,
    summarize,
)

__all__ = [
    "DETAIL_TOP_N",
    "REPORT_TOP_N",
    "SUMMARY_TOP_N",
    "Aggregator",
    "build_process_rollups",
    "summarize",
]
