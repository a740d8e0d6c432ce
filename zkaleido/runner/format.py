"""Text formatting of performance results."""

from __future__ import annotations

from typing import Iterable

from ..perf import PerformanceReport
from .args import EvalArgs


def format_header(args: EvalArgs) -> str:
    """Return the report header: the short commit hash, or a local-run marker."""
    if args.post_to_gh:
        if len(args.commit_hash) < 8:
            raise ValueError(
                f"commit hash must have at least 8 characters: {args.commit_hash!r}"
            )
        return f"*Commit*: {args.commit_hash[:8]}\n"
    return "*Local execution*\n"


def format_results(results: Iterable[PerformanceReport], host_name: str) -> str:
    """Return the reports as a table under a heading naming the host."""
    table_text = "\n"
    table_text += "| program                | cycles      | success  |\n"
    table_text += "|------------------------|-------------|----------|"
    for result in results:
        mark = "✅" if result.success else "❌"
        table_text += f"\n| {result.name:<22} | {result.cycles:>11,} | {mark:<7} |"
    table_text += "\n"
    return f"*{host_name} Execution Results*\n {table_text}"