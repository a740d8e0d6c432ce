"""Entry point of the performance runner."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..interfaces import ZkVmHostPerf
from .args import EvalArgs, parse_args
from .format import format_header, format_results
from .github import format_github_message, post_to_github_pr
from .programs import GuestProgram, run_programs

Backend = Tuple[str, Callable[[GuestProgram], ZkVmHostPerf]]


def run(args: EvalArgs, backends: Iterable[Backend]) -> int:
    """Report on the chosen programs with each backend; return the exit status.

    Each backend is a display name and a function returning the host loaded with
    a program. Stops with status 1 at the first backend with a failed report.
    """
    results_text = [format_header(args)]
    for host_name, host_for in backends:
        reports = run_programs(args.programs, host_for)
        results_text.append(format_results(reports, host_name))
        if not all(report.success for report in reports):
            print(f"Some {host_name} programs failed. Please check the results below.")
            return 1

    print("\n".join(results_text))

    if args.post_to_gh:
        asyncio.run(post_to_github_pr(args, format_github_message(results_text)))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments and run with the backends registered in this build (none)."""
    logging.basicConfig(level=logging.INFO)
    return run(parse_args(argv), ())


if __name__ == "__main__":
    raise SystemExit(main())