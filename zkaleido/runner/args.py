"""Command-line arguments for the performance runner."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .programs import GuestProgram


@dataclass
class EvalArgs:
    """Parsed runner options."""

    post_to_gh: bool = False
    github_token: str = ""
    pr_number: str = ""
    commit_hash: str = "local_commit"
    programs: List[GuestProgram] = field(default_factory=list)


def _parse_program_list(text: str) -> List[GuestProgram]:
    try:
        return [GuestProgram.from_str(part) for part in text.split(",")]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evaluate the performance of SP1 on programs."
    )
    parser.add_argument(
        "--post-to-gh",
        action="store_true",
        help="Post the results on GitHub instead of only logging them.",
    )
    parser.add_argument("--github-token", default="", help="The GitHub token for authentication.")
    parser.add_argument("--pr-number", default="", help="The GitHub PR number.")
    parser.add_argument("--commit-hash", default="local_commit", help="The commit hash.")
    parser.add_argument(
        "--programs",
        action="extend",
        type=_parse_program_list,
        default=[],
        help="Programs to run (comma-delimited), e.g. fibonacci,sha2-chain.",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> EvalArgs:
    """Parse ``argv`` (the process arguments when None) into :class:`EvalArgs`."""
    namespace = _parser().parse_args(argv)
    return EvalArgs(
        post_to_gh=namespace.post_to_gh,
        github_token=namespace.github_token,
        pr_number=namespace.pr_number,
        commit_hash=namespace.commit_hash,
        programs=list(namespace.programs),
    )