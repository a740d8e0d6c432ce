"""Posting performance results as a pull request comment."""

from __future__ import annotations

import json
import os
from typing import Iterable

import httpx

from .args import EvalArgs

GITHUB_API = "https://api.github.com"
_BOT_LOGIN = "github-actions[bot]"


def _headers(token: str) -> dict:
    return {
        "Authorization": f"Bearer {token}",
        "X-GitHub-Api-Version": "2022-11-28",
        "User-Agent": "zkaleido-perf-bot",
    }


def _is_bot_comment(comment: object) -> bool:
    if not isinstance(comment, dict):
        return False
    user = comment.get("user")
    return isinstance(user, dict) and user.get("login") == _BOT_LOGIN


async def post_to_github_pr(args: EvalArgs, message: str) -> None:
    """Update the bot's existing comment on the PR, or post a new one.

    The repository is taken from the GITHUB_REPOSITORY environment variable.
    """
    repository = os.environ.get("GITHUB_REPOSITORY")
    if not repository:
        raise RuntimeError("GITHUB_REPOSITORY is not set")
    comments_url = f"{GITHUB_API}/repos/{repository}/issues/{args.pr_number}/comments"
    headers = _headers(args.github_token)

    async with httpx.AsyncClient() as client:
        comments_response = await client.get(comments_url, headers=headers)
        comments = comments_response.json()
        bot_comment = next((c for c in comments if _is_bot_comment(c)), None)

        if bot_comment is not None:
            comment_url = bot_comment.get("url")
            if not isinstance(comment_url, str):
                raise RuntimeError("existing comment has no url")
            response = await client.patch(
                comment_url, headers=headers, json={"body": message}
            )
        else:
            response = await client.post(
                comments_url, headers=headers, json={"body": message}
            )

        if not response.is_success:
            action = "update" if bot_comment is not None else "post"
            raise RuntimeError(
                f"Failed to {action} comment: {json.dumps(response.text)}"
            )


def format_github_message(results_text: Iterable[str]) -> str:
    """Join result lines, turning single-asterisk emphasis into bold."""
    return "".join(line.replace("*", "**") + "\n" for line in results_text)