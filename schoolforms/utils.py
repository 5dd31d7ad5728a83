from typing import Any
from fastapi import Request


def flash(request: Request, message: str, category: str = "info") -> None:
    """
    Adds a flash message to the session to be displayed on the next request.
    """
    messages = request.session.setdefault("_flashes", [])
    messages.append((category, message))
    request.session["_flashes"] = messages


def get_flashed_messages(request: Request, with_categories: bool = True) -> list[Any]:
    """
    Retrieves and clears flash messages from the session.
    """
    messages = request.session.pop("_flashes", [])
    if not with_categories:
        return [message for _, message in messages]
    return messages


def safe_next(target: str | None, default: str) -> str:
    """Only follow same-site relative redirects."""
    if not target or not target.startswith("/") or target.startswith("//"):
        return default
    return target
