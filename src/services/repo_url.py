"""Recognition of GitHub repository links in chat messages."""

import re
from typing import Optional

from ..models import RepositoryRef
from .errors import ParseError

_REPO_URL = re.compile(
    r"^https?://(?:www\.)?github\.com/"
    r"(?P<owner>[^/\s]+)/(?P<name>[^/\s#?]+)"
    r"(?:/tree/(?P<branch>[^/\s#?]+))?"
)


def parse_repository_url(text: str) -> RepositoryRef:
    """Extract owner, name and optional branch from a message.

    The link must start the message. Raises ParseError otherwise.
    """
    match = _REPO_URL.match(text.strip())
    if not match:
        raise ParseError(f"Not a GitHub repository link: {text[:80]!r}")

    name = match.group("name")
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise ParseError("Repository name is empty")

    branch: Optional[str] = match.group("branch")
    return RepositoryRef(
        owner=match.group("owner"),
        name=name,
        branch=branch.rstrip("/") if branch else None,
    )
