"""Unit tests for repository link parsing."""

import pytest

from src.services.errors import ParseError
from src.services.repo_url import parse_repository_url


@pytest.mark.parametrize(
    "text,owner,name,branch",
    [
        ("https://github.com/octo/demo", "octo", "demo", None),
        ("http://github.com/octo/demo.git", "octo", "demo", None),
        ("https://www.github.com/octo/demo/", "octo", "demo", None),
        ("  https://github.com/octo/demo please", "octo", "demo", None),
        ("https://github.com/octo/demo/tree/dev", "octo", "demo", "dev"),
        ("https://github.com/octo/demo/tree/dev/src/app", "octo", "demo", "dev"),
        ("https://github.com/octo/demo?tab=readme", "octo", "demo", None),
    ],
)
def test_parse_repository_url(text, owner, name, branch):
    ref = parse_repository_url(text)
    assert (ref.owner, ref.name, ref.branch) == (owner, name, branch)
    assert ref.revision is None


@pytest.mark.parametrize(
    "text",
    [
        "hello there",
        "",
        "look at https://github.com/octo/demo",
        "https://gitlab.com/octo/demo",
        "https://github.com/octo",
        "https://github.com/octo/.git",
    ],
)
def test_unrecognized_text_raises_parse_error(text):
    with pytest.raises(ParseError):
        parse_repository_url(text)
