"""Request path grammar and title extraction.

Titles are restricted to ASCII letters and digits. A title is later
concatenated into a file name, so this check must run before any
storage call.
"""

import re
from typing import NamedTuple

TITLE_PATTERN = r"[A-Za-z0-9]+"

VALID_PATH = re.compile(rf"/(edit|save|view)/({TITLE_PATTERN})")
VALID_TITLE = re.compile(TITLE_PATTERN)


class ParsedPath(NamedTuple):
    """Action and title extracted from a request path."""

    action: str
    title: str


def parse_path(path: str) -> ParsedPath | None:
    """Split a request path into (action, title).

    Returns None when the path does not match the grammar.
    """
    match = VALID_PATH.fullmatch(path)
    if match is None:
        return None
    return ParsedPath(action=match.group(1), title=match.group(2))


def is_valid_title(title: str) -> bool:
    """Check a bare title against the grammar."""
    return VALID_TITLE.fullmatch(title) is not None
