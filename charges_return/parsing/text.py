import re

_WHITESPACE = re.compile(r"\s+")


def normalize_spaces(s: str) -> str:
    """Collapse runs of whitespace to one space and trim the edges."""
    return _WHITESPACE.sub(" ", s or "").strip()
