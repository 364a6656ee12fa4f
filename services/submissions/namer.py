"""Canonical upload names: `<owner>_<activity>.<extension>`."""

import re

_WHITESPACE = re.compile(r"\s+")


def _underscored(text: str) -> str:
    return _WHITESPACE.sub("_", text)


def extension_of(filename: str) -> str:
    """Text after the last '.', or '' when the name has no '.'."""
    _, dot, ext = filename.rpartition(".")
    return ext if dot else ""


def canonical_name(owner_display_name: str, activity_name: str, extension: str) -> str:
    """Collapse whitespace runs to '_' and join as owner_activity.extension.

    An empty extension keeps the trailing dot: ("A  B", "C", "") → "A_B_C.".
    """
    return f"{_underscored(owner_display_name)}_{_underscored(activity_name)}.{extension}"
