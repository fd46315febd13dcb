"""Regex patterns for path pattern parsing."""

import re

# Pattern matching expressions
token_expr = re.compile(r"(?P<pre>[/.]?)\[(?P<body>[^\[\]]*)\](?P<optional>\?)?")
token_pattern = re.compile(r"^(?:(?P<type>[^:]*):)?(?P<name>.*)$")
name_pattern = re.compile(r"^[a-zA-Z0-9_\-]+$")

WILDCARD = "*"

# Type tag -> regex fragment
match_types = {
    "": r"[^/]+?",
    "i": r"[0-9]+",
    "a": r"[A-Za-z]+",
    "h": r"[0-9A-Fa-f]+",
    "s": r"[0-9A-Za-z_\-]+",
    "*": r".*?",
    "**": r".*",
}
wildcard_types = frozenset(["*", "**"])
