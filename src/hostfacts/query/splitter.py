"""Split dotted fact queries into path segments.

A query such as ``os.release.major`` addresses the ``major`` entry of the
``os.release`` fact. Segments may be quoted to keep dots literal, and
unquoted integer segments index into lists::

    split_key('my.fact."literal.key"')  -> ["my", "fact", "literal.key"]
    split_key("a.1.b")                  -> ["a", 1, "b"]
"""

import re

_SPECIAL = re.compile(r"['\".]")
_SEGMENT = re.compile(r"""\s*"[^"]+"\s*|\s*'[^']+'\s*|[^'".]+""")
_INTEGER = re.compile(r"^[+-]?[0-9]+$")


def _convert(segment: str) -> str | int:
    segment = segment.strip()
    if segment.startswith(('"', "'")):
        return segment[1:-1]
    if _INTEGER.match(segment):
        return int(segment)
    return segment


def split_key(key: str) -> list[str | int]:
    """Split a query into segments.

    A query that cannot be tokenized (unbalanced quotes, empty segments,
    stray characters around quotes) is returned whole as a single segment,
    so it simply fails to match any fact later on.
    """
    if not _SPECIAL.search(key):
        return [key]

    segments: list[str] = []
    pos = 0
    while True:
        match = _SEGMENT.match(key, pos)
        if match is None:
            return [key]
        segments.append(match.group())
        pos = match.end()
        if pos == len(key):
            break
        if key[pos] != ".":
            return [key]
        pos += 1

    return [_convert(segment) for segment in segments]

