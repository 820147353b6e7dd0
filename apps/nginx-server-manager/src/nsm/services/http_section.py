"""Locate the http { ... } section of an nginx config and splice blocks into it.

The document is never parsed beyond finding that one section. Both
``apply_server_block`` and ``preview_server_block`` go through
``locate_http_section`` so they always agree on where the section starts
and ends.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from nsm.errors import MalformedDocumentError

log = logging.getLogger(__name__)

BLOCK_SEPARATOR = "\n\n"

_HTTP_OPEN_RE = re.compile(r"http\s*\{")
# First "}" after the opening brace, nested or not.
_FIRST_CLOSE_RE = re.compile(r"(http\s*\{)(.*?)(\})", re.DOTALL)
_SERVER_OPEN_RE = re.compile(r"\bserver\s*\{")

# A leading UTF-8 BOM counts as whitespace.
_TOKEN_BOUNDARY = frozenset(" \t\r\n;{}\ufeff")


class MatchStrategy(str, Enum):
    """How the end of the http section is found.

    ``BALANCED`` counts brace depth, skipping ``#`` comments and quoted
    strings. A quote only opens a string at the start of a token, so a brace
    inside e.g. ``ngx.say("}")`` in a ``*_by_lua_block`` is still counted.
    """

    BALANCED = "balanced"
    FIRST_CLOSE = "first-close"


@dataclass(frozen=True)
class HttpSection:
    """Offsets of the http section inside ``document``.

    ``document[start:body_start]`` is the opening token (``http {``),
    ``document[body_start:body_end]`` the body and
    ``document[body_end:end]`` the closing brace.
    """

    document: str
    start: int
    body_start: int
    body_end: int
    end: int

    @property
    def opening(self) -> str:
        return self.document[self.start : self.body_start]

    @property
    def body(self) -> str:
        return self.document[self.body_start : self.body_end]

    @property
    def closing(self) -> str:
        return self.document[self.body_end : self.end]

    @property
    def before(self) -> str:
        return self.document[: self.start]

    @property
    def after(self) -> str:
        return self.document[self.end :]

    def server_block_count(self) -> int:
        return len(_SERVER_OPEN_RE.findall(self.body))


def _at_token_start(document: str, i: int) -> bool:
    return i == 0 or document[i - 1] in _TOKEN_BOUNDARY


def _line_of(document: str, offset: int) -> int:
    return document.count("\n", 0, offset) + 1


def _locate_balanced(document: str) -> HttpSection:
    """Find the top-level http section, matching braces by depth.

    Braces inside ``#`` comments and quoted strings are not counted.
    """
    n = len(document)
    depth = 0
    start = body_start = -1
    quote = ""
    i = 0
    while i < n:
        ch = document[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = ""
            i += 1
            continue
        if ch == "#" and _at_token_start(document, i):
            newline = document.find("\n", i)
            i = n if newline == -1 else newline
            continue
        if ch in "\"'" and _at_token_start(document, i):
            quote = ch
        elif start < 0 and depth == 0 and ch == "h" and _at_token_start(document, i):
            match = _HTTP_OPEN_RE.match(document, i)
            if match:
                start, body_start = match.start(), match.end()
                depth = 1
                i = body_start
                continue
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if start >= 0 and depth == 0:
                return HttpSection(document, start, body_start, i, i + 1)
            depth = max(depth, 0)
        i += 1

    if start < 0:
        raise MalformedDocumentError("Could not find http section in nginx configuration")
    raise MalformedDocumentError(
        f"http section opened on line {_line_of(document, start)} is never closed"
    )


def _locate_first_close(document: str) -> HttpSection:
    match = _FIRST_CLOSE_RE.search(document)
    if match is None:
        raise MalformedDocumentError("Could not find http section in nginx configuration")
    return HttpSection(document, match.start(1), match.end(1), match.start(3), match.end(3))


def locate_http_section(
    document: str,
    *,
    strategy: MatchStrategy = MatchStrategy.BALANCED,
) -> HttpSection:
    """Return the http section of ``document``.

    ``FIRST_CLOSE`` reproduces the older non-greedy match, which ends the
    section at the first ``}`` after ``http {`` even if that brace closes a
    nested block.
    Raises MalformedDocumentError when no section is found.
    """
    if strategy is MatchStrategy.FIRST_CLOSE:
        section = _locate_first_close(document)
    else:
        section = _locate_balanced(document)
    log.debug(
        "http section (%s) spans offsets %d-%d, body %d-%d",
        strategy.value, section.start, section.end, section.body_start, section.body_end,
    )
    return section


def apply_server_block(
    document: str,
    block: str,
    *,
    strategy: MatchStrategy = MatchStrategy.BALANCED,
) -> str:
    """Return ``document`` with ``block`` appended to the end of the http section.

    Only the located span is rewritten.
    """
    section = locate_http_section(document, strategy=strategy)
    body = section.body.rstrip() + BLOCK_SEPARATOR + block + "\n"
    return document[: section.body_start] + body + document[section.body_end :]


def preview_server_block(
    document: str,
    block: str,
    *,
    strategy: MatchStrategy = MatchStrategy.BALANCED,
) -> str:
    """Render a shortened view of what ``apply_server_block`` would produce.

    Content around the http section is truncated and existing server blocks
    are collapsed into a count; the new block is shown in full.
    """
    section = locate_http_section(document, strategy=strategy)
    parts: list[str] = []

    before = section.before
    before_lines = before.strip().split("\n")
    if len(before_lines) > 3:
        parts.append("...\n")
        parts.append("\n".join(before_lines[-2:]))
        parts.append("\n")
    else:
        parts.append(before)

    parts.append(section.opening)
    parts.append("\n")

    server_count = section.server_block_count()
    if server_count > 0:
        parts.append(f"    # ... ({server_count} existing server block(s)) ...\n")
        parts.append("\n")
    elif section.body.strip():
        parts.append("    # ... (existing http directives) ...\n")
        parts.append("\n")

    parts.append("    # === NEW SERVER BLOCK ===\n")
    parts.append(block)
    parts.append("\n")
    parts.append("    # === END NEW BLOCK ===\n")

    parts.append(section.closing)

    after = section.after
    if after.strip():
        after_lines = after.strip().split("\n")
        if len(after_lines) > 2:
            parts.append("\n")
            parts.append("\n".join(after_lines[:2]))
            parts.append("\n...")
        else:
            parts.append(after)

    return "".join(parts)
