"""Hosts-file grammar.

A hosts file is parsed line by line into one of two shapes:

- ``Comment`` - the line starts with ``#``; everything after it is kept
  verbatim.
- ``Mapping`` - an address token followed by one or more aliases.

There is no third "unknown" shape. A blank or unrecognised line fails the
whole parse so corruption is surfaced instead of being dropped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple, Union

from .exceptions import MalformedLine, ParseError

logger = logging.getLogger("hostman.parsing")

__all__ = [
    "Comment",
    "Mapping",
    "Line",
    "Document",
    "parse_line",
    "parse_document",
    "is_address",
    "is_alias",
]

_IPV4_RUN = re.compile(r"[0-9.]+")
_IPV6_RUN = re.compile(r"[0-9A-Fa-f:]+")
_SEPARATOR = re.compile(r"[ \t]+")
_ALIAS = re.compile(r"\S+")
_ALIAS_LIST = re.compile(r"\S+(?:[ \t]+\S+)*[ \t]*")


@dataclass(frozen=True)
class Comment:
    """A ``#`` line; ``text`` excludes the ``#`` and keeps all spacing."""

    text: str

    def to_text(self) -> str:
        return f"#{self.text}"


@dataclass(frozen=True)
class Mapping:
    """An address with the aliases that resolve to it, in file order."""

    ip: str
    aliases: Tuple[str, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple.
        object.__setattr__(self, "aliases", tuple(self.aliases))
        if not self.aliases:
            raise ValueError("a mapping needs at least one alias")

    def to_text(self) -> str:
        return "\t".join((self.ip, *self.aliases))


Line = Union[Comment, Mapping]


@dataclass
class Document:
    """Parsed hosts file.

    ``lines`` and ``raw`` are index-aligned: ``raw[i]`` is the original text
    of ``lines[i]`` without its line terminator.
    """

    lines: List[Line] = field(default_factory=list)
    raw: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> Line:
        return self.lines[index]

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def mappings(self) -> Iterator[Mapping]:
        for line in self.lines:
            if isinstance(line, Mapping):
                yield line


def _match_address(text: str) -> Tuple[str, int] | None:
    """Return ``(address, end)`` for the address token at the start of *text*.

    IPv4 shape wins when it produces a token followed by a separator;
    otherwise IPv6 shape is tried.
    """
    for pattern, marker in ((_IPV4_RUN, None), (_IPV6_RUN, ":")):
        match = pattern.match(text)
        if match is None:
            continue
        token = match.group(0)
        if marker is None and not any(c.isdigit() for c in token):
            continue
        if marker is not None and marker not in token:
            continue
        if not _SEPARATOR.match(text, match.end()):
            continue
        return token, match.end()
    return None


def is_address(token: str) -> bool:
    """Return ``True`` if *token* on its own is a valid address token."""
    if not token:
        return False
    match = _match_address(token + " ")
    return match is not None and match[1] == len(token)


def is_alias(token: str) -> bool:
    """Return ``True`` if *token* could appear as an alias on a mapping line."""
    return bool(token) and _ALIAS.fullmatch(token) is not None


def parse_line(text: str) -> Line:
    """Parse one line of text (no terminator) into a ``Comment`` or ``Mapping``.

    Raises ``MalformedLine`` if the line matches neither grammar.
    """
    if text.startswith("#"):
        return Comment(text[1:])

    if not text.strip():
        raise MalformedLine("blank line")

    address = _match_address(text)
    if address is None:
        raise MalformedLine(f"expected comment or address, got {text!r}")

    ip, end = address
    rest = text[end:].lstrip(" \t")
    if not rest:
        raise MalformedLine(f"address {ip} has no alias")
    if not _ALIAS_LIST.fullmatch(rest):
        raise MalformedLine(f"invalid alias separator in {rest!r}")

    return Mapping(ip, tuple(_ALIAS.findall(rest)))


def _split_lines(text: str) -> List[str]:
    if not text:
        return []
    parts = text.split("\n")
    # A final "\n" terminates the last line, it does not start a new one.
    if parts[-1] == "":
        parts.pop()
    # CRLF is normalised to LF; the "\r" is not written back.
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def parse_document(text: str) -> Document:
    """Parse a whole hosts file.

    Stops at the first bad line and raises ``ParseError`` with its 1-based
    line number. No partial document is returned.
    """
    document = Document()
    for number, raw in enumerate(_split_lines(text), start=1):
        try:
            line = parse_line(raw)
        except MalformedLine as exc:
            logger.debug(f"Rejecting line {number}: {raw!r}")
            raise ParseError(number, exc.reason, {"line": raw}) from exc
        document.lines.append(line)
        document.raw.append(raw)

    logger.debug(f"📄 Parsed {len(document)} lines")
    return document
